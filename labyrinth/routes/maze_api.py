"""
project: Labyrinth
module: maze_api.py
License: MIT

Labyrinth generation and read-only query API.

The live labyrinth belongs to the app's MazeSession. Every response carries
its ``version``; read endpoints accept ``?version=`` and answer 409 when the
caller's grid has been replaced by a regeneration.
"""

from flask import Blueprint, Response, current_app, jsonify, request

from labyrinth.logging_utils import get_logger
from labyrinth.maze.errors import ConfigurationError, GenerationInvariantViolation, StaleGridError
from labyrinth.maze.session import MazeSession, coerce_seed, reconcile_widths
from labyrinth.utils.tile_compress import compress_coords

log = get_logger("labyrinth.routes.maze_api")

bp_maze = Blueprint("maze", __name__)


def _session() -> MazeSession:
    return current_app.extensions["maze_session"]


def _int_arg(value, name):
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None


def _first(*values):
    return next(v for v in values if v is not None)


def _labyrinth_payload(lab):
    grid = lab.grid
    payload = {
        "version": lab.version,
        "seed": lab.seed,
        "width": grid.width,
        "height": grid.height,
        "grid": grid.rows(),
        "spawn": list(grid.spawn) if grid.spawn else None,
        "goal": list(grid.goal) if grid.goal else None,
        "chest": list(grid.chest) if grid.chest else None,
        "params": {
            "width": lab.config.width,
            "height": lab.config.height,
            "min_width": lab.config.min_path_width,
            "max_width": lab.config.max_path_width,
        },
    }
    if lab.metrics:
        payload["metrics"] = lab.metrics
    return payload


@bp_maze.errorhandler(ConfigurationError)
def _bad_config(e):
    return jsonify({"error": str(e)}), 400


@bp_maze.errorhandler(StaleGridError)
def _stale(e):
    return jsonify({"error": str(e), "current_version": e.current}), 409


@bp_maze.errorhandler(GenerationInvariantViolation)
def _generation_failed(e):
    log.error(event="generation_invariant_violation", detail=str(e))
    return jsonify({"error": "generation failed", "detail": str(e)}), 500


@bp_maze.route("/api/maze")
def maze_current():
    """
    Return the live labyrinth.
    Response: { 'version', 'seed', 'width', 'height', 'grid': grid[z][x] type names,
                'spawn', 'goal', 'chest', 'params', 'metrics'? }
    """
    return jsonify(_labyrinth_payload(_session().current()))


@bp_maze.route("/api/maze/regenerate", methods=["POST"])
def maze_regenerate():
    """Discard the live labyrinth and generate a new one.

    Body JSON (all optional):
      { "size": int | "width": int, "height": int,
        "min_width": int, "max_width": int, "changed": "min"|"max",
        "seed": <int|str|null> }
    - Omitted params keep the live labyrinth's values.
    - Omitted seed means previous seed + 1 (the plain "regenerate" action).
    - min/max are coupled like the UI sliders before the core sees them.
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("request body must be a JSON object")
    session = _session()
    live_cfg = session.current().config
    size = _int_arg(data.get("size"), "size")
    width = _first(_int_arg(data.get("width"), "width"), size, live_cfg.width)
    height = _first(_int_arg(data.get("height"), "height"), size, live_cfg.height)
    max_size = current_app.config["MAZE_MAX_SIZE"]
    if width > max_size or height > max_size:
        raise ConfigurationError(f"maze size is capped at {max_size}")
    min_w = _first(_int_arg(data.get("min_width"), "min_width"), live_cfg.min_path_width)
    max_w = _first(_int_arg(data.get("max_width"), "max_width"), live_cfg.max_path_width)
    try:
        min_w, max_w = reconcile_widths(min_w, max_w, data.get("changed", "min"))
    except ValueError as e:
        raise ConfigurationError(str(e)) from None
    if "seed" in data and data["seed"] is not None:
        try:
            seed = coerce_seed(data["seed"])
        except TypeError as e:
            raise ConfigurationError(str(e)) from None
    else:
        seed = session.next_seed()
    cfg = live_cfg.with_overrides(
        width=width, height=height, min_path_width=min_w, max_path_width=max_w, seed=seed
    )
    lab = session.regenerate(cfg)
    log.info(event="maze_regenerated", version=lab.version, seed=lab.seed)
    return jsonify(_labyrinth_payload(lab))


@bp_maze.route("/api/maze/cell")
def maze_cell():
    x = _int_arg(request.args.get("x"), "x")
    z = _int_arg(request.args.get("z"), "z")
    if x is None or z is None:
        raise ConfigurationError("x and z are required")
    lab = _session().check(_int_arg(request.args.get("version"), "version"))
    if not lab.grid.in_bounds(x, z):
        raise ConfigurationError(f"cell ({x}, {z}) outside {lab.grid.width}x{lab.grid.height} grid")
    kind = lab.grid.kind_at(x, z)
    return jsonify({"x": x, "z": z, "type": kind.value, "version": lab.version})


@bp_maze.route("/api/maze/chunks")
def maze_chunks():
    lab = _session().check(_int_arg(request.args.get("version"), "version"))
    chunks = lab.chunks
    return jsonify(
        {
            "version": lab.version,
            "chunk_size": chunks.chunk_size,
            "layers": chunks.layers,
            "chunks": [
                {"key": list(key), "count": len(coords), "cells": compress_coords(coords)}
                for key, coords in chunks.items()
            ],
        }
    )


@bp_maze.route("/api/maze/lights")
def maze_lights():
    lab = _session().check(_int_arg(request.args.get("version"), "version"))
    return jsonify(
        {
            "version": lab.version,
            "lights": [
                {"cell": [a.x, a.z], "facing": [a.dx, a.dz], "rotation": a.rotation, "position": list(a.position)}
                for a in lab.lights
            ],
        }
    )


@bp_maze.route("/api/maze/text")
def maze_text():
    lab = _session().current()
    return Response(lab.grid.to_text() + "\n", mimetype="text/plain")
