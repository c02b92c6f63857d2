"""
project: Labyrinth
module: __init__.py
License: MIT

Flask application factory.

Wires the maze API blueprint to a per-app :class:`MazeSession`. Configuration
comes from environment variables (optionally loaded from ``.env``) with
development defaults; keyword overrides passed to :func:`create_app` win.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

from labyrinth.maze.config import MazeConfig
from labyrinth.maze.session import MazeSession

# Load .env if present so SECRET_KEY / LABYRINTH_* can be supplied
# without exporting shell variables during development.
load_dotenv()


def create_app(**overrides):
    """Return a configured Flask app with its own maze session.

    ``overrides`` are applied to ``app.config`` after the environment, so
    tests can pass e.g. ``MAZE_CONFIG=MazeConfig(width=21, height=21, seed=1)``.
    """
    app = Flask(__name__, instance_relative_config=True)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # Read-only installs can still serve mazes; only file logging needs it
        pass

    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        MAZE_CONFIG=MazeConfig.from_env(),
        MAZE_MAX_SIZE=int(os.getenv("LABYRINTH_MAX_SIZE", "201")),
    )
    app.config.update(overrides)
    app.extensions["maze_session"] = MazeSession(app.config["MAZE_CONFIG"])

    from labyrinth.routes.maze_api import bp_maze

    app.register_blueprint(bp_maze)

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal server error", "error_id": error_id}), 500

    return app


__all__ = ["create_app"]
