"""Special cell placement: spawn, goal and chest.

Labeling only ever converts a PATH cell into a special kind. Walls and
already-special cells are skipped by every search.

The goal search is positional: it takes the first path cell when scanning
back from the far corner. That is usually, but not always, far from spawn in
walking distance.
"""

from __future__ import annotations

from typing import Optional, Tuple

from ..logging_utils import get_logger
from .cells import CellKind, Coord2D
from .errors import GenerationInvariantViolation
from .grid import Cells

log = get_logger("labyrinth.maze.labeler")

SPAWN_POS: Coord2D = (1, 1)


def _extent(cells: Cells) -> Tuple[int, int]:
    return len(cells), len(cells[0])


def place_spawn(cells: Cells) -> Coord2D:
    x, z = SPAWN_POS
    if cells[x][z] is not CellKind.PATH:
        raise GenerationInvariantViolation(f"spawn cell {SPAWN_POS} was not carved ({cells[x][z].value})")
    cells[x][z] = CellKind.SPAWN
    return SPAWN_POS


def place_goal(cells: Cells) -> Coord2D:
    """Descending x (outer) then descending z from ``(w-2, h-2)``."""
    w, h = _extent(cells)
    for x in range(w - 2, 0, -1):
        col = cells[x]
        for z in range(h - 2, 0, -1):
            if col[z] is CellKind.PATH:
                col[z] = CellKind.GOAL
                return (x, z)
    raise GenerationInvariantViolation("no path cell left for the goal")


def place_chest(cells: Cells) -> Optional[Coord2D]:
    """Nearest path cell to the centre by expanding square radius.

    Offsets are visited dx-outer, dz-inner from ``-r`` to ``r``; inner squares
    were already exhausted at smaller radii so only the ring can match.
    Returns None (and places nothing) when no path cell remains.
    """
    w, h = _extent(cells)
    mid_x, mid_z = w // 2, h // 2
    for r in range(min(w, h)):
        for dx in range(-r, r + 1):
            for dz in range(-r, r + 1):
                cx, cz = mid_x + dx, mid_z + dz
                if 0 < cx < w - 1 and 0 < cz < h - 1 and cells[cx][cz] is CellKind.PATH:
                    cells[cx][cz] = CellKind.CHEST
                    return (cx, cz)
    log.warn(event="chest_omitted", width=w, height=h)
    return None


def label_regions(cells: Cells) -> Tuple[Coord2D, Coord2D, Optional[Coord2D]]:
    spawn = place_spawn(cells)
    goal = place_goal(cells)
    chest = place_chest(cells)
    return spawn, goal, chest


__all__ = ["SPAWN_POS", "label_regions", "place_chest", "place_goal", "place_spawn"]
