"""Wall-mounted light anchors derived from a finished grid.

Walks interior wall cells and counts wall faces that look onto a plain path
cell. Every ``spacing``-th face gets a light; at most one light per wall cell.
"""

from __future__ import annotations

import math
from typing import List, NamedTuple, Tuple

from .cells import CellKind
from .errors import ConfigurationError
from .grid import Grid

DEFAULT_LIGHT_SPACING = 35
LIGHT_HEIGHT = 1.4
FACE_INSET = 0.45

# (dx, dz, yaw)
_FACES = (
    (0, 1, 0.0),
    (0, -1, math.pi),
    (1, 0, math.pi / 2),
    (-1, 0, -math.pi / 2),
)


class LightAnchor(NamedTuple):
    x: int
    z: int
    dx: int
    dz: int
    rotation: float

    @property
    def position(self) -> Tuple[float, float, float]:
        return (
            self.x + 0.5 + self.dx * FACE_INSET,
            LIGHT_HEIGHT,
            self.z + 0.5 + self.dz * FACE_INSET,
        )


def place_wall_lights(grid: Grid, spacing: int = DEFAULT_LIGHT_SPACING) -> List[LightAnchor]:
    if spacing < 1:
        raise ConfigurationError(f"light spacing must be >= 1 (got {spacing})")
    anchors: List[LightAnchor] = []
    faces_seen = 0
    for x in range(1, grid.width - 1):
        for z in range(1, grid.height - 1):
            if grid.kind_at(x, z) is not CellKind.WALL:
                continue
            for dx, dz, yaw in _FACES:
                nx, nz = x + dx, z + dz
                if not grid.in_bounds(nx, nz) or grid.kind_at(nx, nz) is not CellKind.PATH:
                    continue
                faces_seen += 1
                if faces_seen % spacing == 0:
                    anchors.append(LightAnchor(x, z, dx, dz, yaw))
                    break
    return anchors


__all__ = ["DEFAULT_LIGHT_SPACING", "LightAnchor", "place_wall_lights"]
