"""Cell kinds for the labyrinth grid plus their glyph / JSON names."""

from enum import Enum
from typing import Dict, Tuple

Coord2D = Tuple[int, int]


class CellKind(Enum):
    WALL = "wall"
    PATH = "path"
    SPAWN = "spawn"
    GOAL = "goal"
    CHEST = "chest"

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]

    @property
    def walkable(self) -> bool:
        return self is not CellKind.WALL

    @classmethod
    def from_glyph(cls, ch: str) -> "CellKind":
        try:
            return _BY_GLYPH[ch]
        except KeyError:
            raise ValueError(f"unknown cell glyph {ch!r}") from None


_GLYPHS: Dict[CellKind, str] = {
    CellKind.WALL: "#",
    CellKind.PATH: ".",
    CellKind.SPAWN: "S",
    CellKind.GOAL: "G",
    CellKind.CHEST: "C",
}
_BY_GLYPH = {g: k for k, g in _GLYPHS.items()}


WALL = CellKind.WALL
PATH = CellKind.PATH
SPAWN = CellKind.SPAWN
GOAL = CellKind.GOAL
CHEST = CellKind.CHEST

__all__ = ["CellKind", "Coord2D", "WALL", "PATH", "SPAWN", "GOAL", "CHEST"]
