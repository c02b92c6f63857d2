"""Grid allocation and the immutable Grid value handed to consumers.

Cells are stored column-major (``cells[x][z]``) like the rest of the
generation code. During carving the pipeline works on a plain mutable list of
lists; once labeling is done it is frozen into a :class:`Grid`, which is never
patched afterwards. Regeneration produces a brand new Grid.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, NamedTuple, Optional, Sequence, Tuple

from .cells import CellKind, Coord2D
from .errors import ConfigurationError

Cells = List[List[CellKind]]


class GridShape(NamedTuple):
    cell_size: int  # S = max_path_width + 1, fine cells per lattice step
    cols: int
    rows: int
    width: int
    height: int

    def to_fine(self, lattice: int) -> int:
        return lattice * self.cell_size + 1


def _require_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    return value


def compute_shape(width: int, height: int, min_path_width: int, max_path_width: int) -> GridShape:
    width = _require_int("width", width)
    height = _require_int("height", height)
    min_path_width = _require_int("min_path_width", min_path_width)
    max_path_width = _require_int("max_path_width", max_path_width)
    if min_path_width < 1:
        raise ConfigurationError(f"min_path_width must be >= 1 (got {min_path_width})")
    if min_path_width > max_path_width:
        raise ConfigurationError(
            f"min_path_width ({min_path_width}) exceeds max_path_width ({max_path_width})"
        )
    s = max_path_width + 1
    cols = (width - 1) // s
    rows = (height - 1) // s
    if cols < 1 or rows < 1:
        raise ConfigurationError(
            f"{width}x{height} cannot hold a lattice room at path widths "
            f"{min_path_width}..{max_path_width} (needs at least {s + 1} per side)"
        )
    if cols == rows == 1 and max_path_width < 2:
        # The lone room is max_path_width square; one cell cannot hold spawn and goal
        raise ConfigurationError(
            f"{width}x{height} at path widths {min_path_width}..{max_path_width} leaves a "
            f"single-cell room with no space for a goal (max_path_width must be >= 2)"
        )
    return GridShape(s, cols, rows, cols * s + 1, rows * s + 1)


def allocate(width: int, height: int, min_path_width: int, max_path_width: int) -> Tuple[GridShape, Cells]:
    """Return the lattice-aligned shape and an all-wall cell buffer.

    The final extents round *down* to ``cols*S + 1`` by ``rows*S + 1`` and may
    be smaller than requested.
    """
    shape = compute_shape(width, height, min_path_width, max_path_width)
    cells = [[CellKind.WALL for _ in range(shape.height)] for _ in range(shape.width)]
    return shape, cells


class Grid:
    """Read-only labyrinth grid addressed by ``(x, z)``."""

    __slots__ = ("_cells", "_width", "_height", "_version", "_index")

    def __init__(self, cells: Sequence[Sequence[CellKind]], version: int = 0):
        if not cells or not cells[0]:
            raise ValueError("grid must have at least one cell")
        height = len(cells[0])
        if any(len(col) != height for col in cells):
            raise ValueError("grid columns must all have the same height")
        self._cells: Tuple[Tuple[CellKind, ...], ...] = tuple(tuple(col) for col in cells)
        self._width = len(self._cells)
        self._height = height
        self._version = version
        index: Dict[CellKind, List[Coord2D]] = {k: [] for k in CellKind}
        for x in range(self._width):
            for z in range(self._height):
                index[self._cells[x][z]].append((x, z))
        self._index = {k: tuple(v) for k, v in index.items()}

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> Tuple[int, int]:
        return (self._width, self._height)

    @property
    def version(self) -> int:
        return self._version

    def in_bounds(self, x: int, z: int) -> bool:
        return 0 <= x < self._width and 0 <= z < self._height

    def kind_at(self, x: int, z: int) -> CellKind:
        if not self.in_bounds(x, z):
            raise IndexError(f"cell ({x}, {z}) outside {self._width}x{self._height} grid")
        return self._cells[x][z]

    def __getitem__(self, xz: Coord2D) -> CellKind:
        return self.kind_at(*xz)

    def is_walkable(self, x: int, z: int) -> bool:
        return self.kind_at(x, z).walkable

    def cells_of(self, kind: CellKind) -> Tuple[Coord2D, ...]:
        """All coordinates holding ``kind`` in x-outer / z-inner scan order."""
        return self._index[kind]

    def find(self, kind: CellKind) -> Optional[Coord2D]:
        found = self._index[kind]
        return found[0] if found else None

    @property
    def spawn(self) -> Optional[Coord2D]:
        return self.find(CellKind.SPAWN)

    @property
    def goal(self) -> Optional[Coord2D]:
        return self.find(CellKind.GOAL)

    @property
    def chest(self) -> Optional[Coord2D]:
        return self.find(CellKind.CHEST)

    def counts(self) -> Dict[str, int]:
        return {k.value: len(v) for k, v in self._index.items()}

    def __iter__(self) -> Iterator[Tuple[int, int, CellKind]]:
        for x in range(self._width):
            for z in range(self._height):
                yield x, z, self._cells[x][z]

    def columns(self) -> Tuple[Tuple[CellKind, ...], ...]:
        return self._cells

    def rows(self) -> List[List[str]]:
        """Row-major ``rows[z][x]`` of type names, the JSON wire shape."""
        return [[self._cells[x][z].value for x in range(self._width)] for z in range(self._height)]

    def to_text(self) -> str:
        return "\n".join(
            "".join(self._cells[x][z].glyph for x in range(self._width)) for z in range(self._height)
        )

    @classmethod
    def from_text(cls, text: str, version: int = 0) -> "Grid":
        lines = [ln for ln in text.strip().splitlines() if ln.strip()]
        rows = [[CellKind.from_glyph(ch) for ch in ln.strip()] for ln in lines]
        width = len(rows[0])
        if any(len(r) != width for r in rows):
            raise ValueError("ragged grid text")
        return cls([[rows[z][x] for z in range(len(rows))] for x in range(width)], version=version)

    def thaw(self) -> Cells:
        """Mutable copy of the cells, for building a derived grid."""
        return [list(col) for col in self._cells]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._cells == other._cells

    def __hash__(self) -> int:
        return hash(self._cells)

    def __repr__(self) -> str:
        return f"Grid({self._width}x{self._height}, version={self._version})"


__all__ = ["Cells", "Grid", "GridShape", "allocate", "compute_shape"]
