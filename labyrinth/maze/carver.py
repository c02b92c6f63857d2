"""Randomized depth-first carving over the coarse room lattice.

The walk keeps an explicit stack instead of recursing, so large grids never
approach the interpreter recursion limit. Every visited edge is carved into
the fine grid as a rectangle whose thickness is drawn independently per edge.
The result is a spanning tree: ``cols*rows - 1`` corridors, no loops.
"""

from __future__ import annotations

from typing import List, NamedTuple, Set, Tuple

from .cells import CellKind
from .grid import Cells, GridShape

LatticeCoord = Tuple[int, int]

# Neighbour examination order; candidate order feeds rng.choice so it is fixed.
DIRECTIONS: Tuple[LatticeCoord, ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))


class Corridor(NamedTuple):
    a: LatticeCoord
    b: LatticeCoord
    thickness: int

    @property
    def horizontal(self) -> bool:
        """True when the two rooms share a lattice row (corridor runs along x)."""
        return self.a[1] == self.b[1]


class SpanningTreeCarver:
    def __init__(self, shape: GridShape, min_path_width: int, max_path_width: int, rng):
        self.shape = shape
        self.min_path_width = min_path_width
        self.max_path_width = max_path_width
        self.rng = rng

    def corridor_bounds(self, corridor: Corridor) -> Tuple[int, int, int, int]:
        """Inclusive fine-grid rectangle ``(x0, x1, z0, z1)`` covered by a corridor.

        Already clipped to stay strictly inside the border.
        """
        s = self.shape
        (ax, az), (bx, bz) = corridor.a, corridor.b
        tx1, tz1 = s.to_fine(ax), s.to_fine(az)
        tx2, tz2 = s.to_fine(bx), s.to_fine(bz)
        x0, x1 = min(tx1, tx2), max(tx1, tx2)
        z0, z1 = min(tz1, tz2), max(tz1, tz2)
        extra = corridor.thickness - 1
        if tx1 == tx2:
            x1 += extra
        if tz1 == tz2:
            z1 += extra
        return max(x0, 1), min(x1, s.width - 2), max(z0, 1), min(z1, s.height - 2)

    def carve_block(self, cells: Cells, a: LatticeCoord, b: LatticeCoord) -> Corridor:
        thickness = self.rng.randint(self.min_path_width, self.max_path_width)
        corridor = Corridor(a, b, thickness)
        x0, x1, z0, z1 = self.corridor_bounds(corridor)
        for x in range(x0, x1 + 1):
            col = cells[x]
            for z in range(z0, z1 + 1):
                col[z] = CellKind.PATH
        return corridor

    def carve_lone_room(self, cells: Cells) -> None:
        # 1x1 lattice has no edges to carve; open the single room at full width instead
        top = min(self.max_path_width, self.shape.width - 2, self.shape.height - 2)
        for x in range(1, top + 1):
            for z in range(1, top + 1):
                cells[x][z] = CellKind.PATH

    def unvisited_neighbors(self, node: LatticeCoord, visited: Set[LatticeCoord]) -> List[LatticeCoord]:
        cx, cz = node
        out = []
        for dx, dz in DIRECTIONS:
            nx, nz = cx + dx, cz + dz
            if 0 <= nx < self.shape.cols and 0 <= nz < self.shape.rows and (nx, nz) not in visited:
                out.append((nx, nz))
        return out

    def carve(self, cells: Cells) -> List[Corridor]:
        """Walk the lattice from ``(0, 0)`` and carve corridors into ``cells``.

        Returns the carved corridors in visit order.
        """
        if self.shape.cols == 1 and self.shape.rows == 1:
            self.carve_lone_room(cells)
            return []
        corridors: List[Corridor] = []
        start = (0, 0)
        stack = [start]
        visited = {start}
        while stack:
            current = stack[-1]
            candidates = self.unvisited_neighbors(current, visited)
            if not candidates:
                stack.pop()
                continue
            nxt = self.rng.choice(candidates)
            corridors.append(self.carve_block(cells, current, nxt))
            visited.add(nxt)
            stack.append(nxt)
        return corridors


__all__ = ["Corridor", "DIRECTIONS", "LatticeCoord", "SpanningTreeCarver"]
