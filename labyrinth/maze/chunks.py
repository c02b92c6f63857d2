"""Partition wall cells into fixed-size chunks for batched rendering/collision."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Dict, Iterator, List, Tuple

from .cells import CellKind, Coord2D
from .errors import ConfigurationError
from .grid import Grid

ChunkKey = Tuple[int, int]
WallInstance = Tuple[int, int, int]  # (x, layer, z)

DEFAULT_CHUNK_SIZE = 15


class ChunkIndex(Mapping):
    """Read-only ``(cx, cz) -> ((x, z), ...)`` mapping in first-seen key order.

    Each wall cell appears in exactly one chunk. Vertical layers are not
    stored; :meth:`instances` replicates cells per layer on demand.
    """

    def __init__(self, chunks: Dict[ChunkKey, List[Coord2D]], chunk_size: int, layers: int = 1):
        self._chunks: Dict[ChunkKey, Tuple[Coord2D, ...]] = {k: tuple(v) for k, v in chunks.items()}
        self.chunk_size = chunk_size
        self.layers = layers

    def __getitem__(self, key: ChunkKey) -> Tuple[Coord2D, ...]:
        return self._chunks[key]

    def __iter__(self) -> Iterator[ChunkKey]:
        return iter(self._chunks)

    def __len__(self) -> int:
        return len(self._chunks)

    def key_for(self, x: int, z: int) -> ChunkKey:
        return (x // self.chunk_size, z // self.chunk_size)

    def cells(self) -> Iterator[Coord2D]:
        for coords in self._chunks.values():
            yield from coords

    def cell_count(self) -> int:
        return sum(len(v) for v in self._chunks.values())

    def instances(self, key: ChunkKey) -> Iterator[WallInstance]:
        for x, z in self._chunks[key]:
            for layer in range(self.layers):
                yield (x, layer, z)

    def instance_count(self) -> int:
        return self.cell_count() * self.layers

    def __repr__(self) -> str:
        return f"ChunkIndex(chunks={len(self)}, chunk_size={self.chunk_size}, layers={self.layers})"


def partition_walls(grid: Grid, chunk_size: int = DEFAULT_CHUNK_SIZE, layers: int = 1) -> ChunkIndex:
    if chunk_size < 1:
        raise ConfigurationError(f"chunk_size must be >= 1 (got {chunk_size})")
    if layers < 1:
        raise ConfigurationError(f"layers must be >= 1 (got {layers})")
    chunks: Dict[ChunkKey, List[Coord2D]] = {}
    for x, z, kind in grid:
        if kind is not CellKind.WALL:
            continue
        chunks.setdefault((x // chunk_size, z // chunk_size), []).append((x, z))
    return ChunkIndex(chunks, chunk_size, layers)


__all__ = ["ChunkIndex", "ChunkKey", "DEFAULT_CHUNK_SIZE", "WallInstance", "partition_walls"]
