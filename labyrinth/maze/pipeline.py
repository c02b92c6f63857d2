"""Pipeline orchestration for labyrinth generation.

Phases run in a fixed order, each consuming the previous one's output:
allocate -> carve -> label -> (freeze) -> chunk -> lights. Generation is
synchronous and self-contained: all randomness flows through the ``rng``
handed in (or a private ``random.Random(seed)``), never the module-level
``random`` state.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..logging_utils import get_logger
from .carver import Corridor, SpanningTreeCarver
from .cells import CellKind, Coord2D
from .chunks import ChunkIndex, partition_walls
from .config import MazeConfig
from .grid import Grid, allocate
from .labeler import label_regions
from .lights import LightAnchor, place_wall_lights
from .metrics import init_metrics

log = get_logger("labyrinth.maze")

SEED_MAX = 2**31 - 1


def new_seed() -> int:
    return random.randint(1, 1_000_000)


def _make_rng(rng, seed: Optional[int]):
    if rng is not None:
        return rng
    return random.Random(seed)


def generate(
    width: int,
    height: int,
    min_path_width: int,
    max_path_width: int,
    *,
    rng=None,
    seed: Optional[int] = None,
    version: int = 0,
) -> Grid:
    """Generate one labyrinth grid.

    Raises ConfigurationError for sizes/widths that cannot form a lattice and
    GenerationInvariantViolation if labeling finds nowhere to put the goal.
    """
    rng = _make_rng(rng, seed)
    shape, cells = allocate(width, height, min_path_width, max_path_width)
    SpanningTreeCarver(shape, min_path_width, max_path_width, rng).carve(cells)
    label_regions(cells)
    return Grid(cells, version=version)


@dataclass
class Labyrinth:
    """A finished generation: grid plus everything derived from it."""

    config: MazeConfig
    seed: int
    grid: Grid
    chunks: ChunkIndex
    lights: List[LightAnchor]
    corridors: List[Corridor]
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def version(self) -> int:
        return self.grid.version

    @property
    def spawn(self) -> Optional[Coord2D]:
        return self.grid.spawn

    @property
    def goal(self) -> Optional[Coord2D]:
        return self.grid.goal

    @property
    def chest(self) -> Optional[Coord2D]:
        return self.grid.chest


def build_labyrinth(config: MazeConfig, *, rng=None, version: int = 0) -> Labyrinth:
    """Run every generation phase and bundle the results.

    When ``rng`` is omitted a seed is taken from ``config.seed`` (or drawn
    fresh) so the layout can be reproduced from the returned ``seed``.
    """
    seed = config.seed if config.seed is not None else new_seed()
    rng = _make_rng(rng, seed)
    metrics: Dict[str, Any] = init_metrics() if config.enable_metrics else {}
    phase_times: Dict[str, int] = {}

    if config.enable_metrics:
        start = time.perf_counter()

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter(); r = fn(*a, **k); pe = time.perf_counter()
            phase_times[label] = int((pe - ps) * 1000)
            return r
    else:
        def _phase(label, fn, *a, **k):
            return fn(*a, **k)

    shape, cells = _phase(
        'allocate', allocate, config.width, config.height, config.min_path_width, config.max_path_width
    )
    carver = SpanningTreeCarver(shape, config.min_path_width, config.max_path_width, rng)
    corridors = _phase('carve', carver.carve, cells)
    _spawn, _goal, chest = _phase('label', label_regions, cells)
    grid = Grid(cells, version=version)
    chunks = _phase('chunk', partition_walls, grid, config.chunk_size, config.wall_layers)
    lights = _phase('lights', place_wall_lights, grid, config.light_spacing)

    if config.enable_metrics:
        metrics['lattice_cols'] = shape.cols
        metrics['lattice_rows'] = shape.rows
        metrics['corridors_carved'] = len(corridors)
        metrics['tiles_wall'] = len(grid.cells_of(CellKind.WALL))
        metrics['tiles_path'] = grid.width * grid.height - metrics['tiles_wall']
        metrics['chunks'] = len(chunks)
        metrics['wall_instances'] = chunks.instance_count()
        metrics['lights'] = len(lights)
        metrics['chest_placed'] = chest is not None
        metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
        metrics['phase_ms'] = phase_times

    log.info(
        event="maze_generated",
        seed=seed,
        version=version,
        width=grid.width,
        height=grid.height,
        min_width=config.min_path_width,
        max_width=config.max_path_width,
        corridors=len(corridors),
    )
    return Labyrinth(
        config=config,
        seed=seed,
        grid=grid,
        chunks=chunks,
        lights=lights,
        corridors=corridors,
        metrics=metrics,
    )


__all__ = ["Labyrinth", "SEED_MAX", "build_labyrinth", "generate", "new_seed"]
