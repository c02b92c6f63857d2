"""Public labyrinth generation interface.

    from labyrinth.maze import generate, CellKind
    grid = generate(41, 41, 2, 4, seed=7)
    grid.kind_at(1, 1)  # CellKind.SPAWN
"""

from .carver import Corridor, SpanningTreeCarver
from .cells import CHEST, GOAL, PATH, SPAWN, WALL, CellKind
from .chunks import ChunkIndex, partition_walls
from .config import MazeConfig
from .errors import ConfigurationError, GenerationInvariantViolation, MazeError, StaleGridError
from .grid import Grid, GridShape, allocate
from .labeler import label_regions
from .lights import LightAnchor, place_wall_lights
from .pipeline import Labyrinth, build_labyrinth, generate
from .session import MazeSession, coerce_seed, reconcile_widths

__all__ = [
    "CHEST",
    "GOAL",
    "PATH",
    "SPAWN",
    "WALL",
    "CellKind",
    "ChunkIndex",
    "ConfigurationError",
    "Corridor",
    "GenerationInvariantViolation",
    "Grid",
    "GridShape",
    "Labyrinth",
    "LightAnchor",
    "MazeConfig",
    "MazeError",
    "MazeSession",
    "SpanningTreeCarver",
    "StaleGridError",
    "allocate",
    "build_labyrinth",
    "coerce_seed",
    "generate",
    "label_regions",
    "partition_walls",
    "place_wall_lights",
    "reconcile_widths",
]
