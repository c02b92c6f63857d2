"""Exception types raised by labyrinth generation and lookups."""


class MazeError(Exception):
    """Base class for every labyrinth error."""


class ConfigurationError(MazeError, ValueError):
    """Requested size / corridor widths cannot form a lattice.

    Raised synchronously from ``generate`` and never auto-corrected; callers
    clamp their own inputs (see ``session.reconcile_widths``).
    """


class GenerationInvariantViolation(MazeError, RuntimeError):
    """A structural guarantee failed after carving (e.g. nowhere to put the goal).

    Generation aborts instead of returning a partially labeled grid.
    """


class StaleGridError(MazeError, LookupError):
    """A caller referenced a grid version that has since been regenerated."""

    def __init__(self, requested, current):
        super().__init__(f"grid version {requested} is stale (current={current})")
        self.requested = requested
        self.current = current


__all__ = ["MazeError", "ConfigurationError", "GenerationInvariantViolation", "StaleGridError"]
