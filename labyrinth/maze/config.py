import os
from dataclasses import dataclass, replace
from typing import Optional

_FALSEY = {"0", "false", "no", ""}


@dataclass
class MazeConfig:
    width: int = 41
    height: int = 41
    min_path_width: int = 2
    max_path_width: int = 4
    chunk_size: int = 15
    wall_layers: int = 2
    light_spacing: int = 35
    seed: Optional[int] = None
    enable_metrics: bool = True

    @classmethod
    def from_env(cls, environ=None) -> "MazeConfig":
        """Build a config from ``LABYRINTH_*`` environment variables.

        ``LABYRINTH_MAZE_SIZE`` sets both width and height; unset keys keep
        the dataclass defaults. Values are parsed, not validated: range checks
        happen at generation time.
        """
        env = os.environ if environ is None else environ
        cfg = cls()
        int_map = {
            "LABYRINTH_MIN_PATH_WIDTH": "min_path_width",
            "LABYRINTH_MAX_PATH_WIDTH": "max_path_width",
            "LABYRINTH_CHUNK_SIZE": "chunk_size",
            "LABYRINTH_WALL_LAYERS": "wall_layers",
            "LABYRINTH_LIGHT_SPACING": "light_spacing",
            "LABYRINTH_SEED": "seed",
        }
        size = env.get("LABYRINTH_MAZE_SIZE")
        if size:
            cfg.width = cfg.height = int(size)
        for env_key, attr in int_map.items():
            val = env.get(env_key)
            if val not in (None, ""):
                setattr(cfg, attr, int(val))
        if "LABYRINTH_ENABLE_GENERATION_METRICS" in env:
            cfg.enable_metrics = env["LABYRINTH_ENABLE_GENERATION_METRICS"].lower() not in _FALSEY
        return cfg

    def with_overrides(self, **changes) -> "MazeConfig":
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes)


__all__ = ["MazeConfig"]
