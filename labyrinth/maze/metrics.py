from typing import Dict


def init_metrics() -> Dict[str, int | bool]:
    return {
        'lattice_cols': 0,
        'lattice_rows': 0,
        'corridors_carved': 0,
        'tiles_wall': 0,
        'tiles_path': 0,
        'chunks': 0,
        'wall_instances': 0,
        'lights': 0,
        'chest_placed': False,
        'runtime_ms': 0,
    }
