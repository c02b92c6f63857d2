from labyrinth.maze import MazeConfig, build_labyrinth

KEYS = {
    "lattice_cols",
    "lattice_rows",
    "corridors_carved",
    "tiles_wall",
    "tiles_path",
    "chunks",
    "wall_instances",
    "lights",
    "chest_placed",
    "runtime_ms",
    "phase_ms",
}


def test_metrics_present_and_consistent():
    lab = build_labyrinth(MazeConfig(width=41, height=41, min_path_width=2, max_path_width=4, seed=11))
    m = lab.metrics
    assert set(m) == KEYS
    w, h = lab.grid.size
    assert m["tiles_wall"] + m["tiles_path"] == w * h
    assert m["corridors_carved"] == m["lattice_cols"] * m["lattice_rows"] - 1
    assert m["chunks"] == len(lab.chunks)
    assert m["wall_instances"] == lab.config.wall_layers * m["tiles_wall"]
    assert m["lights"] == len(lab.lights)
    assert m["chest_placed"] is True
    assert set(m["phase_ms"]) == {"allocate", "carve", "label", "chunk", "lights"}
    assert m["runtime_ms"] >= 0


def test_metrics_disabled():
    lab = build_labyrinth(MazeConfig(seed=11, enable_metrics=False))
    assert lab.metrics == {}
    assert lab.grid.spawn == (1, 1)


def test_metrics_value_types():
    from labyrinth.maze.metrics import init_metrics

    assert type(init_metrics()["runtime_ms"]) is int
    m = build_labyrinth(MazeConfig(seed=5)).metrics
    assert type(m["runtime_ms"]) is int
    assert all(type(v) is int for v in m["phase_ms"].values())
