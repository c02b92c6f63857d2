import math

import pytest

from labyrinth.maze import CellKind, ConfigurationError, Grid, generate
from labyrinth.maze.lights import LightAnchor, place_wall_lights

# (2,1) is the only interior wall; it faces path on +z, +x and -x
PILLAR = """
#####
#.#.#
#...#
#####
"""


def test_first_face_gets_the_light():
    anchors = place_wall_lights(Grid.from_text(PILLAR), spacing=1)
    assert anchors == [LightAnchor(2, 1, 0, 1, 0.0)]
    assert anchors[0].position == pytest.approx((2.5, 1.4, 1.95))


def test_spacing_counts_faces_across_cells():
    second = place_wall_lights(Grid.from_text(PILLAR), spacing=2)
    assert [(a.dx, a.dz) for a in second] == [(1, 0)]
    assert second[0].rotation == pytest.approx(math.pi / 2)

    third = place_wall_lights(Grid.from_text(PILLAR), spacing=3)
    assert [(a.dx, a.dz) for a in third] == [(-1, 0)]
    assert third[0].rotation == pytest.approx(-math.pi / 2)
    assert third[0].position == pytest.approx((2.05, 1.4, 1.5))


def test_special_cells_are_not_lit_faces():
    grid = Grid.from_text(PILLAR.replace("#...#", "#.S.#"))
    anchors = place_wall_lights(grid, spacing=1)
    assert [(a.dx, a.dz) for a in anchors] == [(1, 0)]
    assert place_wall_lights(grid, spacing=3) == []


def test_at_most_one_light_per_wall_cell():
    grid = generate(41, 41, 1, 3, seed=19)
    anchors = place_wall_lights(grid, spacing=1)
    cells = [(a.x, a.z) for a in anchors]
    assert len(cells) == len(set(cells))
    for a in anchors:
        assert grid.kind_at(a.x, a.z) is CellKind.WALL
        assert grid.kind_at(a.x + a.dx, a.z + a.dz) is CellKind.PATH
        assert 0 < a.x < grid.width - 1 and 0 < a.z < grid.height - 1


def test_wider_spacing_means_fewer_lights():
    grid = generate(41, 41, 1, 3, seed=19)
    dense = place_wall_lights(grid, spacing=2)
    sparse = place_wall_lights(grid, spacing=35)
    assert len(sparse) < len(dense)


@pytest.mark.parametrize("spacing", [0, -4])
def test_spacing_must_be_positive(spacing):
    with pytest.raises(ConfigurationError):
        place_wall_lights(Grid.from_text(PILLAR), spacing=spacing)
