import random

import pytest

from labyrinth.maze import MazeConfig, MazeSession, StaleGridError, coerce_seed, reconcile_widths
from labyrinth.maze.pipeline import SEED_MAX

SMALL = MazeConfig(width=21, height=21, min_path_width=1, max_path_width=2, seed=50)


def test_lazy_first_generation():
    session = MazeSession(SMALL)
    assert session.version == 0
    lab = session.current()
    assert lab.version == 1
    assert session.version == 1
    assert lab.seed == 50
    assert session.current() is lab


def test_regenerate_bumps_version_and_stales_old_handles():
    session = MazeSession(SMALL)
    first = session.current()
    second = session.regenerate(SMALL.with_overrides(seed=51))
    assert second.version == first.version + 1
    assert session.check(second.version) is second
    assert session.check(None) is second
    with pytest.raises(StaleGridError) as exc:
        session.check(first.version)
    assert exc.value.requested == first.version
    assert exc.value.current == second.version


def test_next_seed_is_previous_plus_one():
    session = MazeSession(SMALL)
    assert session.next_seed() == 50
    session.current()
    assert session.next_seed() == 51
    lab = session.regenerate(SMALL.with_overrides(seed=session.next_seed()))
    assert lab.seed == 51


def test_regenerate_with_same_seed_reproduces_layout():
    session = MazeSession(SMALL)
    a = session.current()
    b = session.regenerate(SMALL)
    assert a.grid == b.grid
    assert a.version != b.version


def test_unseeded_config_gets_a_reported_seed():
    session = MazeSession(MazeConfig(width=21, height=21, min_path_width=1, max_path_width=2))
    lab = session.current()
    assert isinstance(lab.seed, int)
    again = session.regenerate(lab.config.with_overrides(seed=lab.seed))
    assert again.grid == lab.grid


def test_late_build_is_discarded():
    calls = []

    def factory(seed):
        calls.append(seed)
        if len(calls) == 1:
            # a newer request lands while the first build is still running
            session.regenerate(SMALL.with_overrides(seed=99))
        return random.Random(seed)

    session = MazeSession(SMALL, rng_factory=factory)
    result = session.regenerate(SMALL.with_overrides(seed=7))
    assert calls == [7, 99]
    assert result.seed == 99
    assert result.version == 2
    assert session.current() is result


def test_discard_forces_rebuild():
    session = MazeSession(SMALL)
    first = session.current()
    session.discard()
    assert session.current().version == first.version + 1


@pytest.mark.parametrize(
    "lo,hi,changed,expected",
    [
        (2, 4, "min", (2, 4)),
        (5, 4, "min", (5, 5)),
        (5, 4, "max", (4, 4)),
        (3, 3, "max", (3, 3)),
    ],
)
def test_reconcile_widths(lo, hi, changed, expected):
    assert reconcile_widths(lo, hi, changed) == expected


def test_reconcile_widths_rejects_unknown_control():
    with pytest.raises(ValueError):
        reconcile_widths(1, 2, "both")


def test_coerce_seed():
    assert coerce_seed(42) == 42
    assert coerce_seed(" 17 ") == 17
    assert coerce_seed(SEED_MAX + 3) == 3
    assert coerce_seed("hello") == coerce_seed("hello")
    assert 0 <= coerce_seed("hello") < SEED_MAX
    assert isinstance(coerce_seed(None), int)
    assert isinstance(coerce_seed("   "), int)
    with pytest.raises(TypeError):
        coerce_seed(True)
    with pytest.raises(TypeError):
        coerce_seed(1.5)
