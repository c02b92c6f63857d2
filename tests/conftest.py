import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from labyrinth import create_app  # noqa: E402
from labyrinth.maze import MazeConfig  # noqa: E402


def pytest_configure(config):  # register custom marker
    config.addinivalue_line("markers", "performance: generation-time guardrail")


@pytest.fixture()
def test_app(tmp_path):
    app = create_app(
        TESTING=True,
        MAZE_CONFIG=MazeConfig(width=21, height=21, min_path_width=1, max_path_width=2, seed=1234),
        MAZE_MAX_SIZE=101,
    )
    app.instance_path = str(tmp_path)
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _quiet_structured_logs(monkeypatch):
    """Keep key=value generation logs out of captured test output."""
    monkeypatch.setenv("LABYRINTH_LOG_LEVEL", "error")
    yield
