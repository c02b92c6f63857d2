import importlib
import json
import sys

import pytest

# run.py is imported as a module; start_server is patched so nothing binds a port.


@pytest.fixture()
def run_module():
    # Fresh import each time (run.py reads VERSION once at import)
    if "run" in sys.modules:
        del sys.modules["run"]
    return importlib.import_module("run")


@pytest.fixture()
def fake_server(monkeypatch):
    calls = {}

    def fake_start_server(host, port, debug):
        calls.update(host=host, port=port, debug=debug)

    import labyrinth.server as server_mod

    monkeypatch.setattr(server_mod, "start_server", fake_start_server)
    return calls


def test_version_flag_outputs_version(run_module, capsys):
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(["--version"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert run_module.__version__ in out
    assert "Labyrinth Generator" in out


def test_default_command_is_server(run_module):
    assert run_module.parse_args([]).command == "server"


def test_server_main_invokes_start_server(monkeypatch, run_module, fake_server):
    monkeypatch.setenv("PORT", "5555")
    monkeypatch.setenv("HOST", "127.0.0.1")
    assert run_module.main(["server"]) == 0
    assert fake_server == {"host": "127.0.0.1", "port": 5555, "debug": False}


def test_server_flags_override_env(monkeypatch, run_module, fake_server):
    monkeypatch.setenv("PORT", "5555")
    run_module.main(["server", "--port", "6001", "--host", "localhost", "--debug"])
    assert fake_server == {"host": "localhost", "port": 6001, "debug": True}


def test_env_file_argument(monkeypatch, tmp_path, run_module, fake_server):
    monkeypatch.delenv("PORT", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("PORT=6002\n")
    run_module.main(["--env-file", str(env_file), "server"])
    assert fake_server["port"] == 6002


def test_generate_prints_glyphs(run_module, capsys):
    assert run_module.main(["generate", "--size", "21", "--seed", "7", "--no-color"]) == 0
    out = capsys.readouterr().out.strip().splitlines()
    # 21 requested with default widths 2..4: S=5, rounds down to 21
    assert out[0] == "#" * 21
    assert out[1][1] == "S"
    assert out[-1] == "seed=7 size=21x21 widths=2..4"


def test_generate_is_reproducible(run_module, capsys):
    run_module.main(["generate", "--size", "31", "--seed", "moss", "--no-color"])
    first = capsys.readouterr().out
    run_module.main(["generate", "--size", "31", "--seed", "moss", "--no-color"])
    assert capsys.readouterr().out == first


def test_generate_json(run_module, capsys):
    args = ["generate", "--width", "25", "--height", "17", "--min-width", "1", "--max-width", "2"]
    assert run_module.main(args + ["--seed", "3", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["seed"] == 3
    assert (data["width"], data["height"]) == (25, 16)
    assert data["spawn"] == [1, 1]
    assert len(data["grid"]) == 16
    assert data["grid"][1][1] == "spawn"


def test_generate_bad_config_exits_2(run_module, capsys):
    assert run_module.main(["generate", "--size", "41", "--min-width", "5", "--max-width", "3"]) == 2
    assert "[ERROR]" in capsys.readouterr().err


def test_env_file_without_subcommand_runs_server(monkeypatch, tmp_path, run_module, fake_server):
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("HOST", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("PORT=6003\nHOST=127.0.0.2\n")
    assert run_module.main(["--env-file", str(env_file)]) == 0
    assert fake_server == {"host": "127.0.0.2", "port": 6003, "debug": False}


@pytest.mark.parametrize("size", ["3", "4"])
def test_generate_single_cell_room_exits_2(run_module, capsys, size):
    args = ["generate", "--size", size, "--min-width", "1", "--max-width", "1", "--seed", "1"]
    assert run_module.main(args) == 2
    assert "goal" in capsys.readouterr().err
