"""Labyrinth CLI entry point.

Provides subcommands for running the web server and for generating a single
labyrinth to the terminal. Accepts configuration via flags and environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from pathlib import Path
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()

VERSION_FILE = Path(__file__).resolve().parent / "VERSION"


def _load_version() -> str:
    try:
        return VERSION_FILE.read_text(encoding="utf-8").strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()

# Glyph colours for terminal rendering
_GLYPH_COLORS = {
    "#": Fore.WHITE + Style.DIM,
    ".": Style.NORMAL,
    "S": Fore.CYAN + Style.BRIGHT,
    "G": Fore.MAGENTA + Style.BRIGHT,
    "C": Fore.YELLOW + Style.BRIGHT,
}


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Labyrinth Generator

    Serve the labyrinth HTTP API or print a single generated labyrinth.
    Configuration can be provided via CLI flags or environment variables.
    If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                        Bind address for the web server (default: 0.0.0.0)
          PORT                        Port for the web server (default: 5000)
          LABYRINTH_MAZE_SIZE         Default requested width and height (default: 41)
          LABYRINTH_MIN_PATH_WIDTH    Default minimum corridor width (default: 2)
          LABYRINTH_MAX_PATH_WIDTH    Default maximum corridor width (default: 4)
          LABYRINTH_SEED              Fixed seed for the first labyrinth

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Print a 31x31 labyrinth with corridors 1-3 wide
          python run.py generate --size 31 --min-width 1 --max-width 3

          # Reproduce a layout as JSON
          python run.py generate --seed 1234 --json
        """
    )

    parser = argparse.ArgumentParser(
        prog="Labyrinth",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Labyrinth Generator {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the labyrinth web API",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask labyrinth API server",
    )
    server_parser.add_argument("--host", default=None, help="Bind address (falls back to $HOST, then 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Listen port (falls back to $PORT, then 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Run Flask in debug mode with the reloader")
    server_parser.set_defaults(command="server")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one labyrinth and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description=dedent(
            """
            Generate a labyrinth and print it as glyphs:
              #  wall     .  path     S  spawn     G  goal     C  chest

            The final size may be smaller than requested: it rounds down so the
            grid splits evenly into rooms of (max-width + 1) cells.
            """
        ),
    )
    gen_parser.add_argument("--size", type=int, default=None, help="Requested width and height")
    gen_parser.add_argument("--width", type=int, default=None, help="Requested width (overrides --size)")
    gen_parser.add_argument("--height", type=int, default=None, help="Requested height (overrides --size)")
    gen_parser.add_argument("--min-width", dest="min_width", type=int, default=None, help="Minimum corridor width")
    gen_parser.add_argument("--max-width", dest="max_width", type=int, default=None, help="Maximum corridor width")
    gen_parser.add_argument("--seed", default=None, help="Seed (int or any string); random when omitted")
    gen_parser.add_argument("--json", action="store_true", help="Print JSON instead of glyphs")
    gen_parser.add_argument("--no-color", dest="no_color", action="store_true", help="Disable coloured glyphs")
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    return parser.parse_args(argv)


def _colorize(text: str) -> str:
    out = []
    for ch in text:
        color = _GLYPH_COLORS.get(ch)
        out.append(f"{color}{ch}{Style.RESET_ALL}" if color else ch)
    return "".join(out)


def _run_generate(args) -> int:
    from labyrinth.maze import ConfigurationError, MazeConfig, build_labyrinth, coerce_seed

    cfg = MazeConfig.from_env()
    size = args.size
    cfg = cfg.with_overrides(
        width=args.width if args.width is not None else size,
        height=args.height if args.height is not None else size,
        min_path_width=args.min_width,
        max_path_width=args.max_width,
        seed=coerce_seed(args.seed) if args.seed is not None else None,
    )
    try:
        lab = build_labyrinth(cfg)
    except ConfigurationError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    grid = lab.grid
    if args.json:
        print(
            json.dumps(
                {
                    "seed": lab.seed,
                    "width": grid.width,
                    "height": grid.height,
                    "spawn": grid.spawn,
                    "goal": grid.goal,
                    "chest": grid.chest,
                    "grid": grid.rows(),
                }
            )
        )
        return 0
    text = grid.to_text()
    use_color = not args.no_color and sys.stdout.isatty()
    print(_colorize(text) if use_color else text)
    print(f"seed={lab.seed} size={grid.width}x{grid.height} widths={cfg.min_path_width}..{cfg.max_path_width}")
    return 0


def _print_banner(host: str, port: int, debug: bool) -> None:
    from labyrinth.maze import MazeConfig

    cfg = MazeConfig.from_env()
    use_color = sys.stdout.isatty()

    def paint(color: str, text) -> str:
        return f"{color}{text}{Style.RESET_ALL}" if use_color else str(text)

    rows = [
        ("Version", __version__),
        ("Listening", f"{host}:{port}"),
        ("Debug", "on" if debug else "off"),
        ("Maze", f"{cfg.width}x{cfg.height} widths {cfg.min_path_width}..{cfg.max_path_width}"),
        ("Seed", cfg.seed if cfg.seed is not None else "random"),
    ]
    rule = paint(Fore.MAGENTA, "-" * 44)
    print(rule)
    print("  " + paint(Fore.CYAN + Style.BRIGHT, "Labyrinth API"))
    print(rule)
    for name, val in rows:
        print(f"  {paint(Fore.YELLOW, name + ':'):<12} {paint(Fore.GREEN, val)}")
    print(rule)


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    # An explicit --env-file wins; otherwise pick up ./.env when present
    if args.env_file:
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return _run_generate(args)

    # Global flags alone (e.g. only --env-file) skip the server subparser and its defaults
    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    debug = bool(getattr(args, "debug", False))

    def handle_sigint(sig, frame):
        print("\n[INFO] Labyrinth server shutting down")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Imported late so .env values are in place before the app factory reads them
    from labyrinth.server import start_server
    from labyrinth.logging_utils import log

    _print_banner(host, port, debug)
    log.info(event="startup", mode=mode, host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
