"""
project: Labyrinth
module: server.py
License: MIT

Web server bootstrap. Generation events go through the key=value logger in
``labyrinth.logging_utils``; Flask and werkzeug messages go through stdlib
logging, which is routed here to the console and ``<instance>/app.log``.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from labyrinth import create_app

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FILE_NAME = "app.log"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUPS = 3


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    app = create_app()
    _configure_logging(app.instance_path, logging.DEBUG if debug else logging.INFO)
    logging.getLogger("labyrinth.server").info(
        "Serving labyrinth API on %s:%s (maze %sx%s)",
        host,
        port,
        app.config["MAZE_CONFIG"].width,
        app.config["MAZE_CONFIG"].height,
    )
    try:
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Labyrinth server stopped (Ctrl+C)")
        sys.exit(0)


def _configure_logging(log_dir: str, level: int = logging.INFO) -> str:
    """Route stdlib logging to the console and a rotating ``app.log``.

    Existing root handlers are replaced so calling this twice does not double
    every line. Returns the log file path.
    """
    log_path = os.path.join(log_dir, LOG_FILE_NAME)
    os.makedirs(log_dir, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT)
    handlers = [
        RotatingFileHandler(log_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS),
        logging.StreamHandler(),
    ]
    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    return log_path
