"""
Logging setup shared by the launcher shell and the companion service.

Console output at INFO, plus a size-rotated file per process under ``logs/``.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Optional

from .utils import base_dir

MAX_LOG_BYTES = 1024 * 1024
LOG_BACKUPS = 3

def setup_logging(name: str, logs_dir: Optional[Path] = None) -> logging.Logger:
    """Configure the root logger once and return the ``kiosklauncher.<name>`` logger."""
    level = logging.DEBUG if os.environ.get("KIOSK_DEBUG") else logging.INFO

    detailed = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
    )
    simple = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(simple)
    root.addHandler(console)

    logs_dir = Path(logs_dir) if logs_dir else base_dir() / "logs"
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            logs_dir / f"{name}.log", maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUPS, encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed)
        root.addHandler(file_handler)
    except OSError as e:
        root.warning("File logging disabled (%s): %s", logs_dir, e)

    # werkzeug logs every request at INFO
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    return logging.getLogger(f"kiosklauncher.{name}")
