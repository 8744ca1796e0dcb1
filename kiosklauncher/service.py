"""Companion HTTP service entry point (run as ``python -m kiosklauncher.service``)."""
import logging
import signal
import sys
from pathlib import Path

from . import BIND, PORT, STORED_IMAGES_PATH, create_app
from .logging_config import setup_logging
from .storage import ensure_folder

log = logging.getLogger("kiosklauncher.service")

def _exit_on_signal(signum, frame):
    log.info("Received signal %s, closing server...", signum)
    sys.exit(0)

def main() -> None:
    setup_logging("service")
    signal.signal(signal.SIGINT, _exit_on_signal)
    signal.signal(signal.SIGTERM, _exit_on_signal)

    app = create_app(STORED_IMAGES_PATH)
    folder = ensure_folder(Path(app.config["STORED_IMAGES_PATH"]))
    log.info("Images folder: %s (%s)", app.config["STORED_IMAGES_PATH"], folder["message"])
    log.info("Service started on http://localhost:%d", PORT)
    app.run(host=BIND, port=PORT, debug=False, use_reloader=False)

if __name__ == "__main__":
    main()
