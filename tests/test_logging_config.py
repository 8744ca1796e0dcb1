import logging
import logging.handlers

from kiosklauncher.logging_config import setup_logging


def test_console_and_rotating_file_handlers(tmp_path, restore_root_logging):
    logs_dir = tmp_path / "logs"
    log = setup_logging("launcher", logs_dir=logs_dir)
    assert log.name == "kiosklauncher.launcher"

    handlers = restore_root_logging.handlers
    assert len(handlers) == 2
    assert any(type(h) is logging.StreamHandler for h in handlers)
    rotating = [h for h in handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
    assert len(rotating) == 1
    assert rotating[0].baseFilename == str(logs_dir / "launcher.log")

    log.info("launcher up")
    rotating[0].flush()
    assert "launcher up" in (logs_dir / "launcher.log").read_text("utf-8")
    assert logging.getLogger("werkzeug").level == logging.WARNING


def test_repeat_setup_does_not_stack_handlers(tmp_path, restore_root_logging):
    setup_logging("service", logs_dir=tmp_path)
    setup_logging("service", logs_dir=tmp_path)
    assert len(restore_root_logging.handlers) == 2
