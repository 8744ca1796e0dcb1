# kiosklauncher/launch.py
from __future__ import annotations

import logging
import subprocess
import sys
import threading
from pathlib import Path
from typing import Callable, IO, List, Optional

from .utils import base_dir, is_frozen, is_windows

log = logging.getLogger(__name__)
service_log = logging.getLogger("kiosklauncher.service")

LogSink = Callable[[str, str], None]   # (level, message)

# ──────────────────────────────────────────────────────────────────────────────
# Small helpers
# ──────────────────────────────────────────────────────────────────────────────

def _bundled_server() -> Optional[Path]:
    name = "server.exe" if is_windows() else "server"
    p = base_dir() / name
    return p if p.exists() else None

def service_command() -> List[str]:
    """Prefer a bundled server executable in frozen builds, else run the module."""
    if is_frozen():
        exe = _bundled_server()
        if exe:
            log.info("Using bundled service executable: %s", exe)
            return [str(exe)]
        log.info("Bundled service executable not found, falling back to module")
    return [sys.executable, "-m", "kiosklauncher.service"]

def _emit(sink: Optional[LogSink], level: str, message: str) -> None:
    if sink is None:
        return
    try:
        sink(level, message)
    except Exception:
        log.debug("Log sink failed", exc_info=True)

def _pump(stream: Optional[IO], level: str, sink: Optional[LogSink]) -> None:
    if stream is None:
        return
    with stream:
        for raw in iter(stream.readline, b""):
            line = raw.decode("utf-8", errors="replace").rstrip()
            if not line:
                continue
            if level == "error":
                service_log.error("%s", line)
            else:
                service_log.info("%s", line)
            _emit(sink, level, f"Service output: {line}" if level == "info" else f"Service error: {line}")

# ──────────────────────────────────────────────────────────────────────────────
# Public API
# ──────────────────────────────────────────────────────────────────────────────

class ServiceHandle:
    def __init__(self, proc: Optional[subprocess.Popen], sink: Optional[LogSink] = None):
        self.proc = proc
        self.sink = sink
        self._stopped = False

    @property
    def pid(self) -> Optional[int]:
        return getattr(self.proc, "pid", None)

    def running(self) -> bool:
        return self.proc is not None and self.proc.poll() is None

    def stop(self) -> None:
        if self._stopped or self.proc is None:
            return
        self._stopped = True
        if self.proc.poll() is None:
            log.info("Shutting down companion service (PID %s)", self.pid)
            try:
                self.proc.kill()
            except OSError as e:
                log.error("Failed to kill companion service: %s", e)
                return
            _emit(self.sink, "warning", f"Companion service stopped (PID: {self.pid})")

def start_service(on_log: Optional[LogSink] = None,
                  argv: Optional[List[str]] = None,
                  cwd: Optional[str] = None) -> ServiceHandle:
    """
    Spawn the companion service and pump its stdout/stderr into the log and ``on_log``.
    Spawn failures are reported, never raised; the returned handle is then inert.
    """
    argv = argv or service_command()
    cwd = cwd or str(base_dir())
    log.info("Starting companion service: %s", " ".join(argv))
    _emit(on_log, "info", f"Starting companion service: {argv[0]}")

    try:
        proc = subprocess.Popen(argv, cwd=cwd, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
    except (OSError, ValueError) as e:
        log.error("Error starting companion service: %s", e)
        _emit(on_log, "error", f"Error starting service: {e}")
        return ServiceHandle(None, on_log)

    log.info("Companion service started (PID %s)", proc.pid)
    _emit(on_log, "success", f"Companion service started (PID: {proc.pid})")

    threading.Thread(target=_pump, args=(proc.stdout, "info", on_log), daemon=True).start()
    threading.Thread(target=_pump, args=(proc.stderr, "error", on_log), daemon=True).start()

    def _wait():
        code = proc.wait()
        log.info("Companion service exited with code %s", code)
        _emit(on_log, "warning", f"Service process exited with code: {code}")

    threading.Thread(target=_wait, daemon=True).start()
    return ServiceHandle(proc, on_log)
