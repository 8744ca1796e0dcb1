from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import webview

from .api import LauncherApi
from .launch import ServiceHandle, start_service
from .logging_config import setup_logging
from .models import LauncherConfig
from .settings import (
    load_config, load_project, merge_config, project_path_for,
    resolve_config_path, save_config, save_project,
)
from .windows import WindowManager, plan_kiosk, plan_windows

log = logging.getLogger(__name__)

class KioskLauncher:
    """Owns the in-memory config, the windows and the companion service."""

    def __init__(self, config_file: Optional[Union[str, Path]] = None,
                 backend: Any = None, service_argv: Optional[List[str]] = None):
        self.config_file = Path(config_file) if config_file else resolve_config_path()
        self.project_file = project_path_for(self.config_file)
        self.config: LauncherConfig = load_config(self.config_file)
        self.backend = backend or webview
        self.windows = WindowManager(self.backend)
        self.service: Optional[ServiceHandle] = None
        self.service_argv = service_argv
        self.api = LauncherApi(self)

    # --- config ---

    def update_config(self, updates: Dict) -> LauncherConfig:
        cfg = merge_config(self.config, updates)
        save_config(self.config_file, cfg)
        self.config = cfg
        return cfg

    def load_project(self) -> Optional[Dict]:
        return load_project(self.project_file)

    def save_project(self, project: Optional[Dict]) -> None:
        save_project(self.project_file, project)
        if project and project.get("path"):
            self.update_config({"address": project["path"]})

    # --- windows ---

    def create_windows(self, force_interface: bool = False) -> List[Any]:
        displays = self.windows.list_displays()
        specs = plan_windows(self.config, displays, force_interface=force_interface)
        return self.windows.open(specs, js_api=self.api)

    def launch_kiosk(self) -> List[Any]:
        log.info("Launching kiosk mode")
        displays = self.windows.list_displays()
        return self.windows.open(plan_kiosk(self.config, displays))

    def forward_log(self, level: str, message: str) -> None:
        window = self.windows.control_window
        if window is None:
            return
        window.evaluate_js(
            f"window.onServerLog && window.onServerLog({json.dumps(level)}, {json.dumps(message)})"
        )

    # --- lifecycle ---

    def start_service(self) -> ServiceHandle:
        self.service = start_service(on_log=self.forward_log, argv=self.service_argv)
        return self.service

    def shutdown(self) -> None:
        if self.service is not None:
            self.service.stop()
        self.windows.close_kiosk_windows()

    def run(self, debug: bool = False, force_interface: bool = False) -> None:
        self.start_service()
        self.create_windows(force_interface=force_interface)
        try:
            self.backend.start(debug=debug)
        finally:
            self.shutdown()

def main(argv: Optional[List[str]] = None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    setup_logging("launcher")
    launcher = KioskLauncher()
    log.info("Launcher starting (interface=%s)", launcher.config.interface)
    # --interface reopens the control window when the config turned it off
    launcher.run(debug="--dev" in argv, force_interface="--interface" in argv)
