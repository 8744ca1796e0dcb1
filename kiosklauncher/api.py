"""Calls exposed to the control window as ``window.pywebview.api``.

Every call returns a ``{"success": bool, ...}`` dict and never raises into the page.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional

import webview

from .utils import open_in_file_manager

if TYPE_CHECKING:
    from .launcher import KioskLauncher

log = logging.getLogger(__name__)

class LauncherApi:
    # pywebview skips underscore attributes when exposing the object
    def __init__(self, launcher: "KioskLauncher"):
        self._launcher = launcher

    def get_config(self) -> Dict:
        return {"success": True, "config": self._launcher.config.to_dict()}

    def update_config(self, new_config: Optional[Dict] = None) -> Dict:
        try:
            cfg = self._launcher.update_config(new_config or {})
            log.info("Config updated: %s", cfg.to_dict())
            return {"success": True, "config": cfg.to_dict()}
        except Exception as e:
            log.error("Error updating config: %s", e)
            return {"success": False, "error": str(e)}

    def update_entrance(self, entrance_file: str) -> Dict:
        try:
            cfg = self._launcher.update_config({"entrance": entrance_file})
            log.info("Entrance file updated: %s", cfg.entrance)
            return {"success": True, "config": cfg.to_dict()}
        except Exception as e:
            log.error("Error updating entrance file: %s", e)
            return {"success": False, "error": str(e)}

    def update_sub_entrance(self, sub_entrance_file: str) -> Dict:
        try:
            cfg = self._launcher.update_config({"subEntrance": sub_entrance_file})
            log.info("Sub-entrance file updated: %s", cfg.sub_entrance)
            return {"success": True, "config": cfg.to_dict()}
        except Exception as e:
            log.error("Error updating sub-entrance file: %s", e)
            return {"success": False, "error": str(e)}

    def launch_kiosk(self) -> Dict:
        try:
            opened = self._launcher.launch_kiosk()
            return {"success": True, "message": f"Kiosk mode launched ({len(opened)} window(s))"}
        except Exception as e:
            log.error("Error launching kiosk mode: %s", e)
            return {"success": False, "error": str(e)}

    def select_folder(self) -> Dict:
        window = self._launcher.windows.control_window
        if window is None:
            return {"success": False, "error": "No control window"}
        try:
            picked = window.create_file_dialog(webview.FileDialog.FOLDER)
        except Exception as e:
            log.error("Folder dialog failed: %s", e)
            return {"success": False, "error": str(e)}
        if not picked:
            return {"success": False, "cancelled": True}
        path = picked[0] if isinstance(picked, (list, tuple)) else picked
        result = self.update_config({"address": path})
        if not result["success"]:
            return result
        return {"success": True, "path": path}

    def open_folder(self, path: Optional[str] = None) -> Dict:
        target = path or self._launcher.config.address
        if not target or not Path(target).is_dir():
            return {"success": False, "error": f"Folder does not exist: {target}"}
        try:
            open_in_file_manager(target)
            return {"success": True}
        except Exception as e:
            log.error("Error opening folder %s: %s", target, e)
            return {"success": False, "error": str(e)}

    def get_project(self) -> Dict:
        return {"success": True, "project": self._launcher.load_project()}

    def save_project(self, project: Optional[Dict] = None) -> Dict:
        try:
            self._launcher.save_project(project)
            return {"success": True}
        except Exception as e:
            log.error("Error saving project: %s", e)
            return {"success": False, "error": str(e)}
