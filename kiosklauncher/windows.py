from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional

import webview

from . import service_url
from .models import DEFAULT_ENTRANCE, Display, LauncherConfig, WindowSpec
from .templates import render_control_html
from .utils import app_dir

log = logging.getLogger(__name__)

CONTROL_TITLE = "Kiosk Launcher"
CONTROL_SIZE = (800, 600)
HIDE_CURSOR_CSS = "*, html, body, #root { cursor: none !important; }"

# ──────────────────────────────────────────────────────────────────────────────
# Planning (pure)
# ──────────────────────────────────────────────────────────────────────────────

def entry_root(config: LauncherConfig) -> Path:
    return Path(config.address) if config.address else app_dir()

def entry_path(config: LauncherConfig, name: str) -> str:
    p = entry_root(config) / name
    if not p.exists():
        log.warning("Entry file does not exist, window will be blank: %s", p)
    return str(p)

def _primary(displays: List[Display]) -> Display:
    if displays:
        return displays[0]
    # nothing enumerated; assume a primary at the origin
    return Display(id=0, x=0, y=0, width=0, height=0)

def plan_kiosk(config: LauncherConfig, displays: List[Display]) -> List[WindowSpec]:
    primary = _primary(displays)
    entrance = config.entrance or DEFAULT_ENTRANCE
    if len(displays) >= 2 and config.has_sub_entrance():
        log.info("Dual display kiosk: %s | %s", entrance, config.sub_entrance)
        return [
            WindowSpec(role="kiosk", title="Primary Display - Entrance", display=primary,
                       path=entry_path(config, entrance)),
            WindowSpec(role="kiosk", title="Secondary Display - SubEntrance", display=displays[1],
                       path=entry_path(config, config.sub_entrance)),
        ]
    log.info("Single display kiosk: %s", entrance)
    return [WindowSpec(role="kiosk", title="Single Display - Entrance", display=primary,
                       path=entry_path(config, entrance))]

def plan_windows(config: LauncherConfig, displays: List[Display],
                 force_interface: bool = False) -> List[WindowSpec]:
    """Kiosk window(s) when the interface is off, otherwise the single control window."""
    if config.interface is False and not force_interface:
        return plan_kiosk(config, displays)
    return [WindowSpec(role="control", title=CONTROL_TITLE, display=_primary(displays))]

# ──────────────────────────────────────────────────────────────────────────────
# Creation
# ──────────────────────────────────────────────────────────────────────────────

def _to_display(index: int, screen: Any) -> Display:
    return Display(
        id=index,
        x=int(getattr(screen, "x", 0) or 0),
        y=int(getattr(screen, "y", 0) or 0),
        width=int(getattr(screen, "width", 0) or 0),
        height=int(getattr(screen, "height", 0) or 0),
        native=screen,
    )

class WindowManager:
    def __init__(self, backend: Any = webview):
        self.backend = backend
        self.kiosk_windows: List[Any] = []
        self.control_window: Optional[Any] = None

    def list_displays(self) -> List[Display]:
        try:
            screens = list(self.backend.screens)
        except Exception as e:
            log.error("Could not enumerate displays: %s", e)
            screens = []
        displays = [_to_display(i, s) for i, s in enumerate(screens)]
        log.info("Found %d display(s)", len(displays))
        return displays

    def open_kiosk(self, spec: WindowSpec) -> Any:
        d = spec.display
        log.info("Creating kiosk window %r on display %s (%sx%s)", spec.title, d.id, d.width, d.height)
        kwargs = dict(url=Path(spec.path).resolve().as_uri(), fullscreen=True,
                      frameless=True, x=d.x, y=d.y)
        if d.native is not None:
            kwargs["screen"] = d.native
        window = self.backend.create_window(spec.title, **kwargs)

        def _hide_cursor():
            window.load_css(HIDE_CURSOR_CSS)

        def _forget():
            if window in self.kiosk_windows:
                self.kiosk_windows.remove(window)

        window.events.loaded += _hide_cursor
        window.events.closed += _forget
        self.kiosk_windows.append(window)
        return window

    def open_control(self, spec: WindowSpec, js_api: Any = None) -> Any:
        width, height = CONTROL_SIZE
        html = spec.html or render_control_html(service_url())
        window = self.backend.create_window(spec.title, html=html,
                                            js_api=js_api, width=width, height=height)

        def _forget():
            self.control_window = None

        window.events.closed += _forget
        self.control_window = window
        return window

    def open(self, specs: List[WindowSpec], js_api: Any = None) -> List[Any]:
        windows = []
        for spec in specs:
            if spec.role == "kiosk":
                windows.append(self.open_kiosk(spec))
            else:
                windows.append(self.open_control(spec, js_api=js_api))
        return windows

    def close_kiosk_windows(self) -> None:
        for window in list(self.kiosk_windows):
            try:
                window.destroy()
            except Exception as e:
                log.warning("Failed to close kiosk window: %s", e)
        self.kiosk_windows = []
