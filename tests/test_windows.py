from pathlib import Path

from kiosklauncher.models import Display, LauncherConfig
from kiosklauncher.windows import HIDE_CURSOR_CSS, WindowManager, plan_kiosk, plan_windows


def _displays(n):
    return [Display(id=i, x=i * 1920, y=0, width=1920, height=1080) for i in range(n)]


def _kiosk_config(tmp_path, **kw):
    (tmp_path / "main.html").write_text("<h1>main</h1>", encoding="utf-8")
    (tmp_path / "secondary.html").write_text("<h1>sub</h1>", encoding="utf-8")
    return LauncherConfig(interface=False, address=str(tmp_path), **kw)


def test_two_displays_with_sub_entrance_open_one_window_each(tmp_path):
    cfg = _kiosk_config(tmp_path)
    specs = plan_windows(cfg, _displays(2))
    assert [s.role for s in specs] == ["kiosk", "kiosk"]
    assert [s.display.id for s in specs] == [0, 1]
    assert Path(specs[0].path) == tmp_path / "main.html"
    assert Path(specs[1].path) == tmp_path / "secondary.html"


def test_blank_sub_entrance_or_single_display_gives_one_kiosk(tmp_path):
    cfg = _kiosk_config(tmp_path, sub_entrance="  ")
    specs = plan_windows(cfg, _displays(2))
    assert len(specs) == 1 and specs[0].display.id == 0

    cfg = _kiosk_config(tmp_path)
    specs = plan_windows(cfg, _displays(1))
    assert len(specs) == 1 and Path(specs[0].path).name == "main.html"


def test_interface_on_opens_exactly_one_control_window(tmp_path):
    cfg = LauncherConfig(interface=True, address=str(tmp_path))
    for n in (0, 1, 2, 3):
        specs = plan_windows(cfg, _displays(n))
        assert [s.role for s in specs] == ["control"]


def test_forced_interface_wins_over_kiosk_config(tmp_path):
    specs = plan_windows(_kiosk_config(tmp_path), _displays(2), force_interface=True)
    assert [s.role for s in specs] == ["control"]


def test_no_displays_falls_back_to_origin(tmp_path):
    specs = plan_kiosk(_kiosk_config(tmp_path), [])
    assert len(specs) == 1
    assert (specs[0].display.x, specs[0].display.y) == (0, 0)


def test_missing_entry_file_is_still_planned(tmp_path):
    cfg = LauncherConfig(interface=False, address=str(tmp_path), entrance="gone.html")
    specs = plan_kiosk(cfg, _displays(1))
    assert Path(specs[0].path) == tmp_path / "gone.html"


def test_empty_address_uses_bundled_app_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("KIOSK_APP_DIR", str(tmp_path / "app"))
    specs = plan_kiosk(LauncherConfig(interface=False), _displays(1))
    assert Path(specs[0].path) == tmp_path / "app" / "main.html"


def test_manager_creates_fullscreen_frameless_kiosks(tmp_path, fake_webview):
    backend = fake_webview(screens=2)
    wm = WindowManager(backend)
    displays = wm.list_displays()
    assert [d.x for d in displays] == [0, 1920]

    opened = wm.open(plan_windows(_kiosk_config(tmp_path), displays))
    assert len(opened) == 2 and wm.kiosk_windows == opened
    second = opened[1]
    assert second.kwargs["fullscreen"] is True
    assert second.kwargs["frameless"] is True
    assert second.kwargs["screen"] is backend.screens[1]
    assert second.kwargs["x"] == 1920
    assert second.kwargs["url"] == (tmp_path / "secondary.html").resolve().as_uri()

    second.events.loaded.fire()
    assert second.css == [HIDE_CURSOR_CSS]

    second.destroy()
    assert wm.kiosk_windows == [opened[0]]

    wm.close_kiosk_windows()
    assert opened[0].destroyed
    assert wm.kiosk_windows == []


def test_manager_control_window_carries_api(fake_webview):
    backend = fake_webview(screens=1)
    wm = WindowManager(backend)
    api = object()
    (window,) = wm.open(plan_windows(LauncherConfig(), wm.list_displays()), js_api=api)
    assert wm.control_window is window
    assert window.kwargs["js_api"] is api
    assert "http://localhost:" in window.kwargs["html"]
    assert "{{" not in window.kwargs["html"]

    window.destroy()
    assert wm.control_window is None
