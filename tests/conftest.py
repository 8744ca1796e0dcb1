from __future__ import annotations
import io
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest
from PIL import Image

# Ensure project root import
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from kiosklauncher import create_app


def _jpeg(size: int = 0) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (640, 480), (12, 34, 56)).save(buf, format="JPEG")
    data = buf.getvalue()
    if size > len(data):
        data += b"\0" * (size - len(data))
    return data


def _png(w=60, h=80) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (w, h), (12, 34, 56)).save(buf, format="PNG")
    return buf.getvalue()


class _Event:
    def __init__(self):
        self.handlers = []

    def __iadd__(self, fn):
        self.handlers.append(fn)
        return self

    def fire(self):
        for h in list(self.handlers):
            h()


class FakeWindow:
    def __init__(self, title, **kwargs):
        self.title = title
        self.kwargs = kwargs
        self.events = SimpleNamespace(loaded=_Event(), closed=_Event())
        self.css = []
        self.js = []
        self.dialog_result = None
        self.destroyed = False

    def load_css(self, css):
        self.css.append(css)

    def evaluate_js(self, script):
        self.js.append(script)

    def create_file_dialog(self, dialog_type):
        return self.dialog_result

    def destroy(self):
        self.destroyed = True
        self.events.closed.fire()


class FakeWebview:
    """Stands in for the ``webview`` module: screens, create_window, start."""

    def __init__(self, screens=1):
        self.screens = [
            SimpleNamespace(x=i * 1920, y=0, width=1920, height=1080) for i in range(screens)
        ]
        self.windows = []
        self.started = False

    def create_window(self, title, **kwargs):
        w = FakeWindow(title, **kwargs)
        self.windows.append(w)
        return w

    def start(self, debug=False):
        self.started = True


class FakeProc:
    def __init__(self, argv, **kwargs):
        self.argv = argv
        self.kwargs = kwargs
        self.pid = 4321
        self.killed = False
        self.stdout = io.BytesIO(b"service ready\n")
        self.stderr = io.BytesIO(b"")

    def poll(self):
        return -9 if self.killed else None

    def kill(self):
        self.killed = True

    def wait(self):
        return 0


@pytest.fixture()
def jpeg():
    return _jpeg


@pytest.fixture()
def png():
    return _png


@pytest.fixture()
def fake_webview():
    return FakeWebview


@pytest.fixture()
def fake_proc():
    return FakeProc


@pytest.fixture()
def images_root(tmp_path):
    return tmp_path / "stored_images"


@pytest.fixture()
def app(tmp_path, images_root):
    return create_app(str(images_root), config_file=tmp_path / "config.json")


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def restore_root_logging():
    import logging
    root = logging.getLogger()
    saved, level = root.handlers[:], root.level
    yield root
    for h in root.handlers[:]:
        if h not in saved:
            h.close()
        root.removeHandler(h)
    for h in saved:
        root.addHandler(h)
    root.setLevel(level)
