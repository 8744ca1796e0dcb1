import os
import re
import subprocess
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple

IMAGE_TYPES = re.compile(r"jpeg|jpg|png|gif|bmp|webp")
IMAGE_NAME = re.compile(r"\.(jpg|jpeg|png|gif|bmp|webp)$", re.IGNORECASE)

def is_windows() -> bool:
    return os.name == "nt"

def is_frozen() -> bool:
    return bool(getattr(sys, "frozen", False))

def base_dir() -> Path:
    """Directory holding config.json and the bundled app/ folder."""
    if is_frozen():
        return Path(sys.executable).resolve().parent
    return Path.cwd()

def app_dir() -> Path:
    env = os.environ.get("KIOSK_APP_DIR")
    if env:
        return Path(env)
    return base_dir() / "app"

def default_images_root() -> str:
    if is_windows():
        return r"D:\stored_images"
    return str(Path.home() / "stored_images")

def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

def _iso(ts: float) -> str:
    return datetime.fromtimestamp(ts, timezone.utc).isoformat().replace("+00:00", "Z")

def file_times(p: Path) -> Tuple[str, str]:
    """(created, modified) as ISO strings; creation falls back to ctime."""
    st = p.stat()
    born = getattr(st, "st_birthtime", None) or st.st_ctime
    return _iso(born), _iso(st.st_mtime)

def is_image_name(name: str) -> bool:
    return bool(IMAGE_NAME.search(name))

def is_image_upload(filename: str, mimetype: Optional[str]) -> bool:
    """Both the extension and the declared MIME type must name an image type."""
    ext = Path(filename or "").suffix.lower()
    return bool(ext and IMAGE_TYPES.search(ext)) and bool(mimetype and IMAGE_TYPES.search(mimetype))

def open_in_file_manager(path: str) -> None:
    if is_windows():
        os.startfile(path)  # type: ignore[attr-defined]
    elif sys.platform == "darwin":
        subprocess.Popen(["open", path])
    else:
        subprocess.Popen(["xdg-open", path])
