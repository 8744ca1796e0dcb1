import io
import logging
import time
from pathlib import Path
from typing import Dict, List, Tuple

from PIL import Image, UnidentifiedImageError

from .models import StoredFile
from .utils import file_times, is_image_name, is_image_upload

log = logging.getLogger(__name__)

class UploadRejected(Exception):
    """Upload refused before anything was written; maps to a 400 response."""

def ensure_folder(root: Path) -> Dict:
    try:
        if not root.exists():
            log.info("Images folder does not exist, creating %s", root)
            root.mkdir(parents=True, exist_ok=True)
            return {"success": True, "created": True, "message": "Folder created successfully"}
        return {"success": True, "created": False, "message": "Folder already exists"}
    except OSError as e:
        log.error("Error checking/creating images folder %s: %s", root, e)
        return {"success": False, "created": False, "message": f"Error: {e}"}

def folder_status(root: Path) -> Dict:
    try:
        if not root.exists():
            return {"exists": False, "path": str(root), "isDirectory": False,
                    "created": None, "modified": None}
        created, modified = file_times(root)
        return {"exists": True, "path": str(root), "isDirectory": root.is_dir(),
                "created": created, "modified": modified}
    except OSError as e:
        return {"exists": False, "path": str(root), "error": str(e)}

def list_files(root: Path) -> List[StoredFile]:
    items: List[StoredFile] = []
    try:
        entries = sorted(root.iterdir(), key=lambda p: p.name.lower())
    except OSError as e:
        log.error("Error reading file list of %s: %s", root, e)
        return items
    for p in entries:
        if not p.is_file():
            continue
        try:
            created, modified = file_times(p)
            items.append(StoredFile(name=p.name, size=p.stat().st_size,
                                    created=created, modified=modified,
                                    is_image=is_image_name(p.name)))
        except OSError:
            continue
    return items

def list_images(root: Path) -> List[StoredFile]:
    if not root.exists():
        return []
    return [f for f in list_files(root) if f.is_image]

def stored_name(original: str) -> str:
    return f"{int(time.time() * 1000)}_{original}"

def store_upload(root: Path, filename: str, mimetype: str, data: bytes,
                 max_bytes: int) -> Tuple[Path, StoredFile]:
    """Validate one uploaded image and write it under a timestamp-prefixed name."""
    name = Path((filename or "").replace("\\", "/")).name
    if not name or not is_image_upload(name, mimetype):
        raise UploadRejected("Only image files are allowed (jpeg, jpg, png, gif, bmp, webp)")
    if len(data) > max_bytes:
        raise UploadRejected(f"File size exceeds limit (max {max_bytes // (1024 * 1024)}MB)")
    try:
        Image.open(io.BytesIO(data)).verify()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
        raise UploadRejected("Uploaded file is not a valid image.")

    target = root / stored_name(name)
    with open(target, "wb") as f:
        f.write(data)
    log.info("Stored upload %s (%d bytes)", target, len(data))
    created, modified = file_times(target)
    return target, StoredFile(name=target.name, size=len(data), created=created,
                              modified=modified, is_image=True)
