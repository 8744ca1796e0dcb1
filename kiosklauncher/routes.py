from __future__ import annotations
import logging
import time
from pathlib import Path

import psutil
from flask import Blueprint, current_app, jsonify, request, send_from_directory, url_for
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from .storage import (
    UploadRejected, ensure_folder, folder_status, list_files, list_images, store_upload
)
from .utils import now_iso

log = logging.getLogger(__name__)

bp = Blueprint("kiosk", __name__)

def _root() -> Path:
    return Path(current_app.config["STORED_IMAGES_PATH"])

@bp.get("/status")
def status():
    return jsonify({"status": "running", "timestamp": now_iso(),
                    "message": "Service running normally"})

@bp.get("/config")
def config():
    return jsonify({"success": True, "config": current_app.config["LAUNCHER_CONFIG"].to_dict()})

@bp.get("/shouldShowInterface")
def should_show_interface():
    cfg = current_app.config["LAUNCHER_CONFIG"]
    return jsonify({"success": True, "showInterface": cfg.interface is True,
                    "address": cfg.address})

@bp.get("/folder-status")
@bp.get("/folder-info")
def folder_info():
    return jsonify(folder_status(_root()))

@bp.post("/create-folder")
def create_folder():
    return jsonify(ensure_folder(_root()))

@bp.post("/storeImage")
def store_image():
    root = _root()
    folder = ensure_folder(root)
    if not folder["success"]:
        return jsonify({"success": False, "message": f"Folder creation failed: {folder['message']}",
                        "uploadedFile": None}), 500

    uploaded = None
    file = request.files.get("image")
    if file and file.filename:
        try:
            path, _ = store_upload(root, file.filename, file.mimetype, file.read(),
                                   current_app.config["MAX_UPLOAD_BYTES"])
        except UploadRejected as e:
            log.warning("Upload rejected (%s): %s", file.filename, e)
            return jsonify({"success": False, "message": str(e)}), 400
        except OSError as e:
            log.error("Error processing image upload: %s", e)
            return jsonify({"success": False, "message": f"Error processing upload: {e}",
                            "uploadedFile": None}), 500
        uploaded = {
            "originalName": file.filename,
            "fileName": path.name,
            "path": str(path),
            "size": path.stat().st_size,
            "mimetype": file.mimetype,
            "uploadTime": now_iso(),
        }

    files = list_files(root)
    return jsonify({
        "success": True,
        "message": f"Folder status: {folder['message']}",
        "uploadedFile": uploaded,
        "folderPath": str(root),
        "fileList": [f.to_dict() for f in files],
        "totalFiles": len(files),
    })

@bp.get("/storeImage")
def stored_images():
    root = _root()
    folder = ensure_folder(root)
    if not folder["success"]:
        return jsonify({"success": False, "message": f"Folder access failed: {folder['message']}",
                        "fileList": []}), 500
    files = list_files(root)
    return jsonify({
        "success": True,
        "message": f"Folder status: {folder['message']}",
        "folderPath": str(root),
        "fileList": [f.to_dict(with_kind=True) for f in files],
        "totalFiles": len(files),
        "imageFiles": sum(1 for f in files if f.is_image),
    })

@bp.get("/getImages")
def get_images():
    root = _root()
    if not root.exists():
        return jsonify({"success": True, "message": "Images folder does not exist", "images": []})
    images = [{
        "filename": f.name,
        "url": url_for("kiosk.image", filename=f.name, _external=True),
        "localPath": str(root / f.name),
        "size": f.size,
        "created": f.created,
        "modified": f.modified,
    } for f in list_images(root)]
    return jsonify({"success": True, "message": f"Found {len(images)} images",
                    "images": images, "totalCount": len(images)})

@bp.get("/images/<path:filename>")
def image(filename):
    return send_from_directory(_root(), filename)

@bp.get("/health")
def health():
    mem = psutil.Process().memory_info()
    return jsonify({
        "status": "healthy",
        "uptime": round(time.time() - current_app.config["STARTED_AT"], 3),
        "timestamp": now_iso(),
        "memory": {"rss": mem.rss, "vms": mem.vms},
        "folder": folder_status(_root()),
    })

# --- JSON error responses ---

@bp.app_errorhandler(RequestEntityTooLarge)
def too_large(e):
    limit = current_app.config["MAX_UPLOAD_BYTES"] // (1024 * 1024)
    return jsonify({"success": False, "message": f"File size exceeds limit (max {limit}MB)"}), 400

@bp.app_errorhandler(404)
def not_found(e):
    return jsonify({"error": "Requested resource not found", "path": request.path}), 404

@bp.app_errorhandler(Exception)
def server_error(e):
    if isinstance(e, HTTPException):
        return jsonify({"error": e.name, "message": e.description}), e.code
    log.exception("Server error")
    return jsonify({"error": "Internal server error", "message": str(e)}), 500
