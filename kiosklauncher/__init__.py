import os
import time
from pathlib import Path
from typing import Optional, Union

from flask import Flask
from flask_cors import CORS

from .routes import bp as routes_bp
from .settings import load_config, resolve_config_path
from .utils import default_images_root

# Bind only localhost unless overridden
BIND = os.environ.get("BIND", "127.0.0.1")
PORT = int(os.environ.get("PORT", "5260"))
STORED_IMAGES_PATH = os.environ.get("STORED_IMAGES_PATH", default_images_root())
MAX_UPLOAD_BYTES = 10 * 1024 * 1024

def service_url(path: str = "") -> str:
    return f"http://localhost:{PORT}{path}"

def create_app(images_root: Optional[str] = None,
               config_file: Optional[Union[str, Path]] = None) -> Flask:
    app = Flask(__name__)
    CORS(app)
    config_file = Path(config_file) if config_file else resolve_config_path()

    app.config["APP_TITLE"] = "Kiosk Launcher Service"
    app.config["STORED_IMAGES_PATH"] = os.path.abspath(images_root or STORED_IMAGES_PATH)
    app.config["CONFIG_FILE"] = str(config_file)
    # launcher owns the file; the service only reads it once
    app.config["LAUNCHER_CONFIG"] = load_config(config_file, create=False)
    app.config["MAX_UPLOAD_BYTES"] = MAX_UPLOAD_BYTES
    # multipart framing slack; the per-file cap is enforced in storage
    app.config["MAX_CONTENT_LENGTH"] = MAX_UPLOAD_BYTES + 1024 * 1024
    app.config["STARTED_AT"] = time.time()

    app.register_blueprint(routes_bp)
    return app
