import json
import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Dict, Optional, Union

from .models import LauncherConfig, CONFIG_FIELDS
from .utils import base_dir

log = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"
PROJECT_FILENAME = "project.json"

def resolve_config_path() -> Path:
    env = os.environ.get("KIOSK_CONFIG")
    if env:
        return Path(env)
    return base_dir() / CONFIG_FILENAME

def _coerce(data: dict, base: LauncherConfig) -> LauncherConfig:
    changes = {}
    for key, (attr, typ) in CONFIG_FIELDS.items():
        if key not in data:
            continue
        val = data[key]
        if isinstance(val, typ):
            changes[attr] = val
        else:
            log.warning("Ignoring config key %r with unexpected type %s", key, type(val).__name__)
    return replace(base, **changes)

def load_config(config_file: Union[Path, str], create: bool = True) -> LauncherConfig:
    config_file = Path(config_file)
    default = LauncherConfig()
    if not config_file.exists():
        log.info("Config file not found, using defaults: %s", config_file)
        if create:
            try:
                save_config(config_file, default)
                log.info("Default config file created: %s", config_file)
            except OSError as e:
                log.error("Could not create default config file %s: %s", config_file, e)
        return default
    try:
        data = json.loads(config_file.read_text("utf-8"))
    except (OSError, ValueError) as e:
        log.error("Failed to read config file %s: %s", config_file, e)
        return default
    if not isinstance(data, dict):
        log.error("Config file %s does not hold a JSON object", config_file)
        return default
    config = _coerce(data, default)
    log.info("Config loaded: %s", config.to_dict())
    return config

def save_config(config_file: Union[Path, str], config: LauncherConfig) -> None:
    text = json.dumps(config.to_dict(), indent=2, ensure_ascii=False)
    Path(config_file).write_text(text, encoding="utf-8")

def merge_config(config: LauncherConfig, updates: Optional[Dict]) -> LauncherConfig:
    """Shallow-merge a partial record (JSON keys) over ``config``."""
    if not updates:
        return replace(config)
    return _coerce(updates, config)

# --- single project shown by the control window ---

def project_path_for(config_file: Union[Path, str]) -> Path:
    return Path(config_file).with_name(PROJECT_FILENAME)

def load_project(project_file: Path) -> Optional[Dict]:
    try:
        if project_file.exists():
            data = json.loads(project_file.read_text("utf-8"))
            if isinstance(data, dict) and data.get("path"):
                return data
    except (OSError, ValueError) as e:
        log.error("Failed to read project file %s: %s", project_file, e)
    return None

def save_project(project_file: Path, project: Optional[Dict]) -> None:
    if not project:
        if project_file.exists():
            project_file.unlink()
        return
    project_file.write_text(json.dumps(project, indent=2, ensure_ascii=False), encoding="utf-8")
