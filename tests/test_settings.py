import json

from kiosklauncher.models import LauncherConfig
from kiosklauncher.settings import (
    load_config, load_project, merge_config, project_path_for, resolve_config_path,
    save_config, save_project,
)


def test_first_run_creates_defaults(tmp_path):
    cfg_file = tmp_path / "config.json"
    cfg = load_config(cfg_file)
    assert cfg == LauncherConfig()
    assert json.loads(cfg_file.read_text("utf-8")) == {
        "interface": True,
        "address": "",
        "entrance": "main.html",
        "subEntrance": "secondary.html",
    }


def test_load_without_create_leaves_disk_alone(tmp_path):
    cfg_file = tmp_path / "config.json"
    assert load_config(cfg_file, create=False) == LauncherConfig()
    assert not cfg_file.exists()


def test_save_load_round_trip_is_noop_on_disk(tmp_path):
    cfg_file = tmp_path / "config.json"
    save_config(cfg_file, LauncherConfig(interface=False, address=str(tmp_path / "展示"),
                                         entrance="a.html", sub_entrance=""))
    before = cfg_file.read_bytes()
    save_config(cfg_file, load_config(cfg_file))
    assert cfg_file.read_bytes() == before


def test_wrong_types_fall_back_per_key(tmp_path):
    cfg_file = tmp_path / "config.json"
    cfg_file.write_text(json.dumps({"interface": "no", "address": "/srv/app",
                                    "entrance": 5, "extra": 1}), encoding="utf-8")
    cfg = load_config(cfg_file)
    assert cfg.interface is True
    assert cfg.address == "/srv/app"
    assert cfg.entrance == "main.html"


def test_malformed_file_uses_defaults(tmp_path):
    cfg_file = tmp_path / "config.json"
    cfg_file.write_text("{not json", encoding="utf-8")
    assert load_config(cfg_file) == LauncherConfig()
    cfg_file.write_text("[1, 2]", encoding="utf-8")
    assert load_config(cfg_file) == LauncherConfig()


def test_merge_config_is_shallow_and_typed():
    base = LauncherConfig()
    merged = merge_config(base, {"interface": False, "subEntrance": "", "address": None})
    assert merged.interface is False
    assert merged.sub_entrance == ""
    assert not merged.has_sub_entrance()
    assert merged.address == ""
    assert base.interface is True
    assert merge_config(base, None) == base


def test_project_file_lifecycle(tmp_path):
    project_file = project_path_for(tmp_path / "config.json")
    assert project_file.name == "project.json"
    assert load_project(project_file) is None

    save_project(project_file, {"id": 1, "name": "demo", "path": "/srv/demo"})
    assert load_project(project_file)["name"] == "demo"

    save_project(project_file, None)
    assert not project_file.exists()


def test_config_path_follows_env(tmp_path, monkeypatch):
    target = tmp_path / "elsewhere" / "kiosk.json"
    monkeypatch.setenv("KIOSK_CONFIG", str(target))
    assert resolve_config_path() == target

    monkeypatch.delenv("KIOSK_CONFIG")
    monkeypatch.chdir(tmp_path)
    assert resolve_config_path() == tmp_path / "config.json"
