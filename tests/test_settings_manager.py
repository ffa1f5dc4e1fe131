"""
Tests for SettingsManager JSON persistence.
"""

import json

from lunar_coiner.core.settings import SettingsManager, get_config_root
from lunar_coiner.core.settings.settings_manager import APP_DIR_NAME


def test_defaults_when_file_missing(tmp_path):
    manager = SettingsManager(tmp_path / "settings.json")

    assert manager.get("extra_roots") == []
    assert manager.get("last_profile_path") is None
    assert not (tmp_path / "settings.json").exists()


def test_set_persists(tmp_path):
    settings_file = tmp_path / "nested" / "settings.json"
    manager = SettingsManager(settings_file)

    manager.set("last_profile_path", "/saves/default.xml")

    assert json.loads(settings_file.read_text(encoding="utf-8"))[
        "last_profile_path"
    ] == "/saves/default.xml"
    assert SettingsManager(settings_file).get("last_profile_path") == (
        "/saves/default.xml"
    )


def test_set_without_save(tmp_path):
    settings_file = tmp_path / "settings.json"
    manager = SettingsManager(settings_file)

    manager.set("language", "de", auto_save=False)

    assert manager.get("language") == "de"
    assert not settings_file.exists()


def test_corrupt_file_falls_back_to_defaults(tmp_path):
    settings_file = tmp_path / "settings.json"
    settings_file.write_text("{not json", encoding="utf-8")

    manager = SettingsManager(settings_file)

    assert manager.get("extra_roots") == []


def test_non_object_file_falls_back_to_defaults(tmp_path):
    settings_file = tmp_path / "settings.json"
    settings_file.write_text("[1, 2]", encoding="utf-8")

    assert SettingsManager(settings_file).get("extra_roots") == []


def test_partial_file_keeps_other_defaults(tmp_path):
    settings_file = tmp_path / "settings.json"
    settings_file.write_text('{"language": "en"}', encoding="utf-8")

    manager = SettingsManager(settings_file)

    assert manager.get("language") == "en"
    assert manager.get("extra_roots") == []


def test_extra_roots_add_and_remove(tmp_path):
    manager = SettingsManager(tmp_path / "settings.json")

    assert manager.add_extra_root("/mnt/a") is True
    assert manager.add_extra_root("/mnt/a") is False
    assert manager.add_extra_root("/mnt/b") is True
    assert manager.get("extra_roots") == ["/mnt/a", "/mnt/b"]

    assert manager.remove_extra_root("/mnt/a") is True
    assert manager.remove_extra_root("/mnt/a") is False
    assert SettingsManager(tmp_path / "settings.json").get("extra_roots") == [
        "/mnt/b"
    ]


def test_config_root_honours_xdg(monkeypatch, tmp_path):
    monkeypatch.setattr("sys.platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert get_config_root() == tmp_path / APP_DIR_NAME


def test_config_root_windows(monkeypatch, tmp_path):
    monkeypatch.setattr("sys.platform", "win32")
    monkeypatch.setenv("LOCALAPPDATA", str(tmp_path))

    assert get_config_root() == tmp_path / APP_DIR_NAME
