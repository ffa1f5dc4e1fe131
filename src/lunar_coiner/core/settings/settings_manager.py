"""
Settings manager for handling persistent application settings.
Manages JSON-based configuration storage.
"""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict

log = logging.getLogger(__name__)

APP_DIR_NAME = "lunar-coiner"
SETTINGS_FILE_NAME = "settings.json"


def get_config_root() -> Path:
    """Get the per-user configuration directory based on platform.

    Returns:
        Path to the config directory (e.g., ~/.config/lunar-coiner)
    """
    if sys.platform == "win32":
        localappdata = os.environ.get("LOCALAPPDATA")
        if localappdata:
            return Path(localappdata) / APP_DIR_NAME
        return Path.home() / "AppData" / "Local" / APP_DIR_NAME

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


class SettingsManager:
    """Manages loading and saving of application settings to JSON file."""

    def __init__(self, settings_file: Path | None = None):
        """
        Initialize the settings manager.

        Args:
            settings_file: Path to the JSON settings file; the per-user
                config root is used when omitted
        """
        self.settings_file = settings_file or get_config_root() / SETTINGS_FILE_NAME
        self._settings_cache: Dict[str, Any] = {}
        self.load_settings()

    def load_settings(self) -> Dict[str, Any]:
        """
        Load settings from the JSON file.

        Returns:
            Dictionary containing all settings
        """
        self._settings_cache = self._get_default_settings()
        if not self.settings_file.exists():
            return self._settings_cache

        try:
            with open(self.settings_file, "r", encoding="utf-8") as f:
                loaded = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            log.error("Error loading settings from %s: %s", self.settings_file, e)
            return self._settings_cache

        if isinstance(loaded, dict):
            self._settings_cache.update(loaded)
        else:
            log.error(
                "Ignoring settings file %s: not a JSON object", self.settings_file
            )
        return self._settings_cache

    def save_settings(self) -> bool:
        """
        Save current settings to the JSON file.

        Returns:
            True if successful, False otherwise
        """
        try:
            self.settings_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file, "w", encoding="utf-8") as f:
                json.dump(self._settings_cache, f, indent=4)
            return True
        except OSError as e:
            log.error("Error saving settings to %s: %s", self.settings_file, e)
            return False

    def get(self, key: str, default: Any = None) -> Any:
        return self._settings_cache.get(key, default)

    def set(self, key: str, value: Any, auto_save: bool = True) -> None:
        """
        Set a setting value.

        Args:
            key: Setting key
            value: Setting value
            auto_save: Whether to automatically save to file
        """
        self._settings_cache[key] = value
        if auto_save:
            self.save_settings()

    def add_extra_root(self, root: str) -> bool:
        """Append a custom userdata root; returns False if already present."""
        roots = list(self.get("extra_roots", []) or [])
        if root in roots:
            return False
        roots.append(root)
        self.set("extra_roots", roots)
        return True

    def remove_extra_root(self, root: str) -> bool:
        """Drop a custom userdata root; returns False if it was not configured."""
        roots = list(self.get("extra_roots", []) or [])
        if root not in roots:
            return False
        roots.remove(root)
        self.set("extra_roots", roots)
        return True

    def _get_default_settings(self) -> Dict[str, Any]:
        return {
            "extra_roots": [],
            "last_profile_path": None,
            "language": None,
        }
