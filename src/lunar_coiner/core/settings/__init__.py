"""Settings management module for Lunar Coiner."""

from .settings_manager import SettingsManager, get_config_root

__all__ = ["SettingsManager", "get_config_root"]
