import logging
import os
import shutil
import subprocess
import sys

from PySide6.QtCore import QDir, QFileInfo, QUrl
from PySide6.QtGui import QDesktopServices

log = logging.getLogger(__name__)

# Variables a frozen or sandboxed bundle sets that break host applications
_BUNDLE_ENV_KEYS = frozenset(
    (
        "LD_LIBRARY_PATH",
        "LD_PRELOAD",
        "QT_PLUGIN_PATH",
        "QT_QPA_PLATFORM_PLUGIN_PATH",
        "PYTHONHOME",
        "PYTHONPATH",
    )
)


class PlatformUtils:
    """
    Centralized platform utilities.
    - Windows registry lookups (best-effort)
    - Qt-based open of directories, Flatpak-aware
    """

    @staticmethod
    def read_registry_value(hive: str, key_path: str, value_name: str) -> str | None:
        """
        Read a string value from the Windows registry.

        Args:
            hive: "HKCU" or "HKLM"
            key_path: Registry key below the hive
            value_name: Name of the value to query

        Returns:
            The value as a string, or None if the registry, key or value is
            unavailable.
        """
        if sys.platform != "win32":
            return None
        try:
            import importlib

            winreg = importlib.import_module("winreg")  # type: ignore
        except ImportError:
            return None

        roots = {
            "HKCU": winreg.HKEY_CURRENT_USER,
            "HKLM": winreg.HKEY_LOCAL_MACHINE,
        }
        root = roots.get(hive)
        if root is None:
            return None

        try:
            with winreg.OpenKey(root, key_path, 0, winreg.KEY_READ) as key:
                value, _ = winreg.QueryValueEx(key, value_name)
        except OSError:
            log.debug("Registry value %s\\%s\\%s not found", hive, key_path, value_name)
            return None

        if not value:
            return None
        return str(value)

    @staticmethod
    def is_flatpak() -> bool:
        """True inside a Flatpak sandbox."""
        if sys.platform != "linux":
            return False
        return bool(os.environ.get("FLATPAK_ID")) or os.path.exists("/.flatpak-info")

    @staticmethod
    def open_dir(path: str) -> bool:
        """Show a profile's folder in the desktop file manager."""
        info = QFileInfo(path)
        folder = QDir.cleanPath(
            info.absoluteFilePath() if info.isDir() else info.absolutePath()
        )
        # Sandboxed and frozen Linux builds report success without opening
        sandboxed = sys.platform == "linux" and (
            PlatformUtils._is_frozen() or PlatformUtils.is_flatpak()
        )
        if sandboxed and PlatformUtils._spawn_file_manager(folder):
            return True
        if QDesktopServices.openUrl(QUrl.fromLocalFile(folder)):
            return True
        if not sandboxed and PlatformUtils._spawn_file_manager(folder):
            return True
        log.error("Could not open folder %s", folder)
        return False

    @staticmethod
    def _is_frozen() -> bool:
        return bool(getattr(sys, "frozen", False) or getattr(sys, "_MEIPASS", None))

    @staticmethod
    def _host_env() -> dict:
        """Environment for host tools, without the bundle's library overrides."""
        env = {
            key: value
            for key, value in os.environ.items()
            if key not in _BUNDLE_ENV_KEYS
        }
        env.setdefault("XDG_DATA_DIRS", "/usr/local/share:/usr/share")
        return env

    @staticmethod
    def _spawn_file_manager(folder: str) -> bool:
        """Launch xdg-open or gio on the host; flatpak-spawn when sandboxed."""
        commands = []
        if shutil.which("xdg-open"):
            commands.append(["xdg-open", folder])
        if shutil.which("gio"):
            commands.append(["gio", "open", folder])

        prefix = ["flatpak-spawn", "--host"] if PlatformUtils.is_flatpak() else []
        env = PlatformUtils._host_env()
        for command in commands:
            try:
                subprocess.Popen(
                    prefix + command,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                    env=env,
                    start_new_session=True,
                )
            except OSError as e:
                log.debug("%s failed: %s", command[0], e)
                continue
            return True
        return False
