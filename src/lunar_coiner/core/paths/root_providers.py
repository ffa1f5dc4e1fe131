"""
Sources of candidate Steam userdata directories.

Each provider only proposes candidates; existence checks and
de-duplication happen in PathResolver.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Protocol

from lunar_coiner.domain.models import (
    PRIORITY_CONVENTIONAL,
    PRIORITY_CUSTOM,
    PRIORITY_DRIVE_SWEEP,
    PRIORITY_REGISTRY,
    InstallRoot,
)
from lunar_coiner.utils.path_utils import PathUtils
from lunar_coiner.utils.platform_utils import PlatformUtils

log = logging.getLogger(__name__)

# (hive, key, value) tried in order
STEAM_REGISTRY_KEYS = [
    ("HKCU", r"Software\Valve\Steam", "SteamPath"),
    ("HKLM", r"SOFTWARE\WOW6432Node\Valve\Steam", "InstallPath"),
    ("HKLM", r"SOFTWARE\Valve\Steam", "InstallPath"),
]

SWEEP_DRIVE_LETTERS = "DEFGH"
SWEEP_SUBPATHS = [
    ("Steam", "userdata"),
    ("Program Files (x86)", "Steam", "userdata"),
    ("Program Files", "Steam", "userdata"),
    ("SteamLibrary", "userdata"),
]

RegistryReader = Callable[[str, str, str], str | None]


class RootProvider(Protocol):
    def roots(self) -> list[InstallRoot]: ...


class RegistryRootProvider:
    """Steam install directory as recorded in the Windows registry."""

    def __init__(
        self,
        read_value: RegistryReader | None = None,
        is_dir: Callable[[str], bool] = PathUtils.is_dir,
    ):
        self._read_value = read_value or PlatformUtils.read_registry_value
        self._is_dir = is_dir

    def roots(self) -> list[InstallRoot]:
        found: list[InstallRoot] = []
        for hive, key_path, value_name in STEAM_REGISTRY_KEYS:
            steam_dir = self._read_value(hive, key_path, value_name)
            if not steam_dir or not self._is_dir(steam_dir):
                continue
            found.append(
                InstallRoot(
                    path=Path(steam_dir) / "userdata",
                    priority=PRIORITY_REGISTRY,
                    platform="win32",
                    source=f"registry:{hive}",
                )
            )
        return found


class WindowsConventionalProvider:
    def __init__(self, env: Mapping[str, str] | None = None):
        self._env = os.environ if env is None else env

    def roots(self) -> list[InstallRoot]:
        paths: list[Path] = []
        user_profile = self._env.get("USERPROFILE")
        if user_profile:
            paths.append(Path(user_profile) / "Steam" / "userdata")
        paths.append(Path("C:/Program Files (x86)") / "Steam" / "userdata")
        paths.append(Path("C:/Program Files") / "Steam" / "userdata")
        return [
            InstallRoot(p, PRIORITY_CONVENTIONAL, "win32", "conventional")
            for p in paths
        ]


class DriveSweepProvider:
    """Secondary drive letters crossed with the usual Steam locations."""

    def __init__(self, letters: str = SWEEP_DRIVE_LETTERS):
        self._letters = letters

    def roots(self) -> list[InstallRoot]:
        return [
            InstallRoot(
                Path(f"{letter}:/", *subpath),
                PRIORITY_DRIVE_SWEEP,
                "win32",
                f"drive:{letter}",
            )
            for letter in self._letters
            for subpath in SWEEP_SUBPATHS
        ]


class LinuxConventionalProvider:
    SUBPATHS = [
        (".steam", "steam", "userdata"),
        (".local", "share", "Steam", "userdata"),
        # Flatpak Steam
        (
            ".var",
            "app",
            "com.valvesoftware.Steam",
            ".local",
            "share",
            "Steam",
            "userdata",
        ),
        (".steam", "root", "userdata"),
    ]

    def __init__(self, env: Mapping[str, str] | None = None):
        self._env = os.environ if env is None else env

    def roots(self) -> list[InstallRoot]:
        home = self._env.get("HOME")
        if not home:
            return []
        return [
            InstallRoot(
                Path(home, *sub), PRIORITY_CONVENTIONAL, "linux", "conventional"
            )
            for sub in self.SUBPATHS
        ]


class MacConventionalProvider:
    def __init__(self, env: Mapping[str, str] | None = None):
        self._env = os.environ if env is None else env

    def roots(self) -> list[InstallRoot]:
        home = self._env.get("HOME")
        if not home:
            return []
        path = Path(home) / "Library" / "Application Support" / "Steam" / "userdata"
        return [InstallRoot(path, PRIORITY_CONVENTIONAL, "darwin", "conventional")]


class SettingsRootProvider:
    """User-configured roots from the settings file."""

    def __init__(self, settings_manager, platform: str | None = None):
        self.settings_manager = settings_manager
        self._platform = platform or sys.platform

    def roots(self) -> list[InstallRoot]:
        extra = self.settings_manager.get("extra_roots", []) or []
        if not isinstance(extra, list):
            log.warning("Ignoring malformed extra_roots setting: %r", extra)
            return []
        return [
            InstallRoot(Path(p), PRIORITY_CUSTOM, self._platform, "settings")
            for p in extra
            if isinstance(p, str) and p
        ]


def default_providers(
    platform: str | None = None,
    env: Mapping[str, str] | None = None,
    settings_manager=None,
) -> list[RootProvider]:
    """
    Providers for a platform tag, in discovery priority order.

    Args:
        platform: sys.platform-style tag; defaults to the running platform
        env: Environment mapping; defaults to os.environ
        settings_manager: Optional SettingsManager contributing extra roots

    Returns:
        Ordered list of providers
    """
    platform = platform or sys.platform
    providers: list[RootProvider] = []

    if platform == "win32":
        providers.append(RegistryRootProvider())
        providers.append(WindowsConventionalProvider(env))
        providers.append(DriveSweepProvider())
    elif platform == "darwin":
        providers.append(MacConventionalProvider(env))
    else:
        providers.append(LinuxConventionalProvider(env))

    if settings_manager is not None:
        providers.append(SettingsRootProvider(settings_manager, platform))
    return providers
