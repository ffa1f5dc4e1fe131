from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

PRIORITY_REGISTRY = 0
PRIORITY_CONVENTIONAL = 1
PRIORITY_DRIVE_SWEEP = 2
PRIORITY_CUSTOM = 3

DEFAULT_DISPLAY_NAME = "Unknown"


@dataclass(frozen=True)
class InstallRoot:
    path: Path
    priority: int
    platform: str
    source: str = ""


@dataclass(frozen=True)
class ProfileFile:
    path: Path
    identifier: str


@dataclass(frozen=True)
class ProfileFields:
    display_name: str = DEFAULT_DISPLAY_NAME
    coins: int = 0
    total_collected: int = 0


@dataclass(frozen=True)
class ProfileInfo:
    path: str
    identifier: str
    display_name: str
    coins: int
    total_collected: int
