"""
Profile discovery below a Steam userdata root.

Layout: <root>/<steam id>/632360/remote/UserProfiles/<name>.xml
"""

from __future__ import annotations

import logging
from pathlib import Path

from lunar_coiner.domain.models import InstallRoot, ProfileFile

log = logging.getLogger(__name__)

ROR2_APP_ID = "632360"
PROFILE_SUBPATH = (ROR2_APP_ID, "remote", "UserProfiles")
PROFILE_EXTENSION = ".xml"
BACKUP_SUFFIX = ".bak"


def is_valid_identifier(name: str) -> bool:
    return bool(name) and name.isascii() and name.isdigit()


def is_profile_filename(name: str) -> bool:
    lowered = name.lower()
    return lowered.endswith(PROFILE_EXTENSION) and not lowered.endswith(
        PROFILE_EXTENSION + BACKUP_SUFFIX
    )


def profile_dir(root: Path, identifier: str) -> Path:
    return root.joinpath(identifier, *PROFILE_SUBPATH)


def _list_dir(path: Path) -> list[Path]:
    try:
        return sorted(path.iterdir(), key=lambda p: p.name)
    except OSError as e:
        log.debug("Cannot read directory %s: %s", path, e)
        return []


def locate_profiles(root: InstallRoot | Path) -> list[ProfileFile]:
    """
    Find profile documents below one userdata root.

    Unreadable directories are skipped; the scan never raises.

    Args:
        root: InstallRoot or plain directory path

    Returns:
        ProfileFile entries ordered by identifier, then file name
    """
    root_path = root.path if isinstance(root, InstallRoot) else Path(root)
    profiles: list[ProfileFile] = []

    for account_dir in _list_dir(root_path):
        identifier = account_dir.name
        if not is_valid_identifier(identifier):
            continue
        try:
            if not account_dir.is_dir():
                continue
        except OSError:
            continue

        storage = profile_dir(root_path, identifier)
        for entry in _list_dir(storage):
            if not is_profile_filename(entry.name):
                continue
            try:
                if not entry.is_file():
                    continue
            except OSError as e:
                log.debug("Cannot stat %s: %s", entry, e)
                continue
            profiles.append(ProfileFile(path=entry, identifier=identifier))

    return profiles
