"""
Caller-facing operations shared by the CLI and the GUI.

Discovery never fails; load and save report failures as short translated
messages instead of raising.
"""

from __future__ import annotations

import logging
from pathlib import Path

from lunar_coiner.core.paths import PathResolver, locate_profiles
from lunar_coiner.core.paths.root_providers import default_providers
from lunar_coiner.core.profiles import FieldEditor, ProfileReadError, ProfileWriteError
from lunar_coiner.core.profiles.field_editor import backup_path_for
from lunar_coiner.core.settings import SettingsManager
from lunar_coiner.domain.models import ProfileFields, ProfileInfo
from lunar_coiner.utils.status import Status
from lunar_coiner.utils.translator import tr

log = logging.getLogger(__name__)

# Counters are stored as unsigned 32-bit values by the game
GAME_COUNTER_MAX = 2**32 - 1

_WRITE_STEP_STATUS = {
    ProfileWriteError.STEP_READ: Status.READ_ERROR,
    ProfileWriteError.STEP_BACKUP: Status.BACKUP_ERROR,
    ProfileWriteError.STEP_WRITE: Status.WRITE_ERROR,
}


def _default_resolver() -> PathResolver:
    return PathResolver(default_providers(settings_manager=SettingsManager()))


def list_profiles(resolver: PathResolver | None = None) -> list[ProfileInfo]:
    """Scan every resolved root and read each profile found."""
    resolver = resolver or _default_resolver()
    profiles: list[ProfileInfo] = []
    seen: set[Path] = set()

    for root in resolver.resolve_roots():
        log.debug("Scanning %s (%s)", root.path, root.source)
        for profile in locate_profiles(root):
            if profile.path in seen:
                continue
            seen.add(profile.path)
            try:
                fields = FieldEditor.extract(profile.path)
            except ProfileReadError as e:
                log.warning("Skipping unreadable profile %s", e)
                continue
            profiles.append(
                ProfileInfo(
                    path=str(profile.path),
                    identifier=profile.identifier,
                    display_name=fields.display_name,
                    coins=fields.coins,
                    total_collected=fields.total_collected,
                )
            )

    log.info("Found %d profile(s)", len(profiles))
    return profiles


def load_profile(path: str | Path) -> tuple[ProfileFields | None, str]:
    """
    Read a single profile document.

    Returns:
        (fields, "") on success, (None, message) on failure
    """
    try:
        return FieldEditor.extract(path), ""
    except ProfileReadError as e:
        log.error("Failed to load profile %s: %s", e.path, e.reason)
        return None, tr("profile_read_failed", path=e.path, reason=e.reason)


def save_profile(path: str | Path, coins: int, total: int) -> tuple[int, str]:
    """
    Write new counters into a profile document.

    Returns:
        (Status code, translated message)
    """
    for label, value in (("coins", coins), ("total", total)):
        if isinstance(value, int) and value > GAME_COUNTER_MAX:
            log.warning(
                "%s=%d for %s exceeds %d; the game may not load it",
                label,
                value,
                path,
                GAME_COUNTER_MAX,
            )

    try:
        backup = FieldEditor.patch(path, coins, total)
    except ValueError as e:
        log.error("Rejected save for %s: %s", path, e)
        return Status.INVALID_DATA, tr("profile_invalid_values", reason=str(e))
    except ProfileWriteError as e:
        status = _WRITE_STEP_STATUS.get(e.step, Status.FAILED)
        log.error(
            "Failed to save profile %s at %s step: %s", e.path, e.step, e.reason
        )
        if e.original_untouched:
            message = tr(
                "profile_save_failed_unchanged", step=e.step, reason=e.reason
            )
        else:
            message = tr(
                "profile_save_failed_restore",
                reason=e.reason,
                backup=backup_path_for(e.path),
            )
        return status, message

    return Status.SUCCESS, tr("profile_saved", coins=coins, total=total, backup=backup)


def debug_search_paths(resolver: PathResolver | None = None) -> list[str]:
    """One human-readable line per candidate root and whether it exists."""
    resolver = resolver or _default_resolver()
    lines = []
    for root, exists in resolver.candidate_roots():
        key = "search_path_found" if exists else "search_path_missing"
        lines.append(tr(key, path=root.path, source=root.source or root.platform))
    return lines


def suggest_total(old_coins: int, old_total: int, new_coins: int) -> int:
    """Total collected grows by any coins gained and never shrinks."""
    return old_total + max(0, new_coins - old_coins)


def follow_total(current_total: int, last_suggested: int, suggested: int) -> int:
    """Adopt a new suggestion only while the total still holds the previous one."""
    return suggested if current_total == last_suggested else current_total
