"""
Field-level access to Risk of Rain 2 profile documents.

Fields are located with localized patterns rather than an XML parse, so a
document that is malformed elsewhere still yields its values, and a patch
leaves every byte outside the targeted elements exactly as it was.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
import tempfile
from pathlib import Path

from lunar_coiner.core.paths.profile_locator import BACKUP_SUFFIX
from lunar_coiner.core.profiles.errors import ProfileReadError, ProfileWriteError
from lunar_coiner.domain.models import DEFAULT_DISPLAY_NAME, ProfileFields

log = logging.getLogger(__name__)

ENCODING = "utf-8"

NAME_TAG = "name"
COINS_TAG = "coins"
TOTAL_TAG = "totalCollectedCoins"

_DIGITS = re.compile(r"[0-9]+")


def _element_pattern(tag: str) -> re.Pattern[str]:
    return re.compile(
        rf"(?P<open><{tag}>)(?P<body>.*?)(?P<close></{tag}>)", re.DOTALL
    )


_PATTERNS = {tag: _element_pattern(tag) for tag in (NAME_TAG, COINS_TAG, TOTAL_TAG)}


def backup_path_for(path: Path | str) -> Path:
    path = Path(path)
    return path.with_name(path.name + BACKUP_SUFFIX)


def read_text(path: Path) -> str:
    # newline="" keeps CRLF intact so untouched regions round-trip byte for byte
    with open(path, "r", encoding=ENCODING, newline="") as f:
        return f.read()


def write_text(path: Path, text: str) -> None:
    with open(path, "w", encoding=ENCODING, newline="") as f:
        f.write(text)


def find_field(text: str, tag: str) -> str | None:
    """Content of the first <tag>...</tag> pair, or None if there is none."""
    match = _PATTERNS[tag].search(text)
    return match.group("body") if match else None


def parse_counter(body: str | None) -> int:
    if body is None or not _DIGITS.fullmatch(body):
        return 0
    return int(body)


def replace_field(text: str, tag: str, value: str) -> str:
    """Replace the content of the first <tag> pair; no-op if the pair is absent."""
    return _PATTERNS[tag].sub(
        lambda m: m.group("open") + value + m.group("close"), text, count=1
    )


def _validate_counter(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")


class FieldEditor:
    """
    Extracts and patches the name/coins/total fields of a profile document.
    """

    @staticmethod
    def extract(path: Path | str) -> ProfileFields:
        """
        Read the profile fields from a document.

        Each field defaults on its own when missing or unparsable.

        Args:
            path: Profile document

        Returns:
            ProfileFields

        Raises:
            ProfileReadError: if the file cannot be opened or decoded
        """
        path = Path(path)
        try:
            text = read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            raise ProfileReadError(path, str(e)) from e

        name = find_field(text, NAME_TAG)
        return ProfileFields(
            display_name=DEFAULT_DISPLAY_NAME if name is None else name,
            coins=parse_counter(find_field(text, COINS_TAG)),
            total_collected=parse_counter(find_field(text, TOTAL_TAG)),
        )

    @staticmethod
    def patch(path: Path | str, new_coins: int, new_total: int) -> Path:
        """
        Rewrite the coins and total counters in place.

        The unmodified document is copied to <path>.bak before the original
        is touched.

        Args:
            path: Profile document
            new_coins: New lunar coin count
            new_total: New total collected count

        Returns:
            Path of the backup copy

        Raises:
            ValueError: if a counter is negative or not an integer
            ProfileWriteError: if the read, backup or write step fails
        """
        _validate_counter("coins", new_coins)
        _validate_counter("total", new_total)
        path = Path(path)

        try:
            original = read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            raise ProfileWriteError(path, ProfileWriteError.STEP_READ, str(e)) from e

        backup = backup_path_for(path)
        try:
            write_text(backup, original)
        except OSError as e:
            raise ProfileWriteError(
                path, ProfileWriteError.STEP_BACKUP, f"{backup}: {e}"
            ) from e
        log.debug("Backed up %s to %s", path, backup)

        updated = replace_field(original, COINS_TAG, str(new_coins))
        updated = replace_field(updated, TOTAL_TAG, str(new_total))

        try:
            _replace_contents(path, updated)
        except OSError as e:
            raise ProfileWriteError(path, ProfileWriteError.STEP_WRITE, str(e)) from e

        log.info("Patched %s: coins=%d total=%d", path, new_coins, new_total)
        return backup


def _replace_contents(path: Path, text: str) -> None:
    """
    Write text over path through a sibling temp file and os.replace.
    A symlinked path is followed so the link target receives the new text.
    Falls back to writing in place when the directory refuses new files.
    """
    target = Path(os.path.realpath(path))
    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
        )
    except OSError as e:
        log.debug(
            "Cannot create temp file next to %s (%s); writing in place", target, e
        )
        write_text(target, text)
        return

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding=ENCODING, newline="") as f:
            f.write(text)
        try:
            shutil.copymode(target, tmp_path)
        except OSError:
            pass
        os.replace(tmp_path, target)
    except OSError:
        try:
            tmp_path.unlink()
        except OSError:
            pass
        raise
