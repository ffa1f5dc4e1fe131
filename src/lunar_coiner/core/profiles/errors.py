from __future__ import annotations

from pathlib import Path


class ProfileError(Exception):
    """Base class for profile document failures."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class ProfileReadError(ProfileError):
    """The profile document could not be opened or decoded as text."""


class ProfileWriteError(ProfileError):
    """A step of the backup-then-patch sequence failed."""

    STEP_READ = "read"
    STEP_BACKUP = "backup"
    STEP_WRITE = "write"

    def __init__(self, path: Path | str, step: str, reason: str):
        self.step = step
        super().__init__(path, reason)

    @property
    def original_untouched(self) -> bool:
        # Only a failure of the final write can leave the original modified
        return self.step in (self.STEP_READ, self.STEP_BACKUP)
