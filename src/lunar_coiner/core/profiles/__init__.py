"""Profile document access for Lunar Coiner."""

from .errors import ProfileError, ProfileReadError, ProfileWriteError
from .field_editor import FieldEditor

__all__ = ["FieldEditor", "ProfileError", "ProfileReadError", "ProfileWriteError"]
