"""Save location discovery for Lunar Coiner."""

from .path_resolver import PathResolver
from .profile_locator import locate_profiles

__all__ = ["PathResolver", "locate_profiles"]
