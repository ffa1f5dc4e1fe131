"""
Shared pytest fixtures for the Lunar Coiner test suite.

Provides:
- Sample profile documents
- A factory for Steam userdata trees on disk
- A stub provider for feeding fixed candidates to PathResolver
"""

from pathlib import Path

import pytest

from lunar_coiner.core.paths.profile_locator import PROFILE_SUBPATH
from lunar_coiner.domain.models import PRIORITY_CONVENTIONAL, InstallRoot

RUNNER_PROFILE = (
    "<profile><name>Runner</name><coins>150</coins>"
    "<totalCollectedCoins>300</totalCollectedCoins></profile>"
)


class StaticProvider:
    """Root provider returning a fixed list of candidates."""

    def __init__(self, *paths, priority=PRIORITY_CONVENTIONAL, source="static"):
        self._roots = [
            InstallRoot(Path(p), priority, "linux", source) for p in paths
        ]

    def roots(self):
        return list(self._roots)


@pytest.fixture
def runner_profile():
    return RUNNER_PROFILE


@pytest.fixture
def write_profile(tmp_path):
    """Write a profile document (as raw bytes) and return its path."""

    def _write(content, name="default.xml"):
        path = tmp_path / name
        data = content.encode("utf-8") if isinstance(content, str) else content
        path.write_bytes(data)
        return path

    return _write


@pytest.fixture
def userdata_factory(tmp_path):
    """
    Build <root>/<id>/632360/remote/UserProfiles/<file> trees.

    Usage: userdata_factory("userdata", {"12345": {"default.xml": "<coins>1</coins>"}})
    """

    def _build(root_name, accounts):
        root = tmp_path / root_name
        root.mkdir(parents=True, exist_ok=True)
        for identifier, files in accounts.items():
            storage = root.joinpath(identifier, *PROFILE_SUBPATH)
            storage.mkdir(parents=True, exist_ok=True)
            for filename, content in files.items():
                (storage / filename).write_text(content, encoding="utf-8")
        return root

    return _build


@pytest.fixture
def static_provider():
    return StaticProvider
