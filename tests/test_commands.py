"""
Tests for the caller-facing operations.
"""

import json
import logging

import pytest

from lunar_coiner.core import commands
from lunar_coiner.core.paths import PathResolver
from lunar_coiner.core.profiles import field_editor
from lunar_coiner.core.profiles.field_editor import backup_path_for
from lunar_coiner.domain.models import ProfileFields
from lunar_coiner.utils.status import Status


@pytest.fixture
def two_roots(userdata_factory, runner_profile):
    first = userdata_factory(
        "steam-a/userdata",
        {
            "100": {"default.xml": runner_profile},
            "guest": {"default.xml": runner_profile},
        },
    )
    second = userdata_factory(
        "steam-b/userdata",
        {"200": {"default.xml": "<coins>7</coins>", "default.xml.bak": ""}},
    )
    return first, second


class TestListProfiles:
    def test_lists_profiles_across_roots(self, two_roots, static_provider):
        resolver = PathResolver([static_provider(*two_roots)])

        profiles = commands.list_profiles(resolver)

        assert [(p.identifier, p.coins) for p in profiles] == [("100", 150), ("200", 7)]
        assert profiles[0].display_name == "Runner"
        assert profiles[0].total_collected == 300
        assert profiles[1].display_name == "Unknown"

    def test_duplicate_roots_listed_once(self, two_roots, static_provider):
        first, _ = two_roots
        resolver = PathResolver([static_provider(first, first)])

        assert len(commands.list_profiles(resolver)) == 1

    def test_unreadable_profile_skipped(
        self, userdata_factory, static_provider, runner_profile
    ):
        root = userdata_factory(
            "userdata",
            {"1": {"default.xml": runner_profile}, "2": {"default.xml": ""}},
        )
        bad = root / "2" / "632360" / "remote" / "UserProfiles" / "default.xml"
        bad.write_bytes(b"\xff\xfe<coins>")
        resolver = PathResolver([static_provider(root)])

        assert [p.identifier for p in commands.list_profiles(resolver)] == ["1"]

    def test_no_roots(self, tmp_path, static_provider):
        resolver = PathResolver([static_provider(tmp_path / "missing")])
        assert commands.list_profiles(resolver) == []

    def test_default_resolver_includes_configured_roots(
        self, tmp_path, userdata_factory, runner_profile, monkeypatch
    ):
        root = userdata_factory(
            "custom/userdata", {"42": {"default.xml": runner_profile}}
        )
        config = tmp_path / "config"
        (config / "lunar-coiner").mkdir(parents=True)
        (config / "lunar-coiner" / "settings.json").write_text(
            json.dumps({"extra_roots": [str(root)]}), encoding="utf-8"
        )
        home = tmp_path / "home"
        home.mkdir()
        monkeypatch.setattr("sys.platform", "linux")
        monkeypatch.setenv("HOME", str(home))
        monkeypatch.setenv("XDG_CONFIG_HOME", str(config))

        profiles = commands.list_profiles()

        assert [(p.identifier, p.display_name) for p in profiles] == [("42", "Runner")]


class TestLoadProfile:
    def test_success(self, write_profile, runner_profile):
        path = write_profile(runner_profile)
        fields, error = commands.load_profile(str(path))
        assert fields == ProfileFields("Runner", 150, 300)
        assert error == ""

    def test_failure_returns_message(self, tmp_path):
        fields, error = commands.load_profile(tmp_path / "missing.xml")
        assert fields is None
        assert "missing.xml" in error


class TestSaveProfile:
    def test_success(self, write_profile, runner_profile):
        path = write_profile(runner_profile)

        status, message = commands.save_profile(path, 500, 900)

        assert status == Status.SUCCESS
        assert "500" in message
        assert "<coins>500</coins>" in path.read_text(encoding="utf-8")
        assert backup_path_for(path).read_text(encoding="utf-8") == runner_profile

    def test_negative_values(self, write_profile, runner_profile):
        path = write_profile(runner_profile)

        status, _ = commands.save_profile(path, -1, 0)

        assert status == Status.INVALID_DATA
        assert Status.file_unchanged(status)
        assert path.read_text(encoding="utf-8") == runner_profile

    def test_read_failure(self, tmp_path):
        status, message = commands.save_profile(tmp_path / "missing.xml", 1, 1)
        assert status == Status.READ_ERROR
        assert Status.file_unchanged(status)
        assert message

    def test_backup_failure(self, write_profile, runner_profile):
        path = write_profile(runner_profile)
        backup_path_for(path).mkdir()

        status, _ = commands.save_profile(path, 1, 1)

        assert status == Status.BACKUP_ERROR
        assert Status.file_unchanged(status)
        assert path.read_text(encoding="utf-8") == runner_profile

    def test_write_failure_mentions_backup(
        self, write_profile, runner_profile, monkeypatch
    ):
        path = write_profile(runner_profile)

        def fail(_path, _text):
            raise OSError("disk full")

        monkeypatch.setattr(field_editor, "_replace_contents", fail)

        status, message = commands.save_profile(path, 1, 1)

        assert status == Status.WRITE_ERROR
        assert Status.is_error(status)
        assert not Status.file_unchanged(status)
        assert "default.xml.bak" in message

    def test_counter_beyond_game_range_warns(
        self, write_profile, runner_profile, caplog
    ):
        path = write_profile(runner_profile)
        big = commands.GAME_COUNTER_MAX + 1

        with caplog.at_level(logging.WARNING, logger=commands.__name__):
            status, _ = commands.save_profile(path, big, big)

        assert status == Status.SUCCESS
        assert f"<coins>{big}</coins>" in path.read_text(encoding="utf-8")
        assert "may not load" in caplog.text

    def test_counter_within_game_range_is_quiet(
        self, write_profile, runner_profile, caplog
    ):
        path = write_profile(runner_profile)
        limit = commands.GAME_COUNTER_MAX

        with caplog.at_level(logging.WARNING, logger=commands.__name__):
            commands.save_profile(path, limit, limit)

        assert "may not load" not in caplog.text


def test_debug_search_paths(tmp_path, static_provider):
    present = tmp_path / "present"
    present.mkdir()
    absent = tmp_path / "absent"
    resolver = PathResolver([static_provider(present, absent, present)])

    lines = commands.debug_search_paths(resolver)

    assert len(lines) == 2
    assert str(present) in lines[0] and "found" in lines[0]
    assert str(absent) in lines[1] and "missing" in lines[1]


@pytest.mark.parametrize(
    "old_coins,old_total,new_coins,expected",
    [
        (150, 300, 500, 650),
        (150, 300, 150, 300),
        (150, 300, 10, 300),
        (0, 0, 5, 5),
    ],
)
def test_suggest_total(old_coins, old_total, new_coins, expected):
    assert commands.suggest_total(old_coins, old_total, new_coins) == expected


@pytest.mark.parametrize(
    "current,last_suggested,suggested,expected",
    [
        (300, 300, 650, 650),
        (999, 300, 650, 999),
        (650, 650, 300, 300),
    ],
)
def test_follow_total(current, last_suggested, suggested, expected):
    assert commands.follow_total(current, last_suggested, suggested) == expected
