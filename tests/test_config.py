"""Tests for the timezone lookup configuration."""

import zoneinfo

from tzfile import config


def test_default_tzpath() -> None:
    """Test the system directories default to the zoneinfo search path."""
    assert config.get_tzpath() == tuple(zoneinfo.TZPATH)


def test_use_tzpath() -> None:
    """Test overriding the search directories is scoped to the context."""
    with config.use_tzpath(["/a"]):
        assert config.get_tzpath() == ("/a",)
        with config.use_tzpath([]):
            assert config.get_tzpath() == ()
        assert config.get_tzpath() == ("/a",)
    assert config.get_tzpath() == tuple(zoneinfo.TZPATH)


def test_prefer_system_tzpath() -> None:
    """Test preferring system directories is scoped to the context."""
    assert not config.is_prefer_system_tzpath_enabled()
    with config.prefer_system_tzpath():
        assert config.is_prefer_system_tzpath_enabled()
    assert not config.is_prefer_system_tzpath_enabled()
