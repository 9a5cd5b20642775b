"""Library for loading TZif files by timezone key.

This package follows the same approach as zoneinfo for finding timezone
data. It first checks the tzdata python package, then falls back to the
system TZPATH. The order and the directories searched can be changed with
the context managers in `tzfile.config`.
"""

from __future__ import annotations

import logging
import os
import zoneinfo
from functools import cache, lru_cache
from importlib import resources
from typing import BinaryIO

from . import config
from .exceptions import TzFileError
from .model import TzFile
from .reader import ByteReader
from .tzfile import read as read_tzfile_source

__all__ = [
    "TimezoneInfoError",
    "available_timezones",
    "read",
    "read_file",
]

_LOGGER = logging.getLogger(__name__)

# Parsed timelines kept across search path and ordering configurations
_CACHE_SIZE = 512


class TimezoneInfoError(Exception):
    """Raised when a timezone key has no TZif file or the file is unusable."""


@cache
def _read_system_timezones() -> frozenset[str]:
    """Read and cache the set of system and tzdata timezones."""
    return frozenset(zoneinfo.available_timezones())


@cache
def _read_tzdata_timezones() -> frozenset[str]:
    """Returns the set of valid timezones from tzdata only."""
    try:
        with resources.files("tzdata").joinpath("zones").open(
            "r", encoding="utf-8"
        ) as zones_file:
            return frozenset(line.strip() for line in zones_file if line.strip())
    except ModuleNotFoundError:
        return frozenset()


def available_timezones() -> set[str]:
    """Return the set of timezone keys from the system and the tzdata package."""
    return set(_read_system_timezones() | _read_tzdata_timezones())


def _validate_key(key: str) -> None:
    """Verify the key is a relative path that stays inside a search directory."""
    if (
        not key
        or os.path.isabs(key)
        or os.path.normpath(key) != key
        or key.startswith("..")
        or "\\" in key
    ):
        raise TimezoneInfoError(f"Invalid timezone key: {key!r}")


def _tzdata_resource(key: str) -> tuple[str, str]:
    """Split a key into the tzdata subpackage holding it and the file name."""
    *directories, name = key.split("/")
    return ".".join(["tzdata.zoneinfo", *directories]), name


def _parse(key: str, fileobj: BinaryIO) -> TzFile:
    try:
        return read_tzfile_source(ByteReader(fileobj))
    except (TzFileError, EOFError) as err:
        raise TimezoneInfoError(f"Unable to parse timezone data for {key}") from err


def _read_tzdata(key: str, tzpath: tuple[str, ...]) -> TzFile | None:
    """Read the TZif file for the key from the tzdata package."""
    (package, name) = _tzdata_resource(key)
    try:
        with resources.files(package).joinpath(name).open("rb") as tzdata_file:
            _LOGGER.debug("Reading %s from tzdata package", key)
            return _parse(key, tzdata_file)
    except (ModuleNotFoundError, FileNotFoundError, IsADirectoryError):
        return None


def _find_tzfile(key: str, tzpath: tuple[str, ...]) -> str | None:
    """Retrieve the path to a TZif file from a key."""
    for search_path in tzpath:
        filepath = os.path.join(search_path, key)
        if os.path.isfile(filepath):
            return filepath
    return None


def _read_system(key: str, tzpath: tuple[str, ...]) -> TzFile | None:
    """Read the TZif file for the key from the first directory that has it."""
    if (filepath := _find_tzfile(key, tzpath)) is None:
        return None
    _LOGGER.debug("Reading %s from %s", key, filepath)
    with open(filepath, "rb") as tzfile_file:
        return _parse(key, tzfile_file)


def read(key: str) -> TzFile:
    """Find the TZif file for the timezone key and return the parsed timeline.

    The key must be one of `available_timezones()`, or name a file in one of
    the directories configured with `config.use_tzpath`.
    """
    _LOGGER.debug("Reading timezone: %s", key)
    _validate_key(key)
    tzpath = config.get_tzpath()
    if (
        key not in _read_system_timezones()
        and key not in _read_tzdata_timezones()
        and _find_tzfile(key, tzpath) is None
    ):
        raise TimezoneInfoError(f"Unable to find timezone in system timezones: {key}")
    return _read_cache(key, tzpath, config.is_prefer_system_tzpath_enabled())


@lru_cache(maxsize=_CACHE_SIZE)
def _read_cache(key: str, tzpath: tuple[str, ...], prefer_system: bool) -> TzFile:
    loaders = [_read_tzdata, _read_system]
    if prefer_system:
        loaders.reverse()
    for loader in loaders:
        if (result := loader(key, tzpath)) is not None:
            return result
    raise TimezoneInfoError(f"Unable to find timezone data for {key}")


def read_file(path: str | os.PathLike[str]) -> TzFile:
    """Read a TZif file from disk and return the parsed timeline."""
    with open(path, "rb") as tzfile_file:
        return read_tzfile_source(ByteReader(tzfile_file))
