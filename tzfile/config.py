"""Configuration for locating TZif files by timezone key.

Settings are scoped with context managers so that a caller can change how
timezones are found for a block of code without affecting other threads or
tasks.
"""

from __future__ import annotations

from collections.abc import Generator, Sequence
import contextlib
import contextvars
import zoneinfo

__all__ = [
    "use_tzpath",
    "get_tzpath",
    "prefer_system_tzpath",
    "is_prefer_system_tzpath_enabled",
]

_tzpath: contextvars.ContextVar[tuple[str, ...] | None] = contextvars.ContextVar(
    "tzpath", default=None
)
_prefer_system_tzpath = contextvars.ContextVar("prefer_system_tzpath", default=False)


@contextlib.contextmanager
def use_tzpath(paths: Sequence[str]) -> Generator[None]:
    """Context manager to search the specified directories for TZif files."""
    token = _tzpath.set(tuple(paths))
    try:
        yield
    finally:
        _tzpath.reset(token)


def get_tzpath() -> tuple[str, ...]:
    """Return the directories searched for TZif files."""
    if (paths := _tzpath.get()) is not None:
        return paths
    return tuple(zoneinfo.TZPATH)


@contextlib.contextmanager
def prefer_system_tzpath() -> Generator[None]:
    """Context manager to search system directories before the tzdata package."""
    token = _prefer_system_tzpath.set(True)
    try:
        yield
    finally:
        _prefer_system_tzpath.reset(token)


def is_prefer_system_tzpath_enabled() -> bool:
    """Check if system directories are searched before the tzdata package."""
    return _prefer_system_tzpath.get()
