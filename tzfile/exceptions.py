"""Exceptions for the tzfile library.

Every malformed input condition found while decoding a TZif file raises a
subclass of `TzFileError`. The message of each subclass is a fixed tag
describing the problem, and the offending value (when there is one) is kept
on the `value` attribute.

Failures reading from the underlying byte source, such as a truncated file,
are not validation errors and propagate as `EOFError` or `OSError`.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "TzFileError",
    "InvalidMagicError",
    "InvalidVersionError",
    "InvalidHeaderError",
    "UnsortedEntriesError",
    "InvalidAbbreviationPoolError",
    "InvalidAbbreviationIndexError",
    "InvalidTypeIndexError",
    "InvalidDstFlagError",
    "MissingTzStringError",
    "InvalidTzStringError",
]


class TzFileError(ValueError):
    """Base exception for all TZif validation errors."""

    tag = "invalid tzfile"

    def __init__(self, value: Any = None) -> None:
        """Initialize the error with the offending value, if any."""
        super().__init__(self.tag)
        self.value = value

    def __str__(self) -> str:
        if self.value is None:
            return self.tag
        return f"{self.tag}: {self.value!r}"


class InvalidMagicError(TzFileError):
    """The file does not start with the TZif magic bytes."""

    tag = "invalid tzfile magic"


class InvalidVersionError(TzFileError):
    """The version byte is unknown or the two headers disagree."""

    tag = "invalid tzfile version"


class InvalidHeaderError(TzFileError):
    """The header counts are inconsistent."""

    tag = "invalid tzfile header"


class UnsortedEntriesError(TzFileError):
    """Transition or leap second times are not strictly increasing."""

    tag = "unsorted tzfile entries"


class InvalidAbbreviationPoolError(TzFileError):
    """The abbreviation pool is not valid UTF-8."""

    tag = "invalid tzfile abbreviation pool"


class InvalidAbbreviationIndexError(TzFileError):
    """An abbreviation index is out of range or not NUL terminated."""

    tag = "invalid tzfile abbreviation index"


class InvalidTypeIndexError(TzFileError):
    """A transition refers to a local time type that does not exist."""

    tag = "invalid tzfile type index"


class InvalidDstFlagError(TzFileError):
    """A local time type has a DST flag other than 0 or 1."""

    tag = "invalid tzfile dst flag"


class MissingTzStringError(TzFileError):
    """The footer of a version 2+ file does not start with a newline."""

    tag = "missing tzfile TZ string"


class InvalidTzStringError(TzFileError):
    """The footer TZ string is not valid UTF-8."""

    tag = "invalid tzfile TZ string"
