"""Library for reading TZif files.

A TZif file (see rfc8536) starts with a header followed by a data block. A
version 1 file stores transition times as 32-bit values. Version 2 and 3 files
carry a version 1 header and data block for older readers, then a second
header and data block with 64-bit times, then a footer with a TZ string
describing local time after the last transition.

This reader skips the version 1 data block when a 64-bit block is present,
and validates everything it keeps: a malformed file raises a `TzFileError`
rather than producing a timeline that is silently wrong.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .exceptions import (
    InvalidAbbreviationIndexError,
    InvalidAbbreviationPoolError,
    InvalidDstFlagError,
    InvalidHeaderError,
    InvalidMagicError,
    InvalidTypeIndexError,
    InvalidTzStringError,
    InvalidVersionError,
    MissingTzStringError,
    UnsortedEntriesError,
)
from .model import MIN_INSTANT, LeapTransition, Timezone, Transition, TzFile
from .reader import ByteReader, ByteSource

__all__ = [
    "read",
    "read_tzfile",
]

_LOGGER = logging.getLogger(__name__)

_MAGIC = b"TZif"
_RESERVED_SIZE = 15
_NEWLINE = 0x0A
_LEGACY_VERSION = 0x00

# Size in bytes of transition and leap second times for each version byte
_TIME_SIZES = {
    _LEGACY_VERSION: 4,
    ord("2"): 8,
    ord("3"): 8,
}


@dataclass
class _Counts:
    """The counts of each record type in a data block."""

    isutcnt: int
    """The number of UT/local indicators in the data block."""

    isstdcnt: int
    """The number of standard/wall indicators in the data block."""

    leapcnt: int
    """The number of leap second records in the data block."""

    timecnt: int
    """The number of time transitions in the data block."""

    typecnt: int
    """The number of local time type records in the data block."""

    charcnt: int
    """The number of octets of time zone designations in the data block."""

    @classmethod
    def read(cls, source: ByteSource) -> _Counts:
        """Read the six counts that end a header."""
        return cls(*(source.read_be_u32() for _ in range(6)))

    def validate(self) -> None:
        """Verify the counts describe a usable data block."""
        if self.typecnt == 0:
            raise InvalidHeaderError("typecnt is zero")
        if self.isutcnt not in (0, self.typecnt):
            raise InvalidHeaderError(f"isutcnt {self.isutcnt} != typecnt {self.typecnt}")
        if self.isstdcnt not in (0, self.typecnt):
            raise InvalidHeaderError(f"isstdcnt {self.isstdcnt} != typecnt {self.typecnt}")

    def v1_block_size(self) -> int:
        """Return the size in bytes of a version 1 data block with these counts."""
        return (
            self.timecnt * 5
            + self.typecnt * 6
            + self.charcnt
            + self.leapcnt * 8
            + self.isutcnt
            + self.isstdcnt
        )


def _read_magic_and_version(source: ByteSource) -> int:
    """Read the start of a header up to and including the reserved bytes."""
    magic = source.read_exact(len(_MAGIC))
    if magic != _MAGIC:
        raise InvalidMagicError(magic)
    version = source.read_u8()
    if version not in _TIME_SIZES:
        raise InvalidVersionError(bytes([version]))
    source.read_exact(_RESERVED_SIZE)
    return version


def _read_header(source: ByteSource) -> tuple[int, _Counts]:
    """Read the headers, skipping the version 1 data block of v2+ files.

    Returns the version byte and the counts for the data block that follows.
    """
    version = _read_magic_and_version(source)
    counts = _Counts.read(source)
    if version != _LEGACY_VERSION:
        # The v1 counts are only used to find the start of the second header
        source.read_exact(counts.v1_block_size())
        magic = source.read_exact(len(_MAGIC))
        if magic != _MAGIC:
            raise InvalidMagicError(magic)
        second_version = source.read_u8()
        if second_version != version:
            raise InvalidVersionError(bytes([second_version]))
        source.read_exact(_RESERVED_SIZE)
        counts = _Counts.read(source)
    counts.validate()
    _LOGGER.debug("Read TZif header version=%r counts=%s", bytes([version]), counts)
    return (version, counts)


def _abbreviation(pool: bytes, index: int) -> str:
    """Find the NUL terminated designation starting at the specified octet index."""
    if index >= len(pool):
        raise InvalidAbbreviationIndexError(index)
    end = pool.find(b"\x00", index)
    if end < 0:
        raise InvalidAbbreviationIndexError(index)
    try:
        return pool[index:end].decode("utf-8")
    except UnicodeDecodeError as err:
        # The index points into the middle of a multi-byte character
        raise InvalidAbbreviationIndexError(index) from err


def _read_timezones(source: ByteSource, counts: _Counts) -> list[Timezone]:
    """Read the local time type records and the designation pool."""
    # Each record is utoff (4 bytes), dst (1 byte), idx (1 byte)
    records = [
        (source.read_be_i32(), source.read_u8(), source.read_u8())
        for _ in range(counts.typecnt)
    ]
    pool = source.read_exact(counts.charcnt)
    try:
        pool.decode("utf-8")
    except UnicodeDecodeError as err:
        raise InvalidAbbreviationPoolError(pool) from err

    timezones = []
    for utoff, dst, idx in records:
        if dst not in (0, 1):
            raise InvalidDstFlagError(dst)
        timezones.append(Timezone(utoff, bool(dst), _abbreviation(pool, idx)))
    return timezones


def _build_transitions(
    times: list[int], types: bytes, timezones: list[Timezone]
) -> list[Transition]:
    """Build the transition table, starting with the sentinel for type 0."""
    transitions = [Transition(MIN_INSTANT, timezones[0])]
    for since, time_type in zip(times, types):
        if transitions[-1].since >= since:
            raise UnsortedEntriesError(since)
        if time_type >= len(timezones):
            raise InvalidTypeIndexError(time_type)
        transitions.append(Transition(since, timezones[time_type]))
    return transitions


def _read_leap_transitions(
    source: ByteSource, time_size: int, counts: _Counts
) -> list[LeapTransition]:
    """Read the leap second records, which must be in increasing order."""
    leap_transitions: list[LeapTransition] = []
    for _ in range(counts.leapcnt):
        since = source.read_be_int(time_size)
        total = source.read_be_i32()
        if leap_transitions and leap_transitions[-1].since >= since:
            raise UnsortedEntriesError(since)
        leap_transitions.append(LeapTransition(since, total))
    return leap_transitions


def _read_footer(source: ByteSource) -> str | None:
    """Read the newline enclosed TZ string that follows a v2+ data block."""
    if source.read_u8() != _NEWLINE:
        raise MissingTzStringError()
    rule = bytearray()
    while (value := source.read_u8()) != _NEWLINE:
        rule.append(value)
    if not rule:
        return None
    try:
        return rule.decode("utf-8")
    except UnicodeDecodeError as err:
        raise InvalidTzStringError(bytes(rule)) from err


def read(source: ByteSource) -> TzFile:
    """Read a TZif file from the byte source and return the parsed timeline."""
    (version, counts) = _read_header(source)
    time_size = _TIME_SIZES[version]

    # Transition times in sorted order, and the local time type of each
    times = [source.read_be_int(time_size) for _ in range(counts.timecnt)]
    types = source.read_exact(counts.timecnt)
    timezones = _read_timezones(source, counts)
    leap_transitions = _read_leap_transitions(source, time_size, counts)

    # Standard/wall and UT/local indicators only matter when a TZ string has
    # no DST rules of its own, which is not interpreted here.
    source.read_exact(counts.isstdcnt)
    source.read_exact(counts.isutcnt)

    future_rules = None
    if version != _LEGACY_VERSION:
        future_rules = _read_footer(source)

    transitions = _build_transitions(times, types, timezones)
    _LOGGER.debug(
        "Parsed %d transitions and %d leap seconds",
        len(transitions),
        len(leap_transitions),
    )
    return TzFile(transitions, leap_transitions, future_rules)


def read_tzfile(content: bytes) -> TzFile:
    """Read the TZif file contents and return the parsed timeline."""
    return read(ByteReader.from_bytes(content))
