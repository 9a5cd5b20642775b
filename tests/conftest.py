"""Test fixtures."""

from collections.abc import Callable, Iterable
import dataclasses
import json
import struct
from typing import Any

from pydantic_core import to_jsonable_python
import pytest

TZIF_V1 = b"\x00"
TZIF_V2 = b"2"
TZIF_V3 = b"3"


class DataclassEncoder(json.JSONEncoder):
    """Class that can dump data classes as dict for comparison to plain data."""

    def default(self, o: Any) -> Any:
        if dataclasses.is_dataclass(o) and not isinstance(o, type):
            return dataclasses.asdict(o)
        return to_jsonable_python(o)


@pytest.fixture
def json_encoder() -> json.JSONEncoder:
    """Fixture that creates a json encoder."""
    return DataclassEncoder()


def _header(version: bytes, counts: Iterable[int], magic: bytes = b"TZif") -> bytes:
    return magic + version + b"\x00" * 15 + struct.pack(">6L", *counts)


def _data_block(
    time_format: str,
    transitions: Iterable[tuple[int, int]],
    types: Iterable[tuple[int, int, int]],
    chars: bytes,
    leaps: Iterable[tuple[int, int]],
    isstd: bytes,
    isut: bytes,
) -> bytes:
    transitions = list(transitions)
    return b"".join(
        [
            b"".join(struct.pack(f">{time_format}", t) for (t, _) in transitions),
            bytes(idx for (_, idx) in transitions),
            b"".join(struct.pack(">lBB", *record) for record in types),
            chars,
            b"".join(struct.pack(f">{time_format}l", *leap) for leap in leaps),
            isstd,
            isut,
        ]
    )


def build_tzif(
    *,
    version: bytes = TZIF_V1,
    transitions: Iterable[tuple[int, int]] = (),
    types: Iterable[tuple[int, int, int]] = ((3600, 0, 0),),
    chars: bytes = b"CET\x00",
    leaps: Iterable[tuple[int, int]] = (),
    isstd: bytes = b"",
    isut: bytes = b"",
    footer: bytes = b"\n\n",
    counts: dict[str, int] | None = None,
    v1_transitions: Iterable[tuple[int, int]] = (),
    v1_types: Iterable[tuple[int, int, int]] | None = None,
    second_magic: bytes = b"TZif",
    second_version: bytes | None = None,
) -> bytes:
    """Build the contents of a TZif file.

    The counts in the header are computed from the data unless overridden
    with `counts`. For version 2+ files the version 1 data block contains the
    local time types (or `v1_types`) and `v1_transitions` only, like a "slim"
    file.
    """
    transitions = list(transitions)
    types = list(types)
    leaps = list(leaps)
    values = {
        "isutcnt": len(isut),
        "isstdcnt": len(isstd),
        "leapcnt": len(leaps),
        "timecnt": len(transitions),
        "typecnt": len(types),
        "charcnt": len(chars),
    }
    values.update(counts or {})

    if version == TZIF_V1:
        return _header(version, values.values()) + _data_block(
            "l", transitions, types, chars, leaps, isstd, isut
        )

    v1_transitions = list(v1_transitions)
    v1_types = types if v1_types is None else list(v1_types)
    v1_counts = [len(isut), len(isstd), 0, len(v1_transitions), len(v1_types), len(chars)]
    return b"".join(
        [
            _header(version, v1_counts),
            _data_block("l", v1_transitions, v1_types, chars, [], isstd, isut),
            _header(second_version or version, values.values(), magic=second_magic),
            _data_block("q", transitions, types, chars, leaps, isstd, isut),
            footer,
        ]
    )


@pytest.fixture
def tzif_builder() -> Callable[..., bytes]:
    """Fixture that returns a function to build TZif file contents."""
    return build_tzif
