"""Data model for the tzfile library."""

from __future__ import annotations

from collections import namedtuple
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .search import bsearch_no_less

__all__ = [
    "MIN_INSTANT",
    "Timezone",
    "Transition",
    "LeapTransition",
    "TzFile",
]

MIN_INSTANT = -(2**63)
"""The smallest 64-bit instant, used as the time of the first transition."""


@dataclass(frozen=True)
class Timezone:
    """A local time type that is in effect between transitions."""

    local_minus_utc: int
    """Number of seconds added to UTC to determine local time."""

    dst: bool
    """Determines if local time is Daylight Savings Time (else Standard time)."""

    name: str
    """The time zone designation, such as "CET" or "PDT"."""


Transition = namedtuple("Transition", ["since", "timezone"])
"""A point in time at which a new local time type goes into effect.

The since value is in seconds since the epoch, and the timezone is the
`Timezone` that is in effect for instants after it.
"""

LeapTransition = namedtuple("LeapTransition", ["since", "total"])
"""A leap second correction.

The since value is the time at which the correction occurs and total is the
cumulative number of leap seconds in effect for instants after it.
"""


def _since_cmp(at: int) -> Callable[[Transition | LeapTransition], int]:
    """Return a comparator ordering table entries by time against the instant."""
    return lambda item: (item.since > at) - (item.since < at)


class TzFile:
    """The results of parsing a TZif file.

    The first transition is always at `MIN_INSTANT` so that every instant has
    a local time type. Both tables are stored as tuples and are never changed
    after construction.
    """

    __slots__ = ("_transitions", "_leap_transitions", "_future_rules")

    def __init__(
        self,
        transitions: Iterable[Transition],
        leap_transitions: Iterable[LeapTransition] = (),
        future_rules: str | None = None,
    ) -> None:
        """Initialize TzFile."""
        self._transitions: tuple[Transition, ...] = tuple(transitions)
        self._leap_transitions: tuple[LeapTransition, ...] = tuple(leap_transitions)
        self._future_rules = future_rules
        if not self._transitions or self._transitions[0].since != MIN_INSTANT:
            raise ValueError("First transition must start at the minimum instant")

    def transitions(self) -> tuple[Transition, ...]:
        """Return the transitions in increasing order of time."""
        return self._transitions

    def leap_transitions(self) -> tuple[LeapTransition, ...]:
        """Return the leap second corrections in increasing order of time."""
        return self._leap_transitions

    def timezone_at(self, at: int) -> Timezone:
        """Return the local time type in effect at the specified instant.

        A transition takes effect for instants strictly after its time, so at
        the transition instant itself the previous local time type is used.
        """
        index = bsearch_no_less(self._transitions, _since_cmp(at))
        if index == 0:
            # Only the sentinel at MIN_INSTANT can be at or after the instant
            return self._transitions[0].timezone
        return self._transitions[index - 1].timezone

    def total_leap_seconds_at(self, at: int) -> int:
        """Return the cumulative leap second correction at the specified instant."""
        index = bsearch_no_less(self._leap_transitions, _since_cmp(at))
        if index == 0:
            return 0
        return self._leap_transitions[index - 1].total

    def future_rules(self) -> str | None:
        """Return the TZ string used for instants after the last transition."""
        return self._future_rules

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TzFile):
            return NotImplemented
        return (
            self._transitions == other._transitions
            and self._leap_transitions == other._leap_transitions
            and self._future_rules == other._future_rules
        )

    def __hash__(self) -> int:
        return hash((self._transitions, self._leap_transitions, self._future_rules))

    def __repr__(self) -> str:
        return (
            f"TzFile(transitions={len(self._transitions)}, "
            f"leap_transitions={len(self._leap_transitions)}, "
            f"future_rules={self._future_rules!r})"
        )
