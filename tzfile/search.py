"""Binary search used for point-in-time lookups."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

__all__ = ["bsearch_no_less"]

_T = TypeVar("_T")


def bsearch_no_less(items: Sequence[_T], cmp: Callable[[_T], int]) -> int:
    """Return the first index `i` such that `items[i]` is not less than the target.

    The target is implied by `cmp`, which returns a negative number when an
    item orders before the target, zero when it is equal and a positive number
    when it orders after. Unlike an exact search, `items[i]` does not need to
    compare equal to the target. Returns `len(items)` if every item is less.
    """
    base = 0
    limit = len(items)
    # items[base - 1] (if any) < target <= items[base + limit] (if any)
    while limit:
        index = base + (limit >> 1)
        if cmp(items[index]) < 0:
            base = index + 1
            limit -= 1
        limit >>= 1
    return base
