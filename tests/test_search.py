"""Tests for the lookup binary search."""

import random

import pytest

from tzfile.search import bsearch_no_less


def _cmp(target: int):
    return lambda item: (item > target) - (item < target)


def _linear_no_less(items: list[int], target: int) -> int:
    return next((i for (i, item) in enumerate(items) if item >= target), len(items))


@pytest.mark.parametrize(
    "items,target,expected",
    [
        ([], 5, 0),
        ([1], 0, 0),
        ([1], 1, 0),
        ([1], 2, 1),
        ([1, 3, 5, 7], 4, 2),
        ([1, 3, 5, 7], 5, 2),
        ([1, 3, 5, 7], 8, 4),
        ([1, 3, 5, 7], -10, 0),
        ([1, 1, 1, 2], 1, 0),
        ([0, 2, 2, 2, 4], 2, 1),
    ],
)
def test_bsearch_no_less(items: list[int], target: int, expected: int) -> None:
    """Test the first index that is not less than the target is found."""
    assert bsearch_no_less(items, _cmp(target)) == expected


def test_matches_linear_scan() -> None:
    """Test the search agrees with a linear scan for random sorted inputs."""
    rng = random.Random(8536)
    for size in range(0, 40):
        items = sorted(rng.randrange(-50, 50) for _ in range(size))
        for target in range(-55, 56):
            assert bsearch_no_less(items, _cmp(target)) == _linear_no_less(
                items, target
            ), f"For {items} {target}"


def test_key_projection() -> None:
    """Test the comparator can project a key out of each item."""
    items = [(10, "a"), (20, "b"), (30, "c")]
    index = bsearch_no_less(items, lambda item: (item[0] > 25) - (item[0] < 25))
    assert index == 2
