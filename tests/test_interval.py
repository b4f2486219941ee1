"""Tests for the Interval value object."""

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from intervalmap import Interval, InvalidIntervalError


def test_interval_is_left_open_right_closed():
    interval = Interval(left=0, right=10)

    assert not interval.contains(0)
    assert interval.contains(1)
    assert interval.contains(10)
    assert not interval.contains(11)


def test_interval_rejects_empty_or_inverted_bounds():
    with pytest.raises(InvalidIntervalError) as exc_info:
        Interval(left=5, right=5)
    assert exc_info.value.left == 5
    assert exc_info.value.right == 5

    with pytest.raises(ValueError):
        Interval(left=6, right=5)


def test_interval_is_immutable():
    interval = Interval(left=0, right=10, value="a")

    with pytest.raises(FrozenInstanceError):
        interval.left = 3  # type: ignore[misc]


def test_interval_requires_keywords():
    with pytest.raises(TypeError):
        Interval(0, 10)  # type: ignore[misc]


def test_touching_intervals_do_not_overlap():
    """Sharing a boundary is not overlap under left-open semantics."""
    a = Interval(left=0, right=5)
    b = Interval(left=5, right=10)

    assert not a.overlaps(b)
    assert not b.overlaps(a)


def test_overlapping_intervals():
    a = Interval(left=0, right=10)

    assert a.overlaps(Interval(left=5, right=15))
    assert a.overlaps(Interval(left=-5, right=1))
    assert a.overlaps(Interval(left=2, right=3))
    assert a.overlaps(Interval(left=-100, right=100))
    assert a.overlaps(a)
    assert not a.overlaps(Interval(left=11, right=20))


def test_bounds_and_str():
    interval = Interval(left="a", right="b", value=1)

    assert interval.bounds == ("a", "b")
    assert str(interval) == "('a', 'b']: 1"


def test_non_numeric_bounds():
    start = datetime(2025, 1, 1, tzinfo=timezone.utc)
    end = datetime(2025, 1, 2, tzinfo=timezone.utc)
    interval = Interval(left=start, right=end)

    assert interval.contains(datetime(2025, 1, 1, 12, tzinfo=timezone.utc))
    assert not interval.contains(start)
