from collections.abc import Iterator
from dataclasses import dataclass, replace
from enum import Enum, auto
from itertools import pairwise
from typing import Any, Generic, assert_never

from typing_extensions import override

from intervalmap.errors import (
    EmptyMapError,
    InvalidIntervalError,
    OverlappingIntervalsError,
    PutError,
)
from intervalmap.index import OrderedIndex
from intervalmap.interval import Bound, Interval, V
from intervalmap.log import logger

Bounds = tuple[Bound, Bound]


@dataclass(frozen=True)
class Found(Generic[V]):
    """A successful `IntervalMap.get_value` lookup.

    Wrapping the value keeps "found, value is None" apart from "not found".
    """

    value: V | None


class Relation(Enum):
    """How a deletion range ``(left, right]`` sits relative to a stored interval."""

    DISJOINT_BEFORE = auto()  # range ends at or before the interval starts
    DISJOINT_AFTER = auto()  # range starts at or after the interval ends
    COVERS = auto()  # interval lies entirely inside the range
    SPLITS = auto()  # range lies strictly inside the interval
    TRIMS_START = auto()  # range cuts off the interval's lower part
    TRIMS_END = auto()  # range cuts off the interval's upper part


def relation(left: Bound, right: Bound, interval: Interval[Any]) -> Relation:
    """Classify deletion bounds against ``interval``.

    Every pair of valid ranges lands in exactly one relation: the two
    disjoint tests come first, and once the ranges are known to overlap the
    remaining four follow from whether each side of the range reaches past
    the interval's matching side.
    """
    if right <= interval.left:
        return Relation.DISJOINT_BEFORE
    if interval.right <= left:
        return Relation.DISJOINT_AFTER

    reaches_start = left <= interval.left
    reaches_end = interval.right <= right
    if reaches_start:
        return Relation.COVERS if reaches_end else Relation.TRIMS_START
    return Relation.TRIMS_END if reaches_end else Relation.SPLITS


def _unpack(bounds: "Bounds | Interval[Any]") -> Bounds:
    if isinstance(bounds, Interval):
        return bounds.bounds
    left, right = bounds
    return left, right


class IntervalMap(Generic[V]):
    """Immutable map from keys to the non-overlapping interval containing them.

    Intervals are left-open and right-closed, ``left < key <= right``, and
    stored by right bound. Every operation that changes the contents returns
    a new map; the receiver is never modified, so map values may be shared
    freely between readers.

    Example:
        >>> m = IntervalMap().put((0, 100), "a").put((200, 300), "b")
        >>> m.get(55)
        Interval(left=0, right=100, value='a')
        >>> m.get(150) is None
        True
    """

    __slots__ = ("_index",)

    def __init__(self, _index: OrderedIndex[V] | None = None) -> None:
        self._index: OrderedIndex[V] = _index if _index is not None else OrderedIndex()

    def put(
        self, bounds: "Bounds | Interval[Any]", value: V | None = None
    ) -> "IntervalMap[V] | PutError":
        """Store ``value`` over ``bounds``.

        Args:
            bounds: ``(left, right)`` tuple, or an Interval whose bounds are used
                (its value is not; pass ``value`` explicitly)
            value: Value to attach to the new interval

        Returns:
            A new map containing the interval, or the error describing why it
            was rejected. Errors are returned, not raised, and leave this map
            untouched.
        """
        left, right = _unpack(bounds)
        if not left < right:
            logger.debug("Rejected invalid interval (%r, %r]", left, right)
            return InvalidIntervalError(left, right)

        requested = Interval(left=left, right=right, value=value)
        existing = self._overlap_candidate(left)
        if existing is not None and existing.overlaps(requested):
            logger.debug("Rejected %s: overlaps %s", requested, existing)
            return OverlappingIntervalsError(requested, existing)

        return IntervalMap(self._index.insert(requested))

    def put_or_raise(
        self, bounds: "Bounds | Interval[Any]", value: V | None = None
    ) -> "IntervalMap[V]":
        """Like `put`, but raise the rejection error instead of returning it."""
        result = self.put(bounds, value)
        if isinstance(result, IntervalMap):
            return result
        raise result

    def _overlap_candidate(self, left: Bound) -> Interval[V] | None:
        cursor = self._index.ceiling(left)
        # An interval ending exactly at `left` only touches the new one; the
        # next interval up is the one that could overlap.
        if cursor is not None and cursor.interval.right == left:
            cursor = self._index.advance(cursor)
        return cursor.interval if cursor is not None else None

    def get(self, key: Bound) -> Interval[V] | None:
        """Return the interval containing ``key``, or None."""
        cursor = self._index.ceiling(key)
        if cursor is not None and cursor.interval.contains(key):
            return cursor.interval
        return None

    def get_value(self, key: Bound) -> Found[V] | None:
        interval = self.get(key)
        if interval is None:
            return None
        return Found(interval.value)

    def key_member(self, key: Bound) -> bool:
        return self.get(key) is not None

    def bounds_member(self, bounds: Bounds) -> bool:
        """True if both ends of ``bounds`` fall inside the same stored interval.

        Note the left end is tested as a key too, so ``bounds_member((l, r))``
        is False for a stored interval ``(l, r]`` itself.
        """
        left, right = bounds
        left_interval = self.get(left)
        if left_interval is None:
            return False
        return left_interval is self.get(right)

    def delete(self, bounds: "Bounds | Interval[Any]") -> "IntervalMap[V]":
        """Remove the keys in ``bounds`` from the map.

        Intervals entirely inside the range are dropped, those partly inside
        are shrunk, and one strictly containing the range is split in two.
        Remainders keep their original value and are never merged with
        neighbours. Bounds with ``left >= right`` cover no keys and return an
        equal map.
        """
        left, right = _unpack(bounds)
        if not left < right:
            return self

        index = self._index
        cursor = index.ceiling(left)
        while cursor is not None:
            interval = cursor.interval
            match relation(left, right, interval):
                case Relation.DISJOINT_AFTER:
                    pass
                case Relation.DISJOINT_BEFORE:
                    # Everything further along starts even later.
                    break
                case Relation.COVERS:
                    logger.debug("Delete (%r, %r]: removing %s", left, right, interval)
                    index = index.remove(interval)
                case Relation.SPLITS:
                    logger.debug("Delete (%r, %r]: splitting %s", left, right, interval)
                    index = (
                        index.remove(interval)
                        .insert(replace(interval, right=left))
                        .insert(replace(interval, left=right))
                    )
                case Relation.TRIMS_START:
                    logger.debug("Delete (%r, %r]: trimming %s", left, right, interval)
                    index = index.remove(interval).insert(replace(interval, left=right))
                case Relation.TRIMS_END:
                    logger.debug("Delete (%r, %r]: trimming %s", left, right, interval)
                    index = index.remove(interval).insert(replace(interval, right=left))
                case unreachable:
                    assert_never(unreachable)
            # Advance over the original index; edits only touch the new one.
            cursor = self._index.advance(cursor)

        if index is self._index:
            return self
        return IntervalMap(index)

    def to_list(self) -> list[Interval[V]]:
        """Stored intervals in ascending order."""
        return list(self._index.values())

    def range(self) -> Interval[None]:
        """Smallest interval enclosing every stored interval.

        The result need not be stored in the map itself when the map has gaps.

        Raises:
            EmptyMapError: If the map holds no intervals
        """
        first = self._index.first()
        last = self._index.last()
        if first is None or last is None:
            raise EmptyMapError("range() of an empty IntervalMap")
        return Interval(left=first.left, right=last.right)

    def contiguous(self) -> bool:
        """True if each interval ends exactly where the next one starts.

        Raises:
            EmptyMapError: If the map holds no intervals
        """
        if not self._index:
            raise EmptyMapError("contiguous() of an empty IntervalMap")
        return all(a.right == b.left for a, b in pairwise(self._index.values()))

    def __iter__(self) -> Iterator[Interval[V]]:
        return self._index.values()

    def __len__(self) -> int:
        return len(self._index)

    def __bool__(self) -> bool:
        return bool(self._index)

    def __contains__(self, key: Bound) -> bool:
        return self.key_member(key)

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntervalMap):
            return NotImplemented
        return self.to_list() == other.to_list()

    __hash__ = None  # type: ignore[assignment]

    @override
    def __repr__(self) -> str:
        return f"IntervalMap({', '.join(str(i) for i in self)})"


def interval_map(*items: "Interval[Any] | tuple[Any, ...]") -> IntervalMap[Any]:
    """Build a map from intervals or ``(left, right[, value])`` tuples.

    Interval items keep their own value. Unlike `IntervalMap.put`, a rejected
    item raises its error.

    Example:
        >>> m = interval_map((0, 10, "low"), Interval(left=10, right=20, value="high"))
        >>> m.get_value(15)
        Found(value='high')
    """
    result: IntervalMap[Any] = IntervalMap()
    for item in items:
        if isinstance(item, Interval):
            result = result.put_or_raise(item, item.value)
        else:
            result = result.put_or_raise((item[0], item[1]), *item[2:3])
    return result
