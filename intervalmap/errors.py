"""Error types for interval map operations.

`put` returns these as values instead of raising them. They still derive from
the builtin exception hierarchy so callers may raise them (see
`IntervalMap.put_or_raise`).
"""

from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from intervalmap.interval import Interval


class InvalidIntervalError(ValueError):
    """Requested bounds do not satisfy ``left < right``."""

    def __init__(self, left: Any, right: Any):
        super().__init__(
            f"Invalid interval ({left!r}, {right!r}]: left must be less than right"
        )
        self.left: Any = left
        self.right: Any = right

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvalidIntervalError):
            return NotImplemented
        return (self.left, self.right) == (other.left, other.right)

    __hash__ = ValueError.__hash__


class OverlappingIntervalsError(ValueError):
    """Requested interval shares keys with one already stored."""

    def __init__(self, requested: "Interval[Any]", existing: "Interval[Any]"):
        super().__init__(
            f"Overlapping intervals requested: {requested} overlaps {existing}"
        )
        self.requested: "Interval[Any]" = requested
        self.existing: "Interval[Any]" = existing

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OverlappingIntervalsError):
            return NotImplemented
        return (self.requested, self.existing) == (other.requested, other.existing)

    __hash__ = ValueError.__hash__


class EmptyMapError(LookupError):
    """Raised by aggregate queries that are undefined on an empty map."""


PutError: TypeAlias = InvalidIntervalError | OverlappingIntervalsError
