from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from intervalmap.errors import InvalidIntervalError

Bound = Any
V = TypeVar("V")


@dataclass(frozen=True, kw_only=True)
class Interval(Generic[V]):
    """A left-open, right-closed range ``(left, right]`` carrying a value.

    Bounds may be of any type with a consistent total order; mixing
    incomparable bound types within one map is the caller's problem.
    """

    left: Bound
    right: Bound
    value: V | None = None

    def __post_init__(self) -> None:
        if not self.left < self.right:
            raise InvalidIntervalError(self.left, self.right)

    @property
    def bounds(self) -> tuple[Bound, Bound]:
        return (self.left, self.right)

    def contains(self, key: Bound) -> bool:
        return self.left < key <= self.right

    def overlaps(self, other: "Interval[Any]") -> bool:
        """True unless the two intervals share no key.

        Touching at a boundary (``self.right == other.left``) is not overlap.
        """
        return not (self.right <= other.left or other.right <= self.left)

    def __str__(self) -> str:
        return f"({self.left!r}, {self.right!r}]: {self.value!r}"
