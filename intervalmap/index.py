"""Persistent ordered index of intervals keyed by right bound.

The index is an AVL tree built from immutable nodes. Inserting or removing
copies only the path from the root to the touched node (O(log n) new nodes)
and shares every other subtree with the previous version, so any index value
handed out earlier stays valid and unchanged.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Generic, Optional

from intervalmap.interval import Bound, Interval, V


class _Node(Generic[V]):
    __slots__ = ("key", "interval", "left", "right", "height")

    def __init__(
        self,
        interval: Interval[V],
        left: "Optional[_Node[V]]",
        right: "Optional[_Node[V]]",
    ):
        self.key: Bound = interval.right
        self.interval: Interval[V] = interval
        self.left: Optional[_Node[V]] = left
        self.right: Optional[_Node[V]] = right
        self.height: int = 1 + max(_height(left), _height(right))


def _height(node: "Optional[_Node[Any]]") -> int:
    return node.height if node is not None else 0


def _balance_factor(node: "_Node[Any]") -> int:
    return _height(node.left) - _height(node.right)


def _rotate_right(node: "_Node[V]") -> "_Node[V]":
    pivot = node.left
    assert pivot is not None
    return _Node(pivot.interval, pivot.left, _Node(node.interval, pivot.right, node.right))


def _rotate_left(node: "_Node[V]") -> "_Node[V]":
    pivot = node.right
    assert pivot is not None
    return _Node(pivot.interval, _Node(node.interval, node.left, pivot.left), pivot.right)


def _rebalance(
    interval: Interval[V], left: "Optional[_Node[V]]", right: "Optional[_Node[V]]"
) -> "_Node[V]":
    """Build a node from its parts, rotating if the heights drifted by two."""
    node = _Node(interval, left, right)
    balance = _balance_factor(node)

    if balance > 1:
        assert left is not None
        if _balance_factor(left) < 0:
            node = _Node(interval, _rotate_left(left), right)
        return _rotate_right(node)

    if balance < -1:
        assert right is not None
        if _balance_factor(right) > 0:
            node = _Node(interval, left, _rotate_right(right))
        return _rotate_left(node)

    return node


def _insert(node: "Optional[_Node[V]]", interval: Interval[V]) -> "_Node[V]":
    if node is None:
        return _Node(interval, None, None)

    key = interval.right
    if key == node.key:
        return _Node(interval, node.left, node.right)
    if key < node.key:
        return _rebalance(node.interval, _insert(node.left, interval), node.right)
    return _rebalance(node.interval, node.left, _insert(node.right, interval))


def _pop_min(node: "_Node[V]") -> "tuple[Interval[V], Optional[_Node[V]]]":
    """Detach the leftmost interval, returning it and the remaining subtree."""
    if node.left is None:
        return node.interval, node.right
    smallest, rest = _pop_min(node.left)
    return smallest, _rebalance(node.interval, rest, node.right)


def _remove(node: "Optional[_Node[V]]", key: Bound) -> "Optional[_Node[V]]":
    if node is None:
        return None

    if key == node.key:
        if node.left is None:
            return node.right
        if node.right is None:
            return node.left
        successor, right = _pop_min(node.right)
        return _rebalance(successor, node.left, right)

    if key < node.key:
        left = _remove(node.left, key)
        if left is node.left:
            return node
        return _rebalance(node.interval, left, node.right)

    right = _remove(node.right, key)
    if right is node.right:
        return node
    return _rebalance(node.interval, node.left, right)


# In-order traversal stack as an immutable cons list: (node, rest) or None.
# The head is the next node to visit.
_Stack = Optional[tuple["_Node[Any]", "_Stack"]]


def _push_left_spine(node: "Optional[_Node[Any]]", stack: _Stack) -> _Stack:
    while node is not None:
        stack = (node, stack)
        node = node.left
    return stack


@dataclass(frozen=True)
class Cursor(Generic[V]):
    """Position of an entry in an index, able to step forward in key order.

    A cursor never changes; `OrderedIndex.advance` returns a new one.
    """

    _stack: tuple["_Node[V]", _Stack]

    @property
    def interval(self) -> Interval[V]:
        return self._stack[0].interval


class OrderedIndex(Generic[V]):
    """Immutable balanced tree mapping ``interval.right -> interval``."""

    __slots__ = ("_root", "_size")

    def __init__(self, _root: "Optional[_Node[V]]" = None, _size: int = 0):
        self._root: Optional[_Node[V]] = _root
        self._size: int = _size

    def insert(self, interval: Interval[V]) -> "OrderedIndex[V]":
        """Add an entry at ``interval.right``, replacing any entry already there."""
        grows = self.find(interval.right) is None
        return OrderedIndex(_insert(self._root, interval), self._size + grows)

    def remove(self, interval: Interval[Any]) -> "OrderedIndex[V]":
        """Drop the entry at ``interval.right``; a missing key leaves the index as is."""
        root = _remove(self._root, interval.right)
        if root is self._root:
            return self
        return OrderedIndex(root, self._size - 1)

    def find(self, key: Bound) -> Interval[V] | None:
        """Exact lookup of the entry stored at ``key``."""
        node = self._root
        while node is not None:
            if key == node.key:
                return node.interval
            node = node.left if key < node.key else node.right
        return None

    def ceiling(self, key: Bound) -> Cursor[V] | None:
        """Cursor at the entry with the smallest right bound ``>= key``."""
        stack: _Stack = None
        node = self._root
        while node is not None:
            if key <= node.key:
                stack = (node, stack)
                node = node.left
            else:
                node = node.right
        return Cursor(stack) if stack is not None else None

    def advance(self, cursor: Cursor[V]) -> Cursor[V] | None:
        """Cursor at the entry following ``cursor``, or None past the end."""
        node, rest = cursor._stack
        stack = _push_left_spine(node.right, rest)
        return Cursor(stack) if stack is not None else None

    def values(self) -> Iterator[Interval[V]]:
        """Yield all intervals in ascending right-bound order."""
        stack = _push_left_spine(self._root, None)
        while stack is not None:
            node, rest = stack
            yield node.interval
            stack = _push_left_spine(node.right, rest)

    def first(self) -> Interval[V] | None:
        node = self._root
        if node is None:
            return None
        while node.left is not None:
            node = node.left
        return node.interval

    def last(self) -> Interval[V] | None:
        node = self._root
        if node is None:
            return None
        while node.right is not None:
            node = node.right
        return node.interval

    @property
    def height(self) -> int:
        return _height(self._root)

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._root is not None

    def __iter__(self) -> Iterator[Interval[V]]:
        return self.values()
