"""Persistent min-heap as a lazy pairing heap.

Each node keeps at most one eagerly linked child heap. Linking a second
heap under a node folds both children together with its existing pending
merge inside a new suspension, so the pairwise merging that makes
ordinary pairing heaps expensive is deferred, and because the suspension
is memoized it is paid at most once per node however often a shared
version is reused.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Optional, Tuple, Type, override

from sloth.common import EmptyHeap, Impossible, Iterating, Sized, leq
from sloth.lazy import Lazy

__all__ = ["LazyPairingHeap"]


# sealed
class LazyPairingHeap[T](Sized, Iterating[T]):
    """An Okasaki lazy pairing min-heap"""

    @staticmethod
    def empty(_ty: Optional[Type[T]] = None) -> LazyPairingHeap[T]:
        """Create an empty heap.

        Args:
            _ty: Optional type hint for elements (unused).

        Returns:
            An empty heap instance.
        """
        return _PAIRING_EMPTY

    @staticmethod
    def singleton(value: T) -> LazyPairingHeap[T]:
        return PairingNode(
            1, value, LazyPairingHeap.empty(), Lazy.now(LazyPairingHeap.empty())
        )

    @staticmethod
    def mk(values: Iterable[T]) -> LazyPairingHeap[T]:
        heap: LazyPairingHeap[T] = LazyPairingHeap.empty()
        for value in values:
            heap = heap.insert(value)
        return heap

    @override
    def null(self) -> bool:
        match self:
            case PairingEmpty():
                return True
            case _:
                return False

    @override
    def size(self) -> int:
        match self:
            case PairingEmpty():
                return 0
            case PairingNode(size, _, _, _):
                return size
            case _:
                raise Impossible

    def insert(self, value: T) -> LazyPairingHeap[T]:
        """Insert a new element into the heap.

        Time Complexity: O(1)
        """
        return _pairing_merge(LazyPairingHeap.singleton(value), self)

    def merge(self, other: LazyPairingHeap[T]) -> LazyPairingHeap[T]:
        """Merge this heap with another heap.

        Time Complexity: O(1), the pairing work is suspended
        """
        return _pairing_merge(self, other)

    def find_min(self) -> T:
        """Return the minimum element without forcing anything.

        Raises:
            EmptyHeap: If the heap is empty.
        """
        match self:
            case PairingEmpty():
                raise EmptyHeap("find_min of empty heap")
            case PairingNode(_, value, _, _):
                return value
            case _:
                raise Impossible

    def delete_min(self) -> LazyPairingHeap[T]:
        """Remove the minimum element, forcing the root's pending merge.

        Time Complexity: O(log n) amortized

        Raises:
            EmptyHeap: If the heap is empty.
        """
        match self:
            case PairingEmpty():
                raise EmptyHeap("delete_min of empty heap")
            case PairingNode(_, _, child, pending):
                return _pairing_merge(child, pending.force())
            case _:
                raise Impossible

    def uncons(self) -> Optional[Tuple[T, LazyPairingHeap[T]]]:
        """Split off the minimum element.

        Returns:
            None if the heap is empty, otherwise (minimum, rest of heap).
        """
        if self.null():
            return None
        return (self.find_min(), self.delete_min())

    @override
    def iter(self) -> Iterator[T]:
        """Iterate through the heap in ascending order."""
        heap = self
        while not heap.null():
            yield heap.find_min()
            heap = heap.delete_min()

    def fold[Z](self, fn: Callable[[Z, T], Z], acc: Z) -> Z:
        result = acc
        for item in self.iter():
            result = fn(result, item)
        return result

    def __add__(self, other: LazyPairingHeap[T]) -> LazyPairingHeap[T]:
        """Alias for merge()."""
        return self.merge(other)

    def __rshift__(self, value: T) -> LazyPairingHeap[T]:
        """Alias for insert()."""
        return self.insert(value)


@dataclass(frozen=True, eq=False)
class PairingEmpty[T](LazyPairingHeap[T]):
    pass


_PAIRING_EMPTY: LazyPairingHeap[Any] = PairingEmpty()


@dataclass(frozen=True, eq=False)
class PairingNode[T](LazyPairingHeap[T]):
    """A non-empty pairing heap.

    Invariant: `_value` is no greater than any element of `_child` or of
    the value of `_pending`.

    Attributes:
        _size: Number of elements in this heap.
        _value: The minimum element.
        _child: Eagerly linked child heap.
        _pending: Suspended merge of the remaining children.
    """

    _size: int
    _value: T
    _child: LazyPairingHeap[T]
    _pending: Lazy[LazyPairingHeap[T]]


def _pairing_merge[T](
    first: LazyPairingHeap[T], second: LazyPairingHeap[T]
) -> LazyPairingHeap[T]:
    match (first, second):
        case (_, PairingEmpty()):
            return first
        case (PairingEmpty(), _):
            return second
        case (PairingNode(_, x, _, _), PairingNode(_, y, _, _)):
            if leq(x, y):
                return _pairing_link(first, second)
            else:
                return _pairing_link(second, first)
        case _:
            raise Impossible


def _pairing_link[T](
    winner: LazyPairingHeap[T], loser: LazyPairingHeap[T]
) -> LazyPairingHeap[T]:
    match winner:
        case PairingNode(size, value, PairingEmpty(), pending):
            return PairingNode(size + loser.size(), value, loser, pending)
        case PairingNode(size, value, child, pending):
            return PairingNode(
                size + loser.size(),
                value,
                LazyPairingHeap.empty(),
                pending.map(
                    lambda rest: _pairing_merge(_pairing_merge(loser, child), rest)
                ),
            )
        case _:
            raise Impossible("link under an empty heap")
