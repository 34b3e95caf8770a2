"""Common types, errors and comparison utilities for the sloth library.

Every container in this package compares elements through `compare` and
`leq`, so any type with `__eq__` and `__lt__` can be stored. `Comparable`
lets a class define its order with a single `compare` method and `Flip`
reverses an order (turning min-heaps into max-heaps).
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, List, cast, override

__all__ = [
    "Comparable",
    "EmptyError",
    "EmptyHeap",
    "EmptyQueue",
    "Entry",
    "Flip",
    "Impossible",
    "Iterating",
    "Ordering",
    "Sized",
    "compare",
    "leq",
]


class Impossible(Exception):
    """Exception raised when encountering theoretically impossible states.

    Signals that a structural invariant was broken by maintenance code.
    It is never raised for caller mistakes and never caught by the library.
    """

    pass


class EmptyError(Exception):
    """Raised when inspecting or removing from an empty collection."""

    pass


class EmptyQueue(EmptyError):
    pass


class EmptyHeap(EmptyError):
    pass


class Sized(metaclass=ABCMeta):
    @abstractmethod
    def size(self) -> int: ...

    def null(self) -> bool:
        return self.size() == 0

    def __bool__(self) -> bool:
        return not self.null()

    def __len__(self) -> int:
        return self.size()


class Iterating[U](metaclass=ABCMeta):
    @abstractmethod
    def iter(self) -> Iterator[U]: ...

    def list(self) -> List[U]:
        return list(self.iter())

    def __iter__(self) -> Iterator[U]:
        return self.iter()


class Ordering(Enum):
    """Enumeration representing the result of a comparison operation."""

    Lt = -1
    Eq = 0
    Gt = 1


class Comparable[T](metaclass=ABCMeta):
    @abstractmethod
    def compare(self, other: T) -> Ordering: ...

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, type(self)):
            return self.compare(cast(T, other)) == Ordering.Eq
        else:
            return False

    def __ne__(self, other: Any) -> bool:
        return not self.__eq__(other)

    def __lt__(self, other: T) -> bool:
        return self.compare(other) == Ordering.Lt

    def __le__(self, other: T) -> bool:
        return not self.__gt__(other)

    def __gt__(self, other: T) -> bool:
        return self.compare(other) == Ordering.Gt

    def __ge__(self, other: T) -> bool:
        return not self.__lt__(other)


@dataclass(frozen=True, eq=False)
class Entry[K, V](Comparable["Entry[K, V]"]):
    """A prioritized payload: ordered by `key` alone, `value` rides along.

    Two entries with equal keys tie in every heap and sortable, which makes
    them the natural element for checking tie-breaks and stability.
    """

    key: K
    value: V

    @override
    def compare(self, other: Entry[K, V]) -> Ordering:
        """Compare entries based on their keys only."""
        return compare(self.key, other.key)


@dataclass(frozen=True, eq=False)
class Flip[T](Comparable["Flip[T]"]):
    """A wrapper that flips the comparison result of the wrapped value.

    Example:
        >>> from sloth.common import Flip, compare, Ordering
        >>> compare(1, 2)
        <Ordering.Lt: -1>
        >>> compare(Flip(1), Flip(2))
        <Ordering.Gt: 1>
    """

    value: T

    @override
    def compare(self, other: Flip[T]) -> Ordering:
        """Compare by flipping the result of comparing the wrapped values."""
        result = compare(self.value, other.value)
        if result == Ordering.Lt:
            return Ordering.Gt
        elif result == Ordering.Gt:
            return Ordering.Lt
        else:
            return Ordering.Eq


def compare[T](a: T, b: T) -> Ordering:
    """Compare two values and return their ordering relationship.

    Uses the objects' __eq__ and __lt__ methods to determine the comparison result.

    Args:
        a: First value to compare.
        b: Second value to compare.

    Returns:
        Ordering indicating the relationship between a and b.
    """
    # Elements only promise __eq__ and __lt__
    if getattr(a, "__eq__")(b):
        return Ordering.Eq
    elif getattr(a, "__lt__")(b):
        return Ordering.Lt
    else:
        return Ordering.Gt


def leq[T](a: T, b: T) -> bool:
    """Return True when a is less than or equal to b."""
    return compare(a, b) != Ordering.Gt
