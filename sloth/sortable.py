"""Persistent sortable collection using lazy bottom-up merge sort.

Elements are kept in sorted segments whose sizes follow the binary
representation of the element count (a segment of size 2^k exists iff bit
k of the count is set). Adding an element merges segments the way a
binary increment propagates carries; the whole cascade is suspended, so
`add` is O(log n) amortized even when old versions are reused.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple, Type, override

from sloth.common import Impossible, Sized, leq
from sloth.lazy import Lazy
from sloth.stream import PStream

__all__ = ["BottomUpMergeSort"]


type Segment[T] = Tuple[T, ...]


@dataclass(frozen=True, eq=False)
class BottomUpMergeSort[T](Sized):
    """An Okasaki bottom-up mergesort collection.

    Sorting is stable: elements comparing equal come out in the order
    they were added.

    Attributes:
        _size: Number of elements added.
        _segments: Suspended list of sorted segments, smallest first.
    """

    _size: int
    _segments: Lazy[PStream[Segment[T]]]

    @staticmethod
    def empty(_ty: Optional[Type[T]] = None) -> BottomUpMergeSort[T]:
        return _SORTABLE_EMPTY

    @staticmethod
    def mk(values: Iterable[T]) -> BottomUpMergeSort[T]:
        sortable: BottomUpMergeSort[T] = BottomUpMergeSort.empty()
        for value in values:
            sortable = sortable.add(value)
        return sortable

    @override
    def size(self) -> int:
        return self._size

    def add(self, value: T) -> BottomUpMergeSort[T]:
        """Add an element.

        Time Complexity: O(log n) amortized

        Args:
            value: The element to add.

        Returns:
            A new collection containing the element.
        """
        size = self._size
        return BottomUpMergeSort(
            size + 1,
            self._segments.map(lambda segments: _add_segment((value,), size, segments)),
        )

    def sort(self) -> List[T]:
        """Return all elements in ascending order.

        Time Complexity: O(n log n), not amortized
        """
        segments = self._segments.force()
        logging.debug("Sorting %d elements from %d segments", self._size, segments.size())
        acc: Segment[T] = ()
        for segment in segments.iter():
            # Smaller segments hold newer elements
            acc = _merge(segment, acc)
        return list(acc)

    def segments(self) -> List[Segment[T]]:
        """Return the sorted segments, smallest first."""
        return self._segments.force().list()

    def __rshift__(self, value: T) -> BottomUpMergeSort[T]:
        """Alias for add()."""
        return self.add(value)


_SORTABLE_EMPTY: BottomUpMergeSort[Any] = BottomUpMergeSort(0, Lazy.now(PStream.empty()))


def _merge[T](older: Segment[T], newer: Segment[T]) -> Segment[T]:
    # Ties go to the older segment
    merged: List[T] = []
    i = 0
    j = 0
    while i < len(older) and j < len(newer):
        if leq(older[i], newer[j]):
            merged.append(older[i])
            i += 1
        else:
            merged.append(newer[j])
            j += 1
    merged.extend(older[i:])
    merged.extend(newer[j:])
    return tuple(merged)


def _add_segment[T](
    segment: Segment[T], size: int, segments: PStream[Segment[T]]
) -> PStream[Segment[T]]:
    while size % 2 == 1:
        match segments.uncons():
            case None:
                raise Impossible("segment count does not match size")
            case (head, rest):
                segment = _merge(head, segment)
                segments = rest
                size //= 2
            case _:
                raise Impossible
    return segments.cons(segment)
