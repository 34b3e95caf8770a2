"""Persistent FIFO queue with amortized O(1) operations (physicist's method).

The front is a single suspended list, rebuilt wholesale (front followed
by the reversed rear) whenever the rear outgrows it. A fully evaluated
prefix of the front is cached next to it so that `head` never forces the
suspension.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional, Tuple, Type, override

from sloth.common import EmptyQueue, Impossible, Iterating, Sized
from sloth.lazy import Lazy
from sloth.stream import PStream

__all__ = ["PhysicistsQueue"]


@dataclass(frozen=True, eq=False)
class PhysicistsQueue[T](Sized, Iterating[T]):
    """A persistent physicist's queue.

    Invariants: `_front_len >= _rear_len`, and `_prefix` is a prefix of the
    value of `_front` that is empty only when the whole queue is empty.

    Attributes:
        _prefix: Evaluated prefix of the front.
        _front_len: Number of elements in the front.
        _front: Suspended front list.
        _rear_len: Number of elements in the rear.
        _rear: Most recently pushed elements, newest first.
    """

    _prefix: PStream[T]
    _front_len: int
    _front: Lazy[PStream[T]]
    _rear_len: int
    _rear: PStream[T]

    @staticmethod
    def empty(_ty: Optional[Type[T]] = None) -> PhysicistsQueue[T]:
        """Create an empty queue.

        Args:
            _ty: Optional type hint for elements (unused).

        Returns:
            An empty queue instance.
        """
        return _PHYSICISTS_EMPTY

    @staticmethod
    def mk(values: Iterable[T]) -> PhysicistsQueue[T]:
        queue: PhysicistsQueue[T] = PhysicistsQueue.empty()
        for value in values:
            queue = queue.snoc(value)
        return queue

    @override
    def null(self) -> bool:
        return self._front_len == 0

    @override
    def size(self) -> int:
        return self._front_len + self._rear_len

    def snoc(self, value: T) -> PhysicistsQueue[T]:
        """Push an element onto the back of the queue.

        Time Complexity: O(1) amortized
        """
        return _physicists_check(
            self._prefix,
            self._front_len,
            self._front,
            self._rear_len + 1,
            self._rear.cons(value),
        )

    def head(self) -> T:
        """Return the front element, reading only the evaluated prefix.

        Raises:
            EmptyQueue: If the queue is empty.
        """
        if self._prefix.null():
            raise EmptyQueue("head of empty queue")
        return self._prefix.head()

    def tail(self) -> PhysicistsQueue[T]:
        """Remove the front element.

        Time Complexity: O(1) amortized

        Raises:
            EmptyQueue: If the queue is empty.
        """
        prefix = self._prefix
        if prefix.null():
            # Resynchronize from the suspension before giving up
            prefix = self._front.force()
        match prefix.uncons():
            case None:
                raise EmptyQueue("tail of empty queue")
            case (_, rest):
                return _physicists_check(
                    rest,
                    self._front_len - 1,
                    self._front.map(_drop_first),
                    self._rear_len,
                    self._rear,
                )
            case _:
                raise Impossible

    def uncons(self) -> Optional[Tuple[T, PhysicistsQueue[T]]]:
        """Split off the front element.

        Returns:
            None if the queue is empty, otherwise (front element, rest of queue).
        """
        if self.null():
            return None
        return (self.head(), self.tail())

    @override
    def iter(self) -> Iterator[T]:
        queue = self
        while not queue.null():
            yield queue.head()
            queue = queue.tail()

    def push(self, value: T) -> PhysicistsQueue[T]:
        """Alias for snoc()."""
        return self.snoc(value)

    def pop(self) -> PhysicistsQueue[T]:
        """Alias for tail()."""
        return self.tail()

    def __rshift__(self, value: T) -> PhysicistsQueue[T]:
        """Alias for snoc()."""
        return self.snoc(value)


_PHYSICISTS_EMPTY: PhysicistsQueue[Any] = PhysicistsQueue(
    PStream.empty(), 0, Lazy.now(PStream.empty()), 0, PStream.empty()
)


def _drop_first[T](front: PStream[T]) -> PStream[T]:
    match front.uncons():
        case None:
            raise Impossible("front shorter than its evaluated prefix")
        case (_, rest):
            return rest
        case _:
            raise Impossible


def _concat_reversed[T](front: PStream[T], rear: PStream[T]) -> PStream[T]:
    rear_values = rear.list()
    rear_values.reverse()
    return PStream.mk(front.list() + rear_values)


def _physicists_check_prefix[T](
    prefix: PStream[T],
    front_len: int,
    front: Lazy[PStream[T]],
    rear_len: int,
    rear: PStream[T],
) -> PhysicistsQueue[T]:
    if prefix.null():
        prefix = front.force()
    return PhysicistsQueue(prefix, front_len, front, rear_len, rear)


def _physicists_check[T](
    prefix: PStream[T],
    front_len: int,
    front: Lazy[PStream[T]],
    rear_len: int,
    rear: PStream[T],
) -> PhysicistsQueue[T]:
    if rear_len <= front_len:
        return _physicists_check_prefix(prefix, front_len, front, rear_len, rear)
    logging.debug("Rotating %d rear elements behind %d front", rear_len, front_len)
    forced = front.force()
    rotated = Lazy.delay(lambda: _concat_reversed(forced, rear))
    return _physicists_check_prefix(
        forced, front_len + rear_len, rotated, 0, PStream.empty()
    )
