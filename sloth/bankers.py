"""Persistent FIFO queue with amortized O(1) operations (banker's method).

Both ends are lazy streams. The rear is kept in reverse order and is
rotated onto the end of the front once it grows longer than the front.
The rotation is suspended behind the front, so it only runs after every
element already in the front has been popped, by which time the pops
have paid for it. Because suspensions are memoized, reusing an old
version of the queue never pays for the same rotation twice.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional, Tuple, Type, override

from sloth.common import EmptyQueue, Impossible, Iterating, Sized
from sloth.lazy import Lazy
from sloth.stream import PStream, StreamCons, StreamNil

__all__ = ["BankersQueue"]


@dataclass(frozen=True, eq=False)
class BankersQueue[T](Sized, Iterating[T]):
    """A persistent banker's queue.

    Invariant: `_front_len >= _rear_len` after every public operation.

    Attributes:
        _front_len: Number of elements in the front stream.
        _front: Elements in FIFO order.
        _rear_len: Number of elements in the rear stream.
        _rear: Most recently pushed elements, newest first.
    """

    _front_len: int
    _front: PStream[T]
    _rear_len: int
    _rear: PStream[T]

    @staticmethod
    def empty(_ty: Optional[Type[T]] = None) -> BankersQueue[T]:
        """Create an empty queue.

        Args:
            _ty: Optional type hint for elements (unused).

        Returns:
            An empty queue instance.
        """
        return _BANKERS_EMPTY

    @staticmethod
    def mk(values: Iterable[T]) -> BankersQueue[T]:
        """Create a queue by pushing each value in order."""
        queue: BankersQueue[T] = BankersQueue.empty()
        for value in values:
            queue = queue.snoc(value)
        return queue

    @override
    def null(self) -> bool:
        return self._front_len == 0

    @override
    def size(self) -> int:
        return self._front_len + self._rear_len

    def snoc(self, value: T) -> BankersQueue[T]:
        """Push an element onto the back of the queue.

        Time Complexity: O(1) amortized

        Args:
            value: The element to push.

        Returns:
            A new queue with the element at the back.
        """
        return _bankers_check(
            self._front_len, self._front, self._rear_len + 1, self._rear.cons(value)
        )

    def head(self) -> T:
        """Return the element at the front of the queue.

        Forces nothing: the front cell is always already built.

        Raises:
            EmptyQueue: If the queue is empty.
        """
        match self._front:
            case StreamNil():
                raise EmptyQueue("head of empty queue")
            case StreamCons(head, _):
                return head
            case _:
                raise Impossible

    def tail(self) -> BankersQueue[T]:
        """Remove the element at the front of the queue.

        Time Complexity: O(1) amortized

        Raises:
            EmptyQueue: If the queue is empty.
        """
        match self._front:
            case StreamNil():
                raise EmptyQueue("tail of empty queue")
            case StreamCons(_, rest):
                return _bankers_check(
                    self._front_len - 1, rest.force(), self._rear_len, self._rear
                )
            case _:
                raise Impossible

    def uncons(self) -> Optional[Tuple[T, BankersQueue[T]]]:
        """Split off the front element.

        Returns:
            None if the queue is empty, otherwise (front element, rest of queue).
        """
        if self.null():
            return None
        return (self.head(), self.tail())

    @override
    def iter(self) -> Iterator[T]:
        """Iterate from front to back without modifying the queue."""
        queue = self
        while not queue.null():
            yield queue.head()
            queue = queue.tail()

    def push(self, value: T) -> BankersQueue[T]:
        """Alias for snoc()."""
        return self.snoc(value)

    def pop(self) -> BankersQueue[T]:
        """Alias for tail()."""
        return self.tail()

    def __rshift__(self, value: T) -> BankersQueue[T]:
        """Alias for snoc()."""
        return self.snoc(value)


_BANKERS_EMPTY: BankersQueue[Any] = BankersQueue(
    0, PStream.empty(), 0, PStream.empty()
)


def _bankers_check[T](
    front_len: int, front: PStream[T], rear_len: int, rear: PStream[T]
) -> BankersQueue[T]:
    if rear_len <= front_len:
        return BankersQueue(front_len, front, rear_len, rear)
    logging.debug("Rotating %d rear elements behind %d front", rear_len, front_len)
    rotated = front.append_lazy(Lazy.delay(rear.reverse))
    return BankersQueue(front_len + rear_len, rotated, 0, PStream.empty())
