"""Persistent lazy streams (cons lists with suspended tails).

Each cell holds its head eagerly and its tail as a `Lazy`, so a stream is
produced on demand and every cell, once produced, is shared by all
streams built on top of it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional, Tuple, Type, override

from sloth.common import EmptyError, Impossible, Iterating, Sized
from sloth.lazy import Lazy

__all__ = ["PStream"]


# sealed
class PStream[T](Sized, Iterating[T]):
    """A persistent stream with memoized lazy tails"""

    @staticmethod
    def empty(_ty: Optional[Type[T]] = None) -> PStream[T]:
        """Create an empty stream.

        Args:
            _ty: Optional type hint (unused).

        Returns:
            The empty stream.
        """
        return _STREAM_NIL

    @staticmethod
    def singleton(value: T) -> PStream[T]:
        return StreamCons(value, Lazy.now(PStream.empty()))

    @staticmethod
    def mk(values: Iterable[T]) -> PStream[T]:
        """Create a stream from a finite iterable.

        Args:
            values: Values to include, in order.

        Returns:
            A stream whose cells are already evaluated.
        """
        stream: PStream[T] = PStream.empty()
        for value in reversed(tuple(values)):
            stream = StreamCons(value, Lazy.now(stream))
        return stream

    @override
    def null(self) -> bool:
        match self:
            case StreamNil():
                return True
            case _:
                return False

    @override
    def size(self) -> int:
        """Count the elements, forcing the whole stream."""
        count = 0
        for _ in self.iter():
            count += 1
        return count

    def uncons(self) -> Optional[Tuple[T, PStream[T]]]:
        """Split off the first element, forcing the tail.

        Returns:
            None if the stream is empty, otherwise (head, tail).
        """
        match self:
            case StreamNil():
                return None
            case StreamCons(head, tail):
                return (head, tail.force())
            case _:
                raise Impossible

    def head(self) -> T:
        """Return the first element without forcing anything.

        Raises:
            EmptyError: If the stream is empty.
        """
        match self:
            case StreamNil():
                raise EmptyError("head of empty stream")
            case StreamCons(head, _):
                return head
            case _:
                raise Impossible

    def cons(self, value: T) -> PStream[T]:
        """Prepend an element."""
        return StreamCons(value, Lazy.now(self))

    def append(self, other: PStream[T]) -> PStream[T]:
        """Lazily append another stream to this one.

        Only the first cell is built now; `other` is not touched until
        this stream is exhausted.
        """
        return _stream_append(self, Lazy.now(other))

    def append_lazy(self, other: Lazy[PStream[T]]) -> PStream[T]:
        """Lazily append a suspended stream to this one.

        The suspension is forced only once every element of this stream
        has been produced (immediately if this stream is empty).
        """
        return _stream_append(self, other)

    def take(self, n: int) -> PStream[T]:
        """Lazily keep at most the first n elements.

        Raises:
            ValueError: If n is negative.
        """
        if n < 0:
            raise ValueError("take count must be non-negative")
        return _stream_take(n, self)

    def drop(self, n: int) -> PStream[T]:
        """Eagerly discard the first n elements.

        Forces exactly the discarded cells and nothing beyond them.

        Raises:
            ValueError: If n is negative.
        """
        if n < 0:
            raise ValueError("drop count must be non-negative")
        return _stream_drop(n, self)

    def reverse(self) -> PStream[T]:
        """Eagerly reverse the stream. Forces every cell."""
        return _stream_reverse(self)

    @override
    def iter(self) -> Iterator[T]:
        """Iterate from first to last, forcing cells as they are reached."""
        return _stream_iter(self)

    def __add__(self, other: PStream[T]) -> PStream[T]:
        """Alias for append()."""
        return self.append(other)


@dataclass(frozen=True, eq=False)
class StreamNil[T](PStream[T]):
    pass


_STREAM_NIL: PStream[Any] = StreamNil()


@dataclass(frozen=True, eq=False)
class StreamCons[T](PStream[T]):
    """A stream cell.

    Attributes:
        _head: The first element.
        _tail: Suspension producing the rest of the stream.
    """

    _head: T
    _tail: Lazy[PStream[T]]


def _stream_append[T](first: PStream[T], second: Lazy[PStream[T]]) -> PStream[T]:
    match first:
        case StreamNil():
            return second.force()
        case StreamCons(head, tail):
            return StreamCons(head, tail.map(lambda rest: _stream_append(rest, second)))
        case _:
            raise Impossible


def _stream_take[T](n: int, stream: PStream[T]) -> PStream[T]:
    if n == 0:
        return PStream.empty()
    match stream:
        case StreamNil():
            return stream
        case StreamCons(head, _) if n == 1:
            return StreamCons(head, Lazy.now(PStream.empty()))
        case StreamCons(head, tail):
            return StreamCons(head, tail.map(lambda rest: _stream_take(n - 1, rest)))
        case _:
            raise Impossible


def _stream_drop[T](n: int, stream: PStream[T]) -> PStream[T]:
    while n > 0:
        match stream:
            case StreamNil():
                return stream
            case StreamCons(_, tail):
                stream = tail.force()
                n -= 1
            case _:
                raise Impossible
    return stream


def _stream_reverse[T](stream: PStream[T]) -> PStream[T]:
    acc: PStream[T] = PStream.empty()
    while True:
        match stream:
            case StreamNil():
                return acc
            case StreamCons(head, tail):
                acc = StreamCons(head, Lazy.now(acc))
                stream = tail.force()
            case _:
                raise Impossible


def _stream_iter[T](stream: PStream[T]) -> Iterator[T]:
    while True:
        match stream:
            case StreamNil():
                return
            case StreamCons(head, tail):
                yield head
                stream = tail.force()
            case _:
                raise Impossible
