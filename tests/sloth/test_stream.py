"""Tests for lazy streams."""

from typing import List

import pytest

from sloth.common import EmptyError
from sloth.lazy import Lazy
from sloth.stream import PStream, StreamCons


def counting_stream(values: List[int], forced: List[int]) -> PStream[int]:
    """Build a stream that records each cell as it is produced."""

    def build(ix: int) -> PStream[int]:
        if ix == len(values):
            return PStream.empty()
        forced.append(values[ix])
        return StreamCons(values[ix], Lazy.delay(lambda: build(ix + 1)))

    return build(0)


def test_empty_stream():
    """Test creating an empty stream"""
    stream = PStream.empty(int)
    assert stream.null()
    assert stream.size() == 0
    assert stream.list() == []
    assert stream.uncons() is None
    with pytest.raises(EmptyError):
        stream.head()


def test_mk_and_uncons():
    stream = PStream.mk([1, 2, 3])
    assert stream.list() == [1, 2, 3]
    assert stream.size() == 3
    assert stream.head() == 1

    result = stream.uncons()
    assert result is not None
    head, tail = result
    assert head == 1
    assert tail.list() == [2, 3]


def test_cons():
    stream = PStream.singleton(3).cons(2).cons(1)
    assert stream.list() == [1, 2, 3]


def test_append():
    """Test appending two streams"""
    first = PStream.mk([1, 2])
    second = PStream.mk([3, 4])
    assert first.append(second).list() == [1, 2, 3, 4]
    assert (first + second).list() == [1, 2, 3, 4]
    assert PStream.empty(int).append(second) is second
    assert first.append(PStream.empty()).list() == [1, 2]


def test_append_is_lazy():
    """Appending should not force either operand beyond the first cell"""
    forced: List[int] = []
    first = counting_stream([1, 2, 3], forced)
    second_calls: List[int] = []

    def second() -> PStream[int]:
        second_calls.append(1)
        return PStream.mk([4, 5])

    appended = first.append_lazy(Lazy.delay(second))
    assert forced == [1]
    assert appended.head() == 1

    assert appended.take(3).list() == [1, 2, 3]
    assert forced == [1, 2, 3]
    assert second_calls == []

    assert appended.list() == [1, 2, 3, 4, 5]
    assert second_calls == [1]


def test_take():
    stream = PStream.mk([1, 2, 3, 4])
    assert stream.take(0).list() == []
    assert stream.take(2).list() == [1, 2]
    assert stream.take(10).list() == [1, 2, 3, 4]
    assert PStream.empty(int).take(3).null()
    with pytest.raises(ValueError):
        stream.take(-1)


def test_take_forces_at_most_n():
    """Taking n elements should never force more than n cells"""
    forced: List[int] = []
    stream = counting_stream([1, 2, 3, 4, 5], forced)
    taken = stream.take(2)
    assert taken.list() == [1, 2]
    assert forced == [1, 2]


def test_drop():
    stream = PStream.mk([1, 2, 3, 4])
    assert stream.drop(0) is stream
    assert stream.drop(2).list() == [3, 4]
    assert stream.drop(4).null()
    assert stream.drop(10).null()
    with pytest.raises(ValueError):
        stream.drop(-1)


def test_drop_forces_exactly_n():
    """Dropping n elements forces the dropped cells and the next one only"""
    forced: List[int] = []
    stream = counting_stream([1, 2, 3, 4, 5], forced)
    dropped = stream.drop(2)
    assert dropped.head() == 3
    assert forced == [1, 2, 3]


def test_reverse():
    assert PStream.mk([1, 2, 3]).reverse().list() == [3, 2, 1]
    assert PStream.empty(int).reverse().null()


def test_persistence():
    """Operations should never change their operands"""
    stream = PStream.mk([1, 2, 3])
    _ = stream.cons(0)
    _ = stream.append(PStream.mk([4]))
    _ = stream.reverse()
    _ = stream.drop(2)
    assert stream.list() == [1, 2, 3]


def test_shared_cells_are_memoized():
    """Cells produced through one stream are reused by another sharing them"""
    forced: List[int] = []
    stream = counting_stream([1, 2, 3], forced)
    left = stream.append(PStream.mk([10]))
    right = stream.append(PStream.mk([20]))
    assert left.list() == [1, 2, 3, 10]
    assert right.list() == [1, 2, 3, 20]
    assert forced == [1, 2, 3]
