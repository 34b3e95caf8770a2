from typing import List

import pytest

from sloth.bankers import BankersQueue
from sloth.common import EmptyError, EmptyQueue
from sloth.stream import StreamCons


def test_empty_queue():
    """Test creating an empty queue and asserting it is empty"""
    queue = BankersQueue.empty(int)
    assert queue.null()
    assert queue.size() == 0
    assert not queue
    assert queue.list() == []
    assert queue.uncons() is None

    with pytest.raises(EmptyQueue):
        queue.head()
    with pytest.raises(EmptyQueue):
        queue.tail()


def test_empty_queue_error_is_empty_error():
    with pytest.raises(EmptyError):
        BankersQueue.empty(int).pop()


def test_push_pop_order():
    """Pushing 1, 2, 3 then popping three times yields 1, 2, 3"""
    queue = BankersQueue.empty(int).push(1).push(2).push(3)
    popped: List[int] = []
    for _ in range(3):
        popped.append(queue.head())
        queue = queue.pop()
    assert popped == [1, 2, 3]
    assert queue.null()


def test_rotation_is_deferred():
    """The reversed rear is not built until the front runs out"""
    queue = BankersQueue.empty(int).snoc(1).snoc(2).snoc(3)
    front = queue._front
    assert isinstance(front, StreamCons)
    assert not front._tail.forced

    # Reading the head forces nothing
    assert queue.head() == 1
    assert not front._tail.forced

    rest = queue.tail()
    assert front._tail.forced
    assert rest.list() == [2, 3]


def test_invariant_front_not_shorter_than_rear():
    queue = BankersQueue.empty(int)
    for i in range(50):
        queue = queue.snoc(i)
        assert queue._front_len >= queue._rear_len
    while not queue.null():
        queue = queue.tail()
        assert queue._front_len >= queue._rear_len


def test_persistence():
    """Operations on a queue never change it"""
    queue = BankersQueue.mk([1, 2, 3, 4])
    assert queue.head() == 1
    popped = queue.tail()
    assert queue.head() == 1
    assert popped.head() == 2

    pushed = queue.snoc(5)
    assert queue.list() == [1, 2, 3, 4]
    assert pushed.list() == [1, 2, 3, 4, 5]

    # A second future from the same version
    again = queue.tail()
    assert again.list() == popped.list() == [2, 3, 4]


def test_uncons():
    queue = BankersQueue.mk(["a", "b"])
    result = queue.uncons()
    assert result is not None
    head, rest = result
    assert head == "a"
    assert rest.list() == ["b"]


def test_size_and_operators():
    queue = BankersQueue.empty(int) >> 1 >> 2 >> 3
    assert queue.size() == 3
    assert len(queue) == 3
    assert bool(queue)
    assert list(queue) == [1, 2, 3]


def test_large_queue():
    """Test with a larger number of interleaved operations"""
    queue = BankersQueue.mk(range(2000))
    expected = list(range(2000))
    for i in range(500):
        assert queue.head() == expected[0]
        queue = queue.tail().snoc(2000 + i)
        expected = expected[1:] + [2000 + i]
    assert queue.list() == expected
