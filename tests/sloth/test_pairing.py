from typing import List

import pytest

from sloth.common import EmptyHeap, Flip
from sloth.pairing import LazyPairingHeap, PairingNode
from tests.sloth.counted import counted


def test_empty_heap():
    heap = LazyPairingHeap.empty(int)
    assert heap.null()
    assert heap.size() == 0
    assert heap.uncons() is None

    with pytest.raises(EmptyHeap):
        heap.find_min()
    with pytest.raises(EmptyHeap):
        heap.delete_min()


def test_delete_min_sequence():
    heap = LazyPairingHeap.mk([5, 3, 8, 1, 9, 2])
    assert heap.size() == 6

    extracted: List[int] = []
    while not heap.null():
        extracted.append(heap.find_min())
        heap = heap.delete_min()
    assert extracted == [1, 2, 3, 5, 8, 9]


def test_link_defers_second_child():
    """Linking under a node with a child suspends the merge of its children"""
    heap = LazyPairingHeap.mk([1, 2])
    assert isinstance(heap, PairingNode)
    assert heap._child.size() == 1

    heap = heap.insert(3)
    assert isinstance(heap, PairingNode)
    assert heap._child.null()
    assert not heap._pending.forced
    assert heap.find_min() == 1
    assert not heap._pending.forced


def test_pending_merge_is_memoized():
    """Deleting the minimum twice from one version pairs its children once"""
    log: List[int] = []
    heap = LazyPairingHeap.mk(counted([0, 7, 3, 9, 1, 8, 2, 6, 4, 5], log))

    log.clear()
    first = heap.delete_min()
    assert isinstance(heap, PairingNode)
    assert heap._pending.forced
    first_cost = len(log)

    log.clear()
    second = heap.delete_min()
    # Only the final merge of the eager child with the forced result remains
    assert len(log) <= 2
    assert len(log) < first_cost
    assert [x.value for x in first.iter()] == [x.value for x in second.iter()]


def test_merge():
    heap1 = LazyPairingHeap.mk([1, 3, 5])
    heap2 = LazyPairingHeap.mk([2, 4, 6])
    merged = heap1 + heap2
    assert merged.size() == 6
    assert merged.list() == [1, 2, 3, 4, 5, 6]
    assert heap1.merge(LazyPairingHeap.empty()) is heap1
    assert LazyPairingHeap.empty(int).merge(heap2) is heap2


def test_persistence():
    original = LazyPairingHeap.mk([3, 1, 4])
    inserted = original >> 2
    deleted = inserted.delete_min()
    assert original.list() == [1, 3, 4]
    assert inserted.list() == [1, 2, 3, 4]
    assert deleted.list() == [2, 3, 4]


def test_max_heap_with_flip():
    heap = LazyPairingHeap.mk([Flip(x) for x in [5, 9, 1, 7]])
    assert [flip.value for flip in heap.iter()] == [9, 7, 5, 1]


def test_string_values():
    words = ["zebra", "apple", "banana", "cherry"]
    heap = LazyPairingHeap.mk(words)
    assert heap.find_min() == "apple"
    assert heap.list() == sorted(words)


def test_long_pending_chains():
    """Ascending inserts pile pending merges under one root"""
    ascending = LazyPairingHeap.mk(range(5000))
    assert ascending.list() == list(range(5000))

    descending = LazyPairingHeap.mk(range(5000, 0, -1))
    assert descending.list() == list(range(1, 5001))


def test_fold():
    heap = LazyPairingHeap.mk([3, 1, 2])
    assert heap.fold(lambda acc, x: acc + [x], []) == [1, 2, 3]
    assert LazyPairingHeap.empty(int).fold(lambda acc, x: acc + x, 0) == 0
