from sloth.bankers import BankersQueue
from sloth.binomial import LazyBinomialHeap
from sloth.common import (
    Comparable,
    EmptyError,
    EmptyHeap,
    EmptyQueue,
    Entry,
    Flip,
    Impossible,
    Ordering,
)
from sloth.lazy import Lazy
from sloth.pairing import LazyPairingHeap
from sloth.physicists import PhysicistsQueue
from sloth.sortable import BottomUpMergeSort
from sloth.stream import PStream

__all__ = [
    "BankersQueue",
    "BottomUpMergeSort",
    "Comparable",
    "EmptyError",
    "EmptyHeap",
    "EmptyQueue",
    "Entry",
    "Flip",
    "Impossible",
    "Lazy",
    "LazyBinomialHeap",
    "LazyPairingHeap",
    "Ordering",
    "PStream",
    "PhysicistsQueue",
]
