"""Persistent min-heap as a suspended forest of binomial trees.

The forest is kept in strictly increasing rank order with at most one tree
per rank, so it behaves like a binary number: inserting a tree carries
through equal ranks by linking. Insertion, merge and deletion all return
heaps whose forest is a suspension, so a carry chain is only paid for when
some later operation actually looks at the forest, and only once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Optional, Tuple, Type, override

from sloth.common import EmptyHeap, Impossible, Iterating, Sized, leq
from sloth.lazy import Lazy
from sloth.stream import PStream

__all__ = ["LazyBinomialHeap"]


@dataclass(frozen=True, eq=False)
class BinomialTree[T]:
    """A heap-ordered binomial tree with exactly 2^rank elements.

    Attributes:
        rank: Number of children.
        root: The smallest element of the tree.
        children: Subtrees in decreasing rank order.
    """

    rank: int
    root: T
    children: PStream[BinomialTree[T]]


type Forest[T] = PStream[BinomialTree[T]]


@dataclass(frozen=True, eq=False)
class LazyBinomialHeap[T](Sized, Iterating[T]):
    """An Okasaki lazy binomial min-heap"""

    _size: int
    _forest: Lazy[Forest[T]]

    @staticmethod
    def empty(_ty: Optional[Type[T]] = None) -> LazyBinomialHeap[T]:
        """Create an empty heap.

        Args:
            _ty: Optional type hint for elements (unused).

        Returns:
            An empty heap instance.
        """
        return _BINOMIAL_EMPTY

    @staticmethod
    def singleton(value: T) -> LazyBinomialHeap[T]:
        return LazyBinomialHeap.empty().insert(value)

    @staticmethod
    def mk(values: Iterable[T]) -> LazyBinomialHeap[T]:
        """Create a heap from an iterable of elements.

        Args:
            values: Iterable of elements to insert into the heap.

        Returns:
            A heap containing all the given elements.
        """
        heap: LazyBinomialHeap[T] = LazyBinomialHeap.empty()
        for value in values:
            heap = heap.insert(value)
        return heap

    @override
    def null(self) -> bool:
        return self._size == 0

    @override
    def size(self) -> int:
        return self._size

    def insert(self, value: T) -> LazyBinomialHeap[T]:
        """Insert a new element into the heap.

        Time Complexity: O(1) amortized

        Args:
            value: The element to insert.

        Returns:
            A new heap containing the inserted element.
        """
        tree = BinomialTree(0, value, PStream.empty())
        return LazyBinomialHeap(
            self._size + 1, self._forest.map(lambda forest: _insert_tree(tree, forest))
        )

    def merge(self, other: LazyBinomialHeap[T]) -> LazyBinomialHeap[T]:
        """Merge this heap with another heap.

        Time Complexity: O(log n) amortized

        Args:
            other: The heap to merge with this one.

        Returns:
            A new heap containing all elements from both heaps.
        """
        size = self._size + other._size
        mine = self._forest
        theirs = other._forest
        # Suspend over the larger forest so nested forcing stays logarithmic
        if other._size > self._size:
            return LazyBinomialHeap(
                size, theirs.map(lambda forest: _merge_forests(mine.force(), forest))
            )
        return LazyBinomialHeap(
            size, mine.map(lambda forest: _merge_forests(forest, theirs.force()))
        )

    def find_min(self) -> T:
        """Return the minimum element.

        Time Complexity: O(log n) amortized

        Raises:
            EmptyHeap: If the heap is empty.
        """
        tree, _ = _remove_min_tree(self._forest.force())
        return tree.root

    def delete_min(self) -> LazyBinomialHeap[T]:
        """Remove the minimum element.

        Time Complexity: O(log n) amortized

        Raises:
            EmptyHeap: If the heap is empty.
        """
        tree, rest = _remove_min_tree(self._forest.force())
        return LazyBinomialHeap(
            self._size - 1,
            Lazy.delay(lambda: _merge_forests(tree.children.reverse(), rest)),
        )

    def uncons(self) -> Optional[Tuple[T, LazyBinomialHeap[T]]]:
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
        """Fold the heap in ascending order with an accumulator."""
        result = acc
        for item in self.iter():
            result = fn(result, item)
        return result

    def __add__(self, other: LazyBinomialHeap[T]) -> LazyBinomialHeap[T]:
        """Alias for merge()."""
        return self.merge(other)

    def __rshift__(self, value: T) -> LazyBinomialHeap[T]:
        """Alias for insert()."""
        return self.insert(value)


_BINOMIAL_EMPTY: LazyBinomialHeap[Any] = LazyBinomialHeap(0, Lazy.now(PStream.empty()))


def _link[T](first: BinomialTree[T], second: BinomialTree[T]) -> BinomialTree[T]:
    # Ties go to the first tree
    if leq(first.root, second.root):
        return BinomialTree(first.rank + 1, first.root, first.children.cons(second))
    else:
        return BinomialTree(second.rank + 1, second.root, second.children.cons(first))


def _insert_tree[T](tree: BinomialTree[T], forest: Forest[T]) -> Forest[T]:
    while True:
        match forest.uncons():
            case None:
                return PStream.singleton(tree)
            case (head, rest):
                if tree.rank < head.rank:
                    return forest.cons(tree)
                elif tree.rank == head.rank:
                    tree = _link(tree, head)
                    forest = rest
                else:
                    raise Impossible("forest rank order broken")
            case _:
                raise Impossible


def _merge_forests[T](first: Forest[T], second: Forest[T]) -> Forest[T]:
    match first.uncons():
        case None:
            return second
        case (first_head, first_rest):
            match second.uncons():
                case None:
                    return first
                case (second_head, second_rest):
                    if first_head.rank < second_head.rank:
                        return _merge_forests(first_rest, second).cons(first_head)
                    elif second_head.rank < first_head.rank:
                        return _merge_forests(first, second_rest).cons(second_head)
                    else:
                        return _insert_tree(
                            _link(first_head, second_head),
                            _merge_forests(first_rest, second_rest),
                        )
                case _:
                    raise Impossible
        case _:
            raise Impossible


def _remove_min_tree[T](forest: Forest[T]) -> Tuple[BinomialTree[T], Forest[T]]:
    trees = forest.list()
    if not trees:
        raise EmptyHeap("empty heap")
    best = 0
    for ix in range(1, len(trees)):
        # First occurrence wins ties
        if not leq(trees[best].root, trees[ix].root):
            best = ix
    rest: Forest[T] = PStream.empty()
    for ix in reversed(range(len(trees))):
        if ix != best:
            rest = rest.cons(trees[ix])
    return (trees[best], rest)
