from __future__ import annotations

from dataclasses import dataclass
from typing import List, override

from sloth.common import Comparable, Ordering, compare


@dataclass(frozen=True, eq=False)
class Counted(Comparable["Counted"]):
    """An integer wrapper that records every comparison made on it."""

    value: int
    log: List[int]

    @override
    def compare(self, other: Counted) -> Ordering:
        self.log.append(self.value)
        return compare(self.value, other.value)


def counted(values: List[int], log: List[int]) -> List[Counted]:
    return [Counted(value, log) for value in values]
