from __future__ import annotations

import heapq
import itertools
from typing import Generic, List, Tuple, TypeVar

T = TypeVar("T")


class Frontier(Generic[T]):
    """Min-heap of pending search nodes keyed by lower bound.

    Ties on the bound are broken by insertion order, earliest first, so two
    runs over the same input pop nodes in the same sequence.
    """

    def __init__(self) -> None:
        self._heap: List[Tuple[float, int, T]] = []
        self._seq = itertools.count()

    def push(self, bound: float, item: T) -> None:
        heapq.heappush(self._heap, (bound, next(self._seq), item))

    def pop(self) -> T:
        if not self._heap:
            raise IndexError("pop from an empty frontier")
        return heapq.heappop(self._heap)[2]

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)


__all__ = ["Frontier"]
