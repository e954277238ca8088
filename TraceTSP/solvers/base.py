from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np

from TraceTSP.trace import BranchingEvent
from TraceTSP.utils.taxonomy import SolveStatus


@dataclass(frozen=True)
class Tour:
    city_ids: Tuple[str, ...]
    total_cost: float


@dataclass
class SolveResult:
    """Container capturing the outcome of a traced solve."""

    name: str
    path: List[str] | None
    cost: float | None
    elapsed: float
    status: SolveStatus
    events: Tuple[BranchingEvent, ...] = ()
    explored_count: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def best_tour(self) -> Tour | None:
        if self.path is None or self.cost is None:
            return None
        return Tour(city_ids=tuple(self.path), total_cost=self.cost)


class SourceNotFoundError(KeyError):
    """Raised when the source city id is not part of the index mapping."""

    def __init__(self, source: str | None):
        super().__init__(source)
        self.source = source

    def __str__(self) -> str:
        if self.source is None:
            return "No source node given and the problem has no cities"
        return f"Source node {self.source} not found"


class TimeLimitExpired(Exception):
    """Raised when a search exceeds the allotted wall clock budget."""


class SolveCancelled(Exception):
    """Raised when a caller asks a running search to stop."""


def current_time() -> float:
    return time.perf_counter()


def remaining_budget(start_time: float, time_limit: float) -> float:
    return time_limit - (current_time() - start_time)


def enforce_time_budget(start_time: float, time_limit: float | None) -> None:
    if time_limit is None:
        return
    if remaining_budget(start_time, time_limit) <= 0:
        raise TimeLimitExpired("Time budget exhausted")


def enforce_not_cancelled(cancel_event: threading.Event | None) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise SolveCancelled("Solve cancelled by caller")


def compute_cycle_cost(dist_matrix: np.ndarray, cycle: Sequence[int]) -> float:
    """Compute tour cost (including return leg)."""
    if not cycle:
        return float("inf")
    cost = 0.0
    for i in range(len(cycle)):
        a = cycle[i]
        b = cycle[(i + 1) % len(cycle)]
        if a == b:
            continue
        cost += float(dist_matrix[a, b])
    return cost


def best_cycle(points: Sequence[Any]) -> List[Any]:
    cycle = list(points)
    if cycle and cycle[0] != cycle[-1]:
        cycle.append(cycle[0])
    return cycle


class BaseSolver:
    """Common interface for traced TSP solvers."""

    name: str

    def solve(self, time_limit: float | None = None, cancel_event: threading.Event | None = None) -> SolveResult:  # noqa: D401
        """Run the search to exhaustion and return the best tour with its trace."""
        raise NotImplementedError

    def __call__(self, time_limit: float | None = None, cancel_event: threading.Event | None = None) -> SolveResult:
        return self.solve(time_limit=time_limit, cancel_event=cancel_event)


__all__ = [
    "BaseSolver",
    "SolveCancelled",
    "SolveResult",
    "SolveStatus",
    "SourceNotFoundError",
    "TimeLimitExpired",
    "Tour",
    "best_cycle",
    "compute_cycle_cost",
    "current_time",
    "enforce_not_cancelled",
    "enforce_time_budget",
    "remaining_budget",
]
