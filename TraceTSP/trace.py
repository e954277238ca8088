"""Search-tree records emitted by the branch-and-bound solver.

Every record here is immutable. The solver builds a new ``PartialSolution`` for
each state it creates and copies it into a ``BranchingEvent``; marking a node
as pruned or closing a complete tour produces a new value instead of editing
one that may already sit in the log.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from TraceTSP.utils.taxonomy import EventAction


def _finite_or_none(value: float) -> float | None:
    return float(value) if math.isfinite(value) else None


def format_cost(value: float) -> str:
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return f"{value:.1f}"


@dataclass(frozen=True)
class PartialSolution:
    """One state of the search tree: a tour prefix starting at the source."""

    id: str
    path: Tuple[str, ...]
    cost: float
    lower_bound: float
    level: int
    is_complete: bool
    is_pruned: bool = False
    parent_id: Optional[str] = None

    @property
    def visited(self) -> frozenset[str]:
        return frozenset(self.path)

    @property
    def last(self) -> str:
        return self.path[-1]

    def pruned(self) -> "PartialSolution":
        return replace(self, is_pruned=True)

    def closed(self, cycle: Sequence[str], total_cost: float) -> "PartialSolution":
        """Copy carrying the full round trip ``cycle`` and its total cost."""
        return replace(self, path=tuple(cycle), cost=total_cost, is_complete=True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "path": list(self.path),
            "cost": _finite_or_none(self.cost),
            "lower_bound": _finite_or_none(self.lower_bound),
            "level": self.level,
            "is_complete": self.is_complete,
            "is_pruned": self.is_pruned,
            "parent_id": self.parent_id,
        }


@dataclass(frozen=True)
class BranchingEvent:
    solution: PartialSolution
    action: EventAction
    message: str
    timestamp: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action": self.action.value,
            "message": self.message,
            "timestamp": self.timestamp,
            "solution": self.solution.to_dict(),
        }


class EventLog(Sequence[BranchingEvent]):
    """Append-only, ordered record of search events."""

    def __init__(self) -> None:
        self._events: List[BranchingEvent] = []

    def append(self, event: BranchingEvent) -> None:
        self._events.append(event)

    def freeze(self) -> Tuple[BranchingEvent, ...]:
        return tuple(self._events)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(self._events[index])
        return self._events[index]

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[BranchingEvent]:
        return iter(self._events)


def explore_message(solution: PartialSolution) -> str:
    return f"Exploring {'→'.join(solution.path)}, bound: {format_cost(solution.lower_bound)}"


def prune_child_message(solution: PartialSolution) -> str:
    return f"Pruned {'→'.join(solution.path)}: bound {format_cost(solution.lower_bound)}"


def prune_message(solution: PartialSolution, best_cost: float) -> str:
    return f"Pruned: bound {format_cost(solution.lower_bound)} ≥ best {format_cost(best_cost)}"


def complete_message(total_cost: float) -> str:
    return f"New best: {format_cost(total_cost)}"


__all__ = [
    "BranchingEvent",
    "EventLog",
    "PartialSolution",
    "complete_message",
    "explore_message",
    "format_cost",
    "prune_child_message",
    "prune_message",
]
