"""Paced replay of a finished event trace for display.

Playback only reads the events it is given. It never feeds back into a solve
and never edits the sequence, so the same trace can be replayed any number of
times.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from TraceTSP.trace import BranchingEvent, PartialSolution
from TraceTSP.utils.taxonomy import EventAction

BASE_DELAY = 0.2
TARGET_BATCHES = 20


def default_batch_size(total: int) -> int:
    return max(1, total // TARGET_BATCHES)


def iter_batches(events: Sequence[BranchingEvent], batch_size: int | None = None) -> Iterator[Tuple[BranchingEvent, ...]]:
    if batch_size is None:
        batch_size = default_batch_size(len(events))
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")
    for start in range(0, len(events), batch_size):
        yield tuple(events[start:start + batch_size])


@dataclass
class PlaybackState:
    total_steps: int
    current_step: int = 0
    current_solutions: List[PartialSolution] = field(default_factory=list)
    explored_solutions: List[PartialSolution] = field(default_factory=list)
    last_solution: Optional[PartialSolution] = None
    best_cost: float = float("inf")

    @property
    def finished(self) -> bool:
        return self.current_step >= self.total_steps

    def apply(self, batch: Sequence[BranchingEvent]) -> None:
        for event in batch:
            # Open branches are the incomplete nodes still being explored.
            if event.action is EventAction.EXPLORE and not event.solution.is_complete:
                self.current_solutions.append(event.solution)
            else:
                self.explored_solutions.append(event.solution)
            if event.action is EventAction.COMPLETE:
                self.best_cost = min(self.best_cost, event.solution.cost)
        if batch:
            self.last_solution = batch[-1].solution
        self.current_step += len(batch)


def play(
    events: Sequence[BranchingEvent],
    speed: float = 1.0,
    *,
    batch_size: int | None = None,
    sleep: Callable[[float], None] = time.sleep,
    on_batch: Callable[[Tuple[BranchingEvent, ...], PlaybackState], None] | None = None,
) -> PlaybackState:
    """Replay ``events`` in batches, pausing ``BASE_DELAY / speed`` between them."""
    if speed <= 0:
        raise ValueError("speed must be positive")
    state = PlaybackState(total_steps=len(events))
    delay = BASE_DELAY / speed
    for batch in iter_batches(events, batch_size):
        state.apply(batch)
        if on_batch is not None:
            on_batch(batch, state)
        if not state.finished:
            sleep(delay)
    return state


__all__ = ["PlaybackState", "default_batch_size", "iter_batches", "play"]
