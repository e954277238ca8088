from __future__ import annotations

import itertools
import logging
import threading
import time
from typing import Mapping, NamedTuple, Tuple

import numpy as np

from TraceTSP.solvers.base import (
    BaseSolver,
    SolveCancelled,
    SolveResult,
    SourceNotFoundError,
    TimeLimitExpired,
    best_cycle,
    compute_cycle_cost,
    current_time,
    enforce_not_cancelled,
    enforce_time_budget,
)
from TraceTSP.solvers.exact.bounds import lower_bound
from TraceTSP.solvers.exact.frontier import Frontier
from TraceTSP.trace import (
    BranchingEvent,
    EventLog,
    PartialSolution,
    complete_message,
    explore_message,
    prune_child_message,
    prune_message,
)
from TraceTSP.utils.taxonomy import EventAction, SolveStatus

logger = logging.getLogger(__name__)


class _SearchNode(NamedTuple):
    solution: PartialSolution
    indices: Tuple[int, ...]
    mask: int


def validate_problem(dist_matrix: np.ndarray, index_of: Mapping[str, int]) -> None:
    if dist_matrix.ndim != 2 or dist_matrix.shape[0] != dist_matrix.shape[1]:
        raise ValueError(f"Cost matrix must be square, got shape {dist_matrix.shape}")
    n = dist_matrix.shape[0]
    if len(index_of) != n:
        raise ValueError(f"Index mapping has {len(index_of)} entries for a {n}x{n} matrix")
    if sorted(int(i) for i in index_of.values()) != list(range(n)):
        raise ValueError("Index mapping values must be a permutation of range(n)")
    if n == 0:
        return
    if np.isnan(dist_matrix).any():
        raise ValueError("Cost matrix contains NaN entries")
    if (dist_matrix < 0).any():
        raise ValueError("Cost matrix contains negative costs")
    if not np.allclose(dist_matrix, dist_matrix.T):
        logger.warning("Cost matrix is not symmetric; the spanning-tree bound may overestimate")


class BranchAndBoundSolver(BaseSolver):
    """Best-first branch and bound that records every search decision.

    Nodes are popped in order of lower bound (earliest-inserted first on ties).
    A node is pruned when its bound cannot strictly beat the incumbent, either
    on the way out of the frontier or, for freshly built children, before it is
    ever pushed. Only improving complete tours are logged.
    """

    name = "branch_and_bound"

    def __init__(self, graph: np.ndarray, index_of: Mapping[str, int], source: str):
        self.dist_matrix = np.asarray(graph, dtype=float)
        self.index_of = dict(index_of)
        self.source = source
        validate_problem(self.dist_matrix, self.index_of)
        self.n = self.dist_matrix.shape[0]
        self.id_of = {index: city_id for city_id, index in self.index_of.items()}

    def solve(self, time_limit: float | None = None, cancel_event: threading.Event | None = None) -> SolveResult:
        start_index = self.index_of.get(self.source)
        if start_index is None:
            raise SourceNotFoundError(self.source)

        start_time = current_time()
        if self.n < 2:
            logger.info("Skipping search: only %d cities selected", self.n)
            return SolveResult(
                name=self.name,
                path=None,
                cost=None,
                elapsed=current_time() - start_time,
                status=SolveStatus.NO_TOUR,
                metadata={"n_cities": self.n},
            )

        log = EventLog()
        ids = itertools.count()
        frontier: Frontier[_SearchNode] = Frontier()
        best_cost = float("inf")
        best_path: list[str] | None = None
        explored = 0

        def make_node(indices: Tuple[int, ...], mask: int, cost: float, parent_id: str | None) -> _SearchNode:
            solution = PartialSolution(
                id=f"sol-{next(ids)}",
                path=tuple(self.id_of[i] for i in indices),
                cost=cost,
                lower_bound=lower_bound(self.dist_matrix, indices, mask),
                level=len(indices),
                is_complete=len(indices) == self.n,
                parent_id=parent_id,
            )
            return _SearchNode(solution, indices, mask)

        def emit(solution: PartialSolution, action: EventAction, message: str) -> None:
            log.append(BranchingEvent(solution=solution, action=action, message=message, timestamp=time.time()))

        logger.info("Starting branch and bound over %d cities from %s", self.n, self.source)
        root = make_node((start_index,), 1 << start_index, 0.0, None)
        frontier.push(root.solution.lower_bound, root)
        emit(root.solution, EventAction.EXPLORE, f"Starting from {self.source}")

        status = SolveStatus.COMPLETE
        try:
            while frontier:
                enforce_not_cancelled(cancel_event)
                enforce_time_budget(start_time, time_limit)

                node = frontier.pop()
                explored += 1
                current = node.solution

                if current.lower_bound >= best_cost:
                    emit(current.pruned(), EventAction.PRUNE, prune_message(current, best_cost))
                    continue

                if current.level == self.n:
                    total_cost = compute_cycle_cost(self.dist_matrix, node.indices)
                    if total_cost < best_cost:
                        best_cost = total_cost
                        closed = current.closed(best_cycle(current.path), total_cost)
                        best_path = list(closed.path)
                        logger.debug("New incumbent %.3f via %s", total_cost, "->".join(best_path))
                        emit(closed, EventAction.COMPLETE, complete_message(total_cost))
                    continue

                last = node.indices[-1]
                for city in range(self.n):
                    if (node.mask >> city) & 1:
                        continue
                    child = make_node(
                        node.indices + (city,),
                        node.mask | (1 << city),
                        current.cost + float(self.dist_matrix[last, city]),
                        current.id,
                    )
                    if child.solution.lower_bound < best_cost:
                        frontier.push(child.solution.lower_bound, child)
                        emit(child.solution, EventAction.EXPLORE, explore_message(child.solution))
                    else:
                        emit(child.solution.pruned(), EventAction.PRUNE, prune_child_message(child.solution))
        except SolveCancelled:
            status = SolveStatus.CANCELLED
        except TimeLimitExpired:
            status = SolveStatus.TIMEOUT

        if status is SolveStatus.COMPLETE and best_path is None:
            status = SolveStatus.NO_TOUR

        elapsed = current_time() - start_time
        logger.info(
            "Branch and bound finished: status=%s cost=%s explored=%d events=%d elapsed=%.3fs",
            status.value,
            best_cost,
            explored,
            len(log),
            elapsed,
        )
        return SolveResult(
            name=self.name,
            path=best_path,
            cost=best_cost if best_path else None,
            elapsed=elapsed,
            status=status,
            events=log.freeze(),
            explored_count=explored,
            metadata={"n_cities": self.n, "source": self.source, "frontier_left": len(frontier)},
        )


def solve_tsp(
    graph: np.ndarray,
    index_of: Mapping[str, int],
    source: str,
    time_limit: float | None = None,
    cancel_event: threading.Event | None = None,
) -> SolveResult:
    return BranchAndBoundSolver(graph, index_of, source).solve(time_limit=time_limit, cancel_event=cancel_event)


__all__ = ["BranchAndBoundSolver", "solve_tsp", "validate_problem"]
