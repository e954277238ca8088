from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict

from TraceTSP.config import SolverConfig
from TraceTSP.graph import matrix_from_problem
from TraceTSP.solvers import SolveResult, SourceNotFoundError, get_solver

logger = logging.getLogger(__name__)


class SolveHandle:
    """Non-blocking solve whose result and trace arrive on completion."""

    def __init__(self, future: Future, cancel_event: threading.Event):
        self._future = future
        self._cancel_event = cancel_event

    def cancel(self) -> None:
        """Ask the search to stop before its next frontier pop."""
        self._cancel_event.set()

    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: float | None = None) -> SolveResult:
        return self._future.result(timeout=timeout)


class TraceTSP:
    """End-to-end pipeline: problem record -> cost matrix -> traced solve."""

    def __init__(self, config: SolverConfig | None = None, solver_name: str = "branch_and_bound"):
        self.config = config or SolverConfig()
        self.solver_name = solver_name

    def solve(
        self,
        problem_data: Dict[str, Any],
        source: str | None = None,
        cancel_event: threading.Event | None = None,
    ) -> SolveResult:
        start_time = time.perf_counter()
        dist_matrix, index_of = matrix_from_problem(
            problem_data, metric=self.config.metric, rounding=self.config.rounding
        )
        source = self._pick_source(problem_data, index_of, source)
        solver = get_solver(self.solver_name, dist_matrix, index_of, source)

        result = solver.solve(time_limit=self.config.time_limit, cancel_event=cancel_event)
        result.metadata.update(
            {
                "selected_solver": self.solver_name,
                "budget_requested": self.config.time_limit,
                "wallclock_total": time.perf_counter() - start_time,
            }
        )
        return result

    def solve_async(self, problem_data: Dict[str, Any], source: str | None = None) -> SolveHandle:
        cancel_event = threading.Event()
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="tracetsp-solve")
        try:
            future = executor.submit(self.solve, problem_data, source, cancel_event)
        finally:
            executor.shutdown(wait=False)
        return SolveHandle(future, cancel_event)

    def _pick_source(self, problem_data: Dict[str, Any], index_of: Dict[str, int], source: str | None) -> str:
        for candidate in (source, problem_data.get("source"), self.config.source):
            if candidate is not None:
                return str(candidate)
        if not index_of:
            raise SourceNotFoundError(None)
        default = min(index_of, key=index_of.__getitem__)
        logger.debug("No source given, defaulting to %s", default)
        return default


__all__ = ["SolveHandle", "TraceTSP"]
