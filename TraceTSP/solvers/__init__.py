from __future__ import annotations

from typing import Mapping

import numpy as np

from TraceTSP.solvers.base import BaseSolver, SolveResult, SourceNotFoundError, Tour
from TraceTSP.solvers.exact import BranchAndBoundSolver, solve_tsp

SOLVER_REGISTRY: dict[str, type[BaseSolver]] = {
    BranchAndBoundSolver.name: BranchAndBoundSolver,
}


def get_solver(name: str, graph: np.ndarray, index_of: Mapping[str, int], source: str) -> BaseSolver:
    solver_cls = SOLVER_REGISTRY.get(name)
    if solver_cls is None:
        raise KeyError(f"Unknown solver: {name}")
    return solver_cls(graph, index_of, source)


__all__ = [
    "BaseSolver",
    "BranchAndBoundSolver",
    "SOLVER_REGISTRY",
    "SolveResult",
    "SourceNotFoundError",
    "Tour",
    "get_solver",
    "solve_tsp",
]
