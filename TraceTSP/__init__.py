from TraceTSP.config import ConfigError, SolverConfig, load_config
from TraceTSP.core import SolveHandle, TraceTSP
from TraceTSP.graph import City, build_cost_matrix, generate_cities, matrix_from_problem
from TraceTSP.solvers import (
    BaseSolver,
    BranchAndBoundSolver,
    SOLVER_REGISTRY,
    SolveResult,
    SourceNotFoundError,
    Tour,
    get_solver,
    solve_tsp,
)
from TraceTSP.trace import BranchingEvent, EventLog, PartialSolution
from TraceTSP.utils.taxonomy import EventAction, SolveStatus

__all__ = [
    "TraceTSP",
    "BaseSolver",
    "BranchAndBoundSolver",
    "BranchingEvent",
    "City",
    "ConfigError",
    "EventAction",
    "EventLog",
    "PartialSolution",
    "SOLVER_REGISTRY",
    "SolveHandle",
    "SolveResult",
    "SolveStatus",
    "SolverConfig",
    "SourceNotFoundError",
    "Tour",
    "build_cost_matrix",
    "generate_cities",
    "get_solver",
    "load_config",
    "matrix_from_problem",
    "solve_tsp",
]
