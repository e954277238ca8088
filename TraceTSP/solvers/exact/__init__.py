from TraceTSP.solvers.exact.branch_and_bound import BranchAndBoundSolver, solve_tsp
from TraceTSP.solvers.exact.bounds import lower_bound, prim_mst_cost
from TraceTSP.solvers.exact.frontier import Frontier

__all__ = [
    "BranchAndBoundSolver",
    "Frontier",
    "lower_bound",
    "prim_mst_cost",
    "solve_tsp",
]
