"""Admissible lower bound for completing a partial tour.

The bound is the exact cost of the prefix plus three relaxations for the
remainder: the cheapest edge leaving the current city, a minimum spanning tree
over the unvisited cities, and the cheapest edge returning to the source.
Infinite edge costs are never dropped, so a disconnected remainder yields an
infinite bound.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np


def path_cost(dist_matrix: np.ndarray, path: Sequence[int]) -> float:
    cost = 0.0
    for a, b in zip(path[:-1], path[1:]):
        cost += float(dist_matrix[a, b])
    return cost


def prim_mst_cost(dist_matrix: np.ndarray, nodes: Sequence[int]) -> float:
    """Weight of a minimum spanning tree over ``nodes`` (Prim, dense O(k^2))."""
    k = len(nodes)
    if k <= 1:
        return 0.0

    in_tree = [False] * k
    key = [float("inf")] * k
    key[0] = 0.0
    total = 0.0

    for _ in range(k):
        # Lowest position wins ties so the chosen tree is deterministic.
        u = -1
        for v in range(k):
            if not in_tree[v] and (u == -1 or key[v] < key[u]):
                u = v
        in_tree[u] = True
        total += key[u]
        for v in range(k):
            if not in_tree[v]:
                weight = float(dist_matrix[nodes[u], nodes[v]])
                if weight < key[v]:
                    key[v] = weight
    return total


def unvisited_cities(n: int, visited_mask: int) -> list[int]:
    return [city for city in range(n) if not (visited_mask >> city) & 1]


def lower_bound(dist_matrix: np.ndarray, path: Sequence[int], visited_mask: int) -> float:
    """Bound on the cheapest round trip that extends ``path`` back to ``path[0]``.

    ``visited_mask`` has bit ``i`` set for every city index in ``path``.
    """
    if not path:
        return 0.0
    n = dist_matrix.shape[0]
    cost = path_cost(dist_matrix, path)
    source = path[0]
    last = path[-1]

    if len(path) >= n:
        if len(path) == 1:
            return cost
        return cost + float(dist_matrix[last, source])

    remaining = unvisited_cities(n, visited_mask)
    if not remaining:
        return cost

    cost += min(float(dist_matrix[last, city]) for city in remaining)
    cost += prim_mst_cost(dist_matrix, remaining)
    cost += min(float(dist_matrix[city, source]) for city in remaining)
    return cost


__all__ = ["lower_bound", "path_cost", "prim_mst_cost", "unvisited_cities"]
