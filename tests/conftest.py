import itertools
import math

import numpy as np
import pytest


FOUR_CITY_IDS = ["A", "B", "C", "D"]


@pytest.fixture
def four_city():
    inf = math.inf
    matrix = np.array(
        [
            [inf, 10, 15, 20],
            [10, inf, 35, 25],
            [15, 35, inf, 30],
            [20, 25, 30, inf],
        ],
        dtype=float,
    )
    return matrix, {city: i for i, city in enumerate(FOUR_CITY_IDS)}


def random_symmetric(n, seed, low=1, high=100):
    rng = np.random.default_rng(seed)
    upper = rng.integers(low, high, size=(n, n)).astype(float)
    matrix = np.triu(upper, 1)
    matrix = matrix + matrix.T
    np.fill_diagonal(matrix, np.inf)
    return matrix


def brute_force_completion(matrix, prefix):
    """Cheapest round trip extending ``prefix`` back to ``prefix[0]``."""
    n = matrix.shape[0]
    rest = [c for c in range(n) if c not in prefix]
    best = math.inf
    for order in itertools.permutations(rest):
        tour = list(prefix) + list(order)
        cost = sum(float(matrix[a, b]) for a, b in zip(tour[:-1], tour[1:]))
        cost += float(matrix[tour[-1], tour[0]])
        best = min(best, cost)
    return best


@pytest.fixture
def symmetric_matrix():
    return random_symmetric


@pytest.fixture
def brute_force():
    return brute_force_completion
