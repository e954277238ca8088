import math

import numpy as np
import pytest

from TraceTSP.graph import (
    City,
    build_cost_matrix,
    city_label,
    euclidean_distance,
    generate_cities,
    matrix_from_problem,
)


def test_city_labels():
    assert [city_label(i) for i in (0, 1, 25, 26, 27)] == ["A", "B", "Z", "AA", "AB"]


def test_generate_cities_is_seeded_and_clamped():
    first = generate_cities(30, np.random.default_rng(3))
    second = generate_cities(30, np.random.default_rng(3))
    assert first == second
    assert [c.id for c in first[:3]] == ["node-0", "node-1", "node-2"]
    assert first[0].label == "A"
    for city in first:
        assert 50.0 <= city.x <= 750.0
        assert 50.0 <= city.y <= 550.0


def test_generate_cities_rejects_negative_count():
    with pytest.raises(ValueError):
        generate_cities(-1)


def test_build_cost_matrix_rounds_and_blocks_self_loops():
    cities = [City("a", 0, 0, "A"), City("b", 3, 4, "B"), City("c", 1.2, 1.3, "C")]
    matrix, index_of = build_cost_matrix(cities)

    assert index_of == {"a": 0, "b": 1, "c": 2}
    assert np.all(np.isinf(np.diag(matrix)))
    assert matrix[0, 1] == 5.0
    assert matrix[0, 2] == round(euclidean_distance(cities[0], cities[2]))
    assert np.array_equal(matrix, matrix.T)


def test_build_cost_matrix_without_rounding():
    cities = [City("a", 0, 0, "A"), City("b", 1, 1, "B")]
    matrix, _ = build_cost_matrix(cities, rounding=False)
    assert matrix[0, 1] == pytest.approx(math.sqrt(2))


def test_build_cost_matrix_rejects_duplicate_ids():
    with pytest.raises(ValueError):
        build_cost_matrix([City("a", 0, 0, "A"), City("a", 1, 1, "B")])


def test_matrix_from_problem_with_ids_and_nulls():
    matrix, index_of = matrix_from_problem(
        {"distance_matrix": [[0, 2, None], [2, 0, 3], [None, 3, 0]], "ids": ["x", "y", "z"]}
    )
    assert index_of == {"x": 0, "y": 1, "z": 2}
    assert math.isinf(matrix[0, 2])
    assert math.isinf(matrix[1, 1])
    assert matrix[1, 2] == 3.0


def test_matrix_from_problem_with_coordinates_defaults_ids():
    matrix, index_of = matrix_from_problem({"coordinates": [[0, 0], [0, 10], [10, 0]], "metric": "manhattan"})
    assert list(index_of) == ["0", "1", "2"]
    assert matrix[1, 2] == 20.0


@pytest.mark.parametrize(
    "problem",
    [
        {},
        {"coordinates": [[0, 0], [1, 1]], "ids": ["a"]},
        {"coordinates": [[0, 0], [1, 1]], "ids": ["a", "a"]},
        {"coordinates": [[0, 0], [1, 1]], "metric": "chebyshev"},
    ],
)
def test_matrix_from_problem_rejects_bad_input(problem):
    with pytest.raises(ValueError):
        matrix_from_problem(problem)
