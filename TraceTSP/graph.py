from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np

GOLDEN_ANGLE = 2.399963


@dataclass(frozen=True)
class City:
    id: str
    x: float
    y: float
    label: str


def city_label(index: int) -> str:
    """Spreadsheet-style labels: A..Z, AA, AB, ..."""
    label = ""
    index += 1
    while index > 0:
        index, rem = divmod(index - 1, 26)
        label = chr(65 + rem) + label
    return label


def generate_cities(
    count: int,
    rng: Optional[np.random.Generator] = None,
    *,
    center: Tuple[float, float] = (400.0, 300.0),
    spacing: float = 30.0,
    jitter: float = 40.0,
    bounds: Tuple[float, float, float, float] = (50.0, 50.0, 750.0, 550.0),
) -> list[City]:
    """Lay cities out on a jittered golden-angle spiral inside ``bounds``."""
    if count < 0:
        raise ValueError("count must be non-negative")
    if rng is None:
        rng = np.random.default_rng()
    min_x, min_y, max_x, max_y = bounds
    cities: list[City] = []
    for i in range(count):
        angle = i * GOLDEN_ANGLE
        r = math.sqrt(i) * spacing
        x = center[0] + r * math.cos(angle) + (rng.random() - 0.5) * jitter
        y = center[1] + r * math.sin(angle) + (rng.random() - 0.5) * jitter
        cities.append(
            City(
                id=f"node-{i}",
                x=float(min(max_x, max(min_x, x))),
                y=float(min(max_y, max(min_y, y))),
                label=city_label(i),
            )
        )
    return cities


def euclidean_distance(a: City, b: City) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def coordinates_to_matrix(coords: np.ndarray, metric: str = "euclidean", rounding: bool = True) -> np.ndarray:
    coords = np.asarray(coords, dtype=float).reshape(-1, 2)
    diff = coords[:, None, :] - coords[None, :, :]
    if metric == "manhattan":
        dist_matrix = np.abs(diff).sum(axis=-1)
    elif metric == "euclidean":
        dist_matrix = np.linalg.norm(diff, axis=-1)
    else:
        raise ValueError(f"Unknown metric: {metric}")
    if rounding:
        # Half-up to match integer distance units on the canvas.
        dist_matrix = np.floor(dist_matrix + 0.5)
    np.fill_diagonal(dist_matrix, np.inf)
    return dist_matrix


def build_cost_matrix(
    cities: Sequence[City], *, metric: str = "euclidean", rounding: bool = True
) -> Tuple[np.ndarray, Dict[str, int]]:
    index_of: Dict[str, int] = {}
    for index, city in enumerate(cities):
        if city.id in index_of:
            raise ValueError(f"Duplicate city id: {city.id}")
        index_of[city.id] = index
    coords = np.asarray([(city.x, city.y) for city in cities], dtype=float)
    return coordinates_to_matrix(coords, metric=metric, rounding=rounding), index_of


def matrix_from_problem(
    problem_data: Dict[str, Any], *, metric: str | None = None, rounding: bool = True
) -> Tuple[np.ndarray, Dict[str, int]]:
    """Turn a problem record into ``(cost matrix, {city id: index})``.

    Accepts either ``distance_matrix`` or ``coordinates``; city ids come from
    ``ids`` when present and default to ``"0"``, ``"1"``, ...
    """
    if "distance_matrix" in problem_data and problem_data["distance_matrix"] is not None:
        raw = [[math.inf if value is None else value for value in row] for row in problem_data["distance_matrix"]]
        dist_matrix = np.asarray(raw, dtype=float).reshape(len(raw), -1) if raw else np.zeros((0, 0))
        if dist_matrix.size:
            np.fill_diagonal(dist_matrix, np.inf)
    elif problem_data.get("coordinates") is not None:
        metric = (problem_data.get("metric") or metric or "euclidean").lower()
        dist_matrix = coordinates_to_matrix(problem_data["coordinates"], metric=metric, rounding=rounding)
    else:
        raise ValueError("Problem data must contain either 'distance_matrix' or 'coordinates'.")

    n = dist_matrix.shape[0]
    ids = problem_data.get("ids")
    if ids is None:
        ids = [str(i) for i in range(n)]
    ids = [str(city_id) for city_id in ids]
    if len(ids) != n:
        raise ValueError(f"Expected {n} city ids, got {len(ids)}")
    if len(set(ids)) != n:
        raise ValueError("City ids must be unique")
    return dist_matrix, {city_id: index for index, city_id in enumerate(ids)}


__all__ = [
    "City",
    "build_cost_matrix",
    "city_label",
    "coordinates_to_matrix",
    "euclidean_distance",
    "generate_cities",
    "matrix_from_problem",
]
