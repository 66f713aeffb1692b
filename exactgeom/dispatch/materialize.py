"""
Result Materialization — приведение выходов ядра к форме результата

- intersection: гетерогенный список IntersectionResult без изменений
- do_intersect: список bool
- squared_distance: список ExactNumber (точность сохраняется)
- distance_matrix: плотная матрица float64; единственная точка, где точность
  отбрасывается намеренно: cell = sqrt(to_double(квадрат расстояния))
"""

import math
from typing import Sequence

import numpy as np

from exactgeom.core.domain import IntersectionResult
from exactgeom.core.math import ExactNumber, sqrt_to_double


def materialize_intersection(results: Sequence[IntersectionResult]) -> list[IntersectionResult]:
    return list(results)


def materialize_do_intersect(results: Sequence[bool]) -> list[bool]:
    return [bool(r) for r in results]


def materialize_squared_distance(results: Sequence[ExactNumber]) -> list[ExactNumber]:
    return list(results)


def squared_to_distance(cell: ExactNumber) -> float:
    """Расстояние как double из точного квадрата; NaN для sentinel."""
    if cell.is_na():
        return math.nan
    return sqrt_to_double(cell.exact)


def materialize_distance_matrix(
    grid: Sequence[Sequence[ExactNumber]], rows: int, cols: int
) -> np.ndarray:
    """
    Матрица (rows, cols) из сетки точных квадратов расстояний.

    Форма задаётся явно, чтобы пустые операнды давали (0, cols) / (rows, 0).

    Raises:
        ValueError: Если сетка не совпадает с заявленной формой
    """
    if len(grid) != rows or any(len(row) != cols for row in grid):
        raise ValueError(f"distance grid does not have shape ({rows}, {cols})")

    matrix = np.empty((rows, cols), dtype=np.float64)
    for i, row in enumerate(grid):
        for j, cell in enumerate(row):
            matrix[i, j] = squared_to_distance(cell)
    return matrix


# =============================================================================
# FALLBACK SHAPES
# =============================================================================


def unknown_intersect(size: int) -> list[bool]:
    return [False] * size


def unknown_squared_distance(size: int) -> list[ExactNumber]:
    return [ExactNumber.na() for _ in range(size)]


def unknown_distance_matrix(rows: int, cols: int) -> np.ndarray:
    return np.full((rows, cols), np.nan, dtype=np.float64)
