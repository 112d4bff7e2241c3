"""
Проверка готовности данных к запуску кластеризации.

Вызывается до любых изменений состояния сессии: при ошибке сессия
остаётся в исходном состоянии.
"""

from __future__ import annotations

import numpy as np

from kmeans_interactive.errors import (
    ClusteringError,
    InsufficientDataError,
    InsufficientPointsError,
)


def validate_points(X: np.ndarray, k: int) -> None:
    """
    Проверяет форму массива точек и соотношение N >= k.

    Args:
        X: Массив точек (N, 2)
        k: Число кластеров

    Raises:
        InsufficientDataError: Если точек нет
        InsufficientPointsError: Если точек меньше, чем кластеров
        ClusteringError: Если массив не (N, 2) или содержит нечисловые значения
    """
    if X.ndim != 2 or X.shape[1] != 2:
        raise ClusteringError(f"Expected points of shape (N, 2), got {X.shape}")

    if X.shape[0] == 0:
        raise InsufficientDataError(
            "Please generate or add data points first"
        )

    if X.shape[0] < k:
        raise InsufficientPointsError(X.shape[0], k)

    if not np.all(np.isfinite(X)):
        raise ClusteringError("Points contain non-finite coordinates")
