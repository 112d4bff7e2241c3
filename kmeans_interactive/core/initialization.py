"""
Начальная расстановка центроидов.

Два метода:
- uniform: случайные различные точки датасета (выбор с отбраковкой повторов);
- kmeans++: первая точка случайна, каждая следующая выбирается с
  вероятностью, пропорциональной квадрату расстояния до ближайшего уже
  выбранного центроида (рулетка по накопленным весам).

Каждый центроид является копией координат точки, а не ссылкой на неё.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from kmeans_interactive.config import InitMethod
from kmeans_interactive.core.seeded_random import SeededRandom

# Лимит попыток выбора с отбраковкой: attempts <= factor * k
UNIFORM_ATTEMPTS_FACTOR = 1000


def init_uniform(
    X: np.ndarray,
    k: int,
    rng: SeededRandom,
    logger: Any | None = None,
) -> np.ndarray:
    """
    Выбирает k различных индексов с отбраковкой повторов.

    Если за ``UNIFORM_ATTEMPTS_FACTOR * k`` попыток набрать k индексов не
    удалось, недостающие берутся из неиспользованных индексов по возрастанию.
    """
    n = len(X)
    indices: list[int] = []
    chosen: set[int] = set()
    max_attempts = UNIFORM_ATTEMPTS_FACTOR * k
    attempts = 0

    while len(indices) < k and attempts < max_attempts:
        idx = rng.randindex(n)
        attempts += 1
        if idx not in chosen:
            chosen.add(idx)
            indices.append(idx)

    if len(indices) < k:
        if logger:
            logger.warning(
                f"Uniform init: {len(indices)}/{k} distinct indices after "
                f"{attempts} draws, filling the rest in index order"
            )
        for idx in range(n):
            if len(indices) == k:
                break
            if idx not in chosen:
                chosen.add(idx)
                indices.append(idx)

    return np.array(X[indices], dtype=np.float64, copy=True)


def _roulette_pick(weights: np.ndarray, r: float) -> int:
    """Вычитает веса по порядку точек, пока остаток не станет <= 0."""
    for j, w in enumerate(weights):
        r -= float(w)
        if r <= 0:
            return j

    # остаток > 0 из-за округления: последняя точка с положительным весом
    positive = np.flatnonzero(weights > 0)
    return int(positive[-1]) if positive.size else 0


def init_kmeans_plus_plus(
    X: np.ndarray,
    k: int,
    rng: SeededRandom,
    logger: Any | None = None,
) -> np.ndarray:
    """
    K-means++: взвешенный выбор дальних точек.

    Совпадающие точки могут дать совпадающие центроиды (например, две
    одинаковые точки при k=2): это ожидаемое поведение.
    """
    n = len(X)
    first_idx = rng.randindex(n)
    centroids = [np.array(X[first_idx], dtype=np.float64, copy=True)]

    for _ in range(1, k):
        C = np.vstack(centroids)
        diff = X[:, None, :] - C[None, :, :]
        min_dist = np.min(np.sqrt(np.sum(diff * diff, axis=2)), axis=1)
        weights = min_dist * min_dist

        total = float(np.sum(weights))
        r = rng.random() * total
        j = _roulette_pick(weights, r)
        centroids.append(np.array(X[j], dtype=np.float64, copy=True))

    if logger and k > 1 and len(np.unique(np.vstack(centroids), axis=0)) < k:
        logger.info("K-means++ init produced coincident centroids")

    return np.vstack(centroids)


def initialize_centroids(
    X: np.ndarray,
    k: int,
    method: InitMethod | str,
    rng: SeededRandom,
    logger: Any | None = None,
) -> np.ndarray:
    """
    Возвращает ровно k начальных центроидов формы (k, 2).

    Args:
        X: Точки (N, 2), N >= k
        k: Число кластеров
        method: uniform | kmeans++
        rng: Источник случайности (курсор продвигается)
        logger: Опциональный логгер
    """
    method = InitMethod.parse(method)
    if method is InitMethod.UNIFORM:
        return init_uniform(X, k, rng, logger=logger)
    return init_kmeans_plus_plus(X, k, rng, logger=logger)
