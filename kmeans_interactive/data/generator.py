"""
Генератор синтетических 2D датасетов.

Создаёт min(5, k) «пятен»: центр каждого равномерно выбирается в квадрате
[-10, 10) x [-10, 10), точки пятна лежат в круге радиуса 3 вокруг центра
(полярная выборка). Остаток от деления N на число пятен рассыпается
равномерно по всему квадрату. Результат полностью определяется
(num_points, k, seed).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from kmeans_interactive.core.seeded_random import SeededRandom
from kmeans_interactive.errors import ConfigurationError


@dataclass(frozen=True)
class GeneratorConfig:
    """Геометрия генератора."""

    max_blobs: int = 5
    box_size: float = 20.0
    blob_radius: float = 3.0


DEFAULT_GENERATOR = GeneratorConfig()


def generate_points(
    num_points: int,
    k: int,
    rng: SeededRandom,
    config: GeneratorConfig = DEFAULT_GENERATOR,
) -> np.ndarray:
    """
    Генерация точек из уже установленного курсора rng.

    Курсор продвигается: следующий вызов (например, инициализация
    центроидов) продолжает ту же последовательность.

    Returns:
        Массив (num_points, 2)
    """
    if k < 1:
        raise ConfigurationError(f"K must be >= 1, got {k}")
    if num_points < 0:
        raise ConfigurationError(f"num_points must be >= 0, got {num_points}")

    n_blobs = min(config.max_blobs, k)
    points_per_blob = num_points // n_blobs

    points: list[tuple[float, float]] = []

    for _ in range(n_blobs):
        center_x = (rng.random() - 0.5) * config.box_size
        center_y = (rng.random() - 0.5) * config.box_size

        for _ in range(points_per_blob):
            angle = rng.random() * 2 * math.pi
            radius = rng.random() * config.blob_radius
            points.append(
                (
                    center_x + radius * math.cos(angle),
                    center_y + radius * math.sin(angle),
                )
            )

    remaining = num_points - points_per_blob * n_blobs
    for _ in range(remaining):
        x = (rng.random() - 0.5) * config.box_size
        y = (rng.random() - 0.5) * config.box_size
        points.append((x, y))

    X = np.array(points, dtype=np.float64).reshape(-1, 2)
    return X


def generate(
    num_points: int,
    k: int,
    seed: int,
    config: GeneratorConfig = DEFAULT_GENERATOR,
) -> np.ndarray:
    """Детерминированная генерация по (num_points, k, seed)."""
    return generate_points(num_points, k, SeededRandom(seed), config=config)
