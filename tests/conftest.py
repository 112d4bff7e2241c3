"""
Общие фикстуры для всех тестов.
"""

import numpy as np
import pytest

from kmeans_interactive.core.cpu_numpy import KMeansCPUNumpy
from kmeans_interactive.core.cpu_python import KMeansCPUPython


@pytest.fixture(params=[KMeansCPUNumpy, KMeansCPUPython], ids=["numpy", "python"])
def iterator_cls(request):
    """Обе реализации шагов должны проходить одни и те же тесты."""
    return request.param


@pytest.fixture
def small_dataset():
    """Фикстура с небольшим тестовым датасетом (2D, 2 кластера)."""
    rng = np.random.default_rng(42)
    # Два явно разделённых кластера
    cluster1 = rng.standard_normal((30, 2)) + [0, 0]
    cluster2 = rng.standard_normal((30, 2)) + [8, 8]
    X = np.vstack([cluster1, cluster2])
    initial_centroids = np.array([
        [-1.0, -1.0],
        [9.0, 9.0],
    ])
    return X, initial_centroids


@pytest.fixture
def simple_2d_dataset():
    """Фикстура с очень простым 2D датасетом для базовых тестов."""
    X = np.array([
        [0.0, 0.0],
        [1.0, 1.0],
        [2.0, 2.0],
        [10.0, 10.0],
        [11.0, 11.0],
        [12.0, 12.0],
    ])
    initial_centroids = np.array([
        [0.5, 0.5],
        [11.0, 11.0],
    ])
    return X, initial_centroids


@pytest.fixture
def three_groups():
    """
    9 точек в трёх плотных группах, перемешанных по порядку:
    точка i принадлежит группе i % 3.
    """
    groups = [
        [(0.0, 0.0), (0.5, 0.0), (0.0, 0.5)],
        [(10.0, 10.0), (10.5, 10.0), (10.0, 10.5)],
        [(-10.0, 10.0), (-10.5, 10.0), (-10.0, 10.5)],
    ]
    X = np.array(
        [groups[g][j] for j in range(3) for g in range(3)],
        dtype=np.float64,
    )
    membership = [{i for i in range(9) if i % 3 == g} for g in range(3)]
    return X, membership
