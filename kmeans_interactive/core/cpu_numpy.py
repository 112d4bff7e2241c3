# core/cpu_numpy.py
from __future__ import annotations

import numpy as np

from .base import ClusterIteratorBase


class KMeansCPUNumpy(ClusterIteratorBase):
    """Векторизованные шаги K-means на NumPy (используется по умолчанию)."""

    def assign_clusters(
        self, X: np.ndarray, centroids: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        # (N, K, 2) → (N, K)
        diff = X[:, None, :] - centroids[None, :, :]
        distances = np.sqrt(np.sum(diff * diff, axis=2))
        # argmin возвращает первый минимум
        labels = np.argmin(distances, axis=1).astype(np.int64, copy=False)
        return labels, distances

    def update_centroids(
        self, X: np.ndarray, labels: np.ndarray, centroids: np.ndarray
    ) -> np.ndarray:
        new_centroids = np.array(centroids, dtype=np.float64, copy=True)

        for k in range(self.K):
            points = X[labels == k]
            if len(points) > 0:
                new_centroids[k] = points.mean(axis=0)

        return new_centroids
