from __future__ import annotations

import math

import numpy as np

from .base import ClusterIteratorBase


class KMeansCPUPython(ClusterIteratorBase):
    """
    Поэлементная реализация шагов на чистых циклах.

    Служит эталоном для проверки согласованности с KMeansCPUNumpy:
    порядок обхода и правило «первый минимум» совпадают буквально.
    """

    def assign_clusters(
        self, X: np.ndarray, centroids: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        N = len(X)
        labels = np.zeros(N, dtype=np.int64)
        distances = np.zeros((N, self.K), dtype=np.float64)

        for i in range(N):
            px, py = float(X[i, 0]), float(X[i, 1])
            min_dist = math.inf
            closest = 0
            for k in range(self.K):
                dx = px - float(centroids[k, 0])
                dy = py - float(centroids[k, 1])
                dist = math.sqrt(dx * dx + dy * dy)
                distances[i, k] = dist
                if dist < min_dist:
                    min_dist = dist
                    closest = k
            labels[i] = closest

        return labels, distances

    def update_centroids(
        self, X: np.ndarray, labels: np.ndarray, centroids: np.ndarray
    ) -> np.ndarray:
        sums = [[0.0, 0.0] for _ in range(self.K)]
        counts = [0] * self.K

        for i in range(len(X)):
            k = int(labels[i])
            sums[k][0] += float(X[i, 0])
            sums[k][1] += float(X[i, 1])
            counts[k] += 1

        new_centroids = np.array(centroids, dtype=np.float64, copy=True)
        for k in range(self.K):
            # пустой кластер: центроид остаётся на месте
            if counts[k] == 0:
                continue
            new_centroids[k, 0] = sums[k][0] / counts[k]
            new_centroids[k, 1] = sums[k][1] / counts[k]

        return new_centroids
