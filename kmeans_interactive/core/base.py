from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import numpy as np

from kmeans_interactive.config import CONVERGENCE_TOL, MAX_ITERATIONS
from kmeans_interactive.utils.timers import StepTimings, Timer


@dataclass(frozen=True)
class AssignResult:
    """Результат шага назначения."""

    labels: np.ndarray  # (N,) индексы ближайших центроидов
    distances: np.ndarray  # (N, K) евклидовы расстояния до каждого центроида
    elapsed: float


@dataclass(frozen=True)
class UpdateResult:
    """Результат шага обновления."""

    centroids: np.ndarray  # (K, 2)
    shifts: np.ndarray  # (K,) сдвиг каждого центроида
    changed: bool
    elapsed: float

    @property
    def max_shift(self) -> float:
        return float(np.max(self.shifts)) if self.shifts.size else 0.0


class ClusterIteratorBase(ABC):
    """
    Базовый класс шагов алгоритма Ллойда.

    Отвечает за тайминги и проверку сходимости:
    - assign_step: назначение точек ближайшим центроидам (полный пересчёт);
    - update_step: пересчёт центроидов как средних по кластерам;
    - changed: хотя бы один центроид сдвинулся больше чем на tol.

    Пустой кластер сохраняет прежний центроид, поэтому никогда не мешает
    сходимости. Реализации не хранят состояние между шагами: всё состояние
    принадлежит сессии.
    """

    def __init__(
        self,
        n_clusters: int,
        tol: float = CONVERGENCE_TOL,
        logger: Any | None = None,
    ):
        self.K = n_clusters
        self.tol = tol
        self.logger = logger
        self.timings = StepTimings()

    def assign_step(self, X: np.ndarray, centroids: np.ndarray) -> AssignResult:
        with Timer() as t_assign:
            labels, distances = self.assign_clusters(X, centroids)
        self.timings.add_assign(t_assign.elapsed)
        return AssignResult(labels=labels, distances=distances, elapsed=t_assign.elapsed)

    def update_step(
        self, X: np.ndarray, centroids: np.ndarray, labels: np.ndarray
    ) -> UpdateResult:
        with Timer() as t_update:
            new_centroids = self.update_centroids(X, labels, centroids)
        self.timings.add_update(t_update.elapsed)

        diff = new_centroids - centroids
        shifts = np.sqrt(np.sum(diff * diff, axis=1))
        changed = bool(np.any(shifts > self.tol))
        return UpdateResult(
            centroids=new_centroids,
            shifts=shifts,
            changed=changed,
            elapsed=t_update.elapsed,
        )

    def fit(
        self,
        X: np.ndarray,
        initial_centroids: np.ndarray,
        n_iters: int = MAX_ITERATIONS,
    ) -> tuple[np.ndarray, np.ndarray, int, bool]:
        """
        Неинтерактивный прогон до сходимости или до n_iters итераций.

        Returns:
            Кортеж (centroids, labels, n_iters_actual, converged)
        """
        centroids = np.array(initial_centroids, dtype=np.float64, copy=True)
        labels = np.zeros(len(X), dtype=np.int64)
        converged = False
        n_iters_actual = 0

        for i in range(n_iters):
            assigned = self.assign_step(X, centroids)
            labels = assigned.labels
            updated = self.update_step(X, centroids, labels)
            centroids = updated.centroids
            n_iters_actual = i + 1
            converged = not updated.changed

            if self.logger and (i == 0 or (i + 1) % 10 == 0 or converged):
                status = " (converged)" if converged else ""
                self.logger.info(
                    f"  Iteration {i + 1}/{n_iters}{status} "
                    f"(T_assign={assigned.elapsed:.6f}s, "
                    f"T_update={updated.elapsed:.6f}s, "
                    f"max_shift={updated.max_shift:.2e})"
                )

            if converged:
                break

        return centroids, labels, n_iters_actual, converged

    @abstractmethod
    def assign_clusters(
        self, X: np.ndarray, centroids: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        """Шаг назначения: (labels, distances). При равенстве побеждает первый минимум."""
        raise NotImplementedError

    @abstractmethod
    def update_centroids(
        self, X: np.ndarray, labels: np.ndarray, centroids: np.ndarray
    ) -> np.ndarray:
        """Шаг обновления центроидов по присвоенным меткам."""
        raise NotImplementedError
