"""
Сессия интерактивной кластеризации K-means.

Сессия единолично владеет точками, центроидами, назначениями и историей и
управляет переходами состояний:

    IDLE → RUNNING → CONVERGED | ABORTED

Итерацию можно выполнять целиком (step) или по половинам
(assign_step, затем update_step), чтобы внешний слой отрисовал
промежуточный кадр в удобном ему темпе. Сама сессия не содержит ни таймеров
ожидания, ни колбэков.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Iterator, Type

import numpy as np

from kmeans_interactive.config import SessionConfig, SessionState
from kmeans_interactive.core.base import AssignResult, ClusterIteratorBase
from kmeans_interactive.core.cpu_numpy import KMeansCPUNumpy
from kmeans_interactive.core.initialization import initialize_centroids
from kmeans_interactive.core.seeded_random import SeededRandom
from kmeans_interactive.data.generator import generate_points
from kmeans_interactive.data.parser import ParseResult, parse
from kmeans_interactive.data.validation import validate_points
from kmeans_interactive.errors import ClusteringError
from kmeans_interactive.history.ledger import (
    CentroidSnapshot,
    IterationHistory,
    IterationRecord,
)
from kmeans_interactive.utils.logging import PrefixedLogger, format_session_prefix
from kmeans_interactive.utils.timers import StepTimings


@dataclass(frozen=True, eq=False)
class StepResult:
    """Итог одной полной итерации (назначение + обновление)."""

    iteration: int
    labels: np.ndarray
    centroids: np.ndarray
    changed: bool
    max_shift: float
    state: SessionState

    @property
    def converged(self) -> bool:
        return self.state is SessionState.CONVERGED


@dataclass(frozen=True)
class RunSummary:
    """Состояние сессии после прогона до сходимости."""

    state: SessionState
    iterations: int
    converged: bool
    max_iterations_reached: bool
    inertia: float | None
    t_assign_total: float
    t_update_total: float
    t_assign_mean: float = 0.0
    t_update_mean: float = 0.0


class ClusteringSession:
    """
    Пошаговый K-means над 2D точками.

    Пример использования:
        session = ClusteringSession(SessionConfig(num_points=150, k=3, seed=7))
        session.generate_points()
        session.start()
        summary = session.run_to_convergence()
        csv_text = session.history.export_csv(summary.iterations)
    """

    def __init__(
        self,
        config: SessionConfig | None = None,
        iterator_cls: Type[ClusterIteratorBase] = KMeansCPUNumpy,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config or SessionConfig()
        self.iterator_cls = iterator_cls
        self.logger = logger
        self.rng = SeededRandom(self.config.seed)

        self.state = SessionState.IDLE
        self.iteration = 0
        self.max_iterations_reached = False
        self.history = IterationHistory()

        self._points = np.empty((0, 2), dtype=np.float64)
        self._centroids: np.ndarray | None = None
        self._assignments: np.ndarray | None = None
        self._iterator: ClusterIteratorBase | None = None
        self._awaiting_update = False
        self._lock = threading.Lock()

    # --- доступ к состоянию для внешнего слоя ---

    @property
    def k(self) -> int:
        return self.config.k

    @property
    def points(self) -> np.ndarray:
        view = self._points.view()
        view.flags.writeable = False
        return view

    @property
    def centroids(self) -> np.ndarray | None:
        return None if self._centroids is None else self._centroids.copy()

    @property
    def assignments(self) -> np.ndarray | None:
        return None if self._assignments is None else self._assignments.copy()

    @property
    def converged(self) -> bool:
        return self.state is SessionState.CONVERGED

    @property
    def awaiting_update(self) -> bool:
        """True между assign_step и update_step."""
        return self._awaiting_update

    def cluster_sizes(self) -> np.ndarray:
        """Число точек в каждом кластере по текущим назначениям."""
        if self._assignments is None:
            return np.zeros(self.k, dtype=np.int64)
        assigned = self._assignments[self._assignments >= 0]
        return np.bincount(assigned, minlength=self.k)

    def _log(self) -> PrefixedLogger:
        init = getattr(self.config.init_method, "value", self.config.init_method)
        prefix = format_session_prefix(
            {"N": len(self._points), "k": self.k, "seed": self.config.seed, "init": init}
        )
        return PrefixedLogger(self.logger, prefix)

    # --- данные ---

    def _require_idle(self, action: str) -> None:
        if self.state is not SessionState.IDLE:
            raise ClusteringError(
                f"Cannot {action} while session is {self.state.value}; reset first"
            )

    def generate_points(self, num_points: int | None = None) -> np.ndarray:
        """
        Заменяет точки синтетическим датасетом.

        Курсор rng переустанавливается в config.seed; после генерации он
        остаётся продвинутым, и инициализация центроидов продолжает тот же поток.
        """
        with self._lock:
            self._require_idle("generate points")
            n = self.config.num_points if num_points is None else num_points
            self.rng.seed = self.config.seed
            self._points = generate_points(n, self.k, self.rng)
            if self.logger:
                self.logger.info(f"Generated random dataset with {n} points")
            return self.points

    def add_point(self, x: float, y: float) -> None:
        self.add_points(np.array([[x, y]], dtype=np.float64))

    def add_points(self, X: np.ndarray) -> None:
        X = np.asarray(X, dtype=np.float64).reshape(-1, 2)
        with self._lock:
            self._require_idle("add points")
            self._points = np.vstack([self._points, X])

    def add_points_from_text(self, text: str) -> ParseResult:
        """Добавляет распознанные точки; ошибочные строки только считаются."""
        result = parse(text)
        if result.added_count > 0:
            self.add_points(result.points)
            if self.logger:
                self.logger.info(f"Added {result.added_count} manual point(s)")
        if result.error_count > 0 and self.logger:
            self.logger.warning(
                f"{result.error_count} line(s) had invalid format and were skipped"
            )
        return result

    # --- переходы состояний ---

    def start(self) -> np.ndarray:
        """
        Проверяет конфигурацию и данные, затем расставляет начальные центроиды.

        Все проверки выполняются до изменения состояния.

        Raises:
            ConfigurationError: Некорректная конфигурация
            InsufficientDataError: Нет ни одной точки
            InsufficientPointsError: Точек меньше K
        """
        with self._lock:
            self.config.validate()
            validate_points(self._points, self.k)

            self._points = np.array(self._points, copy=True)
            self._points.flags.writeable = False

            self._iterator = self.iterator_cls(
                n_clusters=self.k, tol=self.config.tol, logger=self.logger
            )
            self._centroids = initialize_centroids(
                self._points,
                self.k,
                self.config.init_method,
                self.rng,
                logger=self.logger,
            )
            self._assignments = np.full(len(self._points), -1, dtype=np.int64)
            self.history.clear()
            self.iteration = 0
            self.max_iterations_reached = False
            self._awaiting_update = False
            self.state = SessionState.RUNNING

            self._log().info("Algorithm started - Centroids initialized")
            return self._centroids.copy()

    def _assign(self) -> AssignResult:
        assert self._iterator is not None and self._centroids is not None
        self.iteration += 1
        result = self._iterator.assign_step(self._points, self._centroids)
        self._assignments = result.labels
        self.history.append(
            IterationRecord(
                iteration=self.iteration,
                points=self._points,
                labels=result.labels,
                distances=result.distances,
                t_assign=result.elapsed,
            )
        )
        self._awaiting_update = True
        return result

    def _update(self) -> StepResult:
        assert self._iterator is not None and self._centroids is not None
        assert self._assignments is not None
        result = self._iterator.update_step(
            self._points, self._centroids, self._assignments
        )
        self._centroids = result.centroids
        self.history.append_centroids(
            CentroidSnapshot(
                iteration=self.iteration,
                centroids=result.centroids,
                shifts=result.shifts,
                t_update=result.elapsed,
            )
        )
        self._awaiting_update = False

        log = self._log()
        if not result.changed:
            self.state = SessionState.CONVERGED
            log.info(f"Algorithm converged at iteration {self.iteration}")
        elif self.iteration >= self.config.max_iterations:
            self.state = SessionState.ABORTED
            self.max_iterations_reached = True
            log.warning(
                f"Maximum iterations ({self.config.max_iterations}) reached "
                f"(max_shift={result.max_shift:.2e})"
            )
        elif self.iteration == 1 or self.iteration % 10 == 0:
            log.info(
                f"Iteration {self.iteration} completed - Centroids updated "
                f"(max_shift={result.max_shift:.2e})"
            )
        else:
            log.debug(f"Iteration {self.iteration} completed")

        return StepResult(
            iteration=self.iteration,
            labels=self._assignments.copy(),
            centroids=self._centroids.copy(),
            changed=result.changed,
            max_shift=result.max_shift,
            state=self.state,
        )

    def assign_step(self) -> AssignResult | None:
        """Первая половина итерации. No-op вне RUNNING или до update_step."""
        with self._lock:
            if self.state is not SessionState.RUNNING or self._awaiting_update:
                self._log().debug(f"assign_step ignored in state {self.state.value}")
                return None
            return self._assign()

    def update_step(self) -> StepResult | None:
        """Вторая половина итерации. No-op, если assign_step не выполнен."""
        with self._lock:
            if self.state is not SessionState.RUNNING or not self._awaiting_update:
                self._log().debug(f"update_step ignored in state {self.state.value}")
                return None
            return self._update()

    def step(self) -> StepResult | None:
        """
        Полная итерация. No-op, если сессия не в состоянии RUNNING.

        Если первая половина уже выполнена через assign_step, выполняется
        только обновление.
        """
        with self._lock:
            if self.state is not SessionState.RUNNING:
                self._log().debug(f"step ignored in state {self.state.value}")
                return None
            if not self._awaiting_update:
                self._assign()
            return self._update()

    def iter_steps(self) -> Iterator[StepResult]:
        """
        Итерации до сходимости или лимита.

        Вызывающий может прервать цикл на любой границе итераций; история
        до этой точки остаётся валидной.
        """
        while self.state is SessionState.RUNNING:
            result = self.step()
            if result is None:
                return
            yield result

    def run_to_convergence(self) -> RunSummary:
        for _ in self.iter_steps():
            pass
        return self.summary()

    def stop(self) -> None:
        """Прерывает прогон: RUNNING → ABORTED."""
        with self._lock:
            if self.state is SessionState.RUNNING:
                self.state = SessionState.ABORTED
                self._log().info(f"Algorithm stopped at iteration {self.iteration}")

    def reset(self) -> None:
        """Очищает точки, центроиды, назначения и историю; состояние IDLE."""
        with self._lock:
            self._points = np.empty((0, 2), dtype=np.float64)
            self._centroids = None
            self._assignments = None
            self._iterator = None
            self.history.clear()
            self.iteration = 0
            self.max_iterations_reached = False
            self._awaiting_update = False
            self.state = SessionState.IDLE
            if self.logger:
                self.logger.info("Algorithm reset")

    def summary(self) -> RunSummary:
        latest = self.history.latest()
        timings = self._iterator.timings if self._iterator else StepTimings()
        return RunSummary(
            state=self.state,
            iterations=self.iteration,
            converged=self.converged,
            max_iterations_reached=self.max_iterations_reached,
            inertia=latest.inertia if latest is not None else None,
            t_assign_total=timings.t_assign_total,
            t_update_total=timings.t_update_total,
            t_assign_mean=timings.t_assign_mean,
            t_update_mean=timings.t_update_mean,
        )
