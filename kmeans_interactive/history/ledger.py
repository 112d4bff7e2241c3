"""
История итераций K-means.

Две append-only ленты:
- записи шага назначения (IterationRecord): полная матрица расстояний
  точка → центроид и назначения, по одной записи на итерацию;
- траектория центроидов: снимок центроидов после каждого шага обновления.

Любую записанную итерацию можно выгрузить в CSV.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from typing import Iterator

import numpy as np

from kmeans_interactive.errors import IterationNotFoundError


def _frozen(arr: np.ndarray) -> np.ndarray:
    # read-only массив со своими данными уже неизменяем, копия не нужна
    if isinstance(arr, np.ndarray) and arr.flags.owndata and not arr.flags.writeable:
        return arr
    out = np.array(arr, copy=True)
    out.flags.writeable = False
    return out


@dataclass(frozen=True)
class PointDistance:
    """Расстояния одной точки на одной итерации."""

    point_index: int
    assigned_cluster: int
    distance_to_assigned: float
    distance_to_each_cluster: tuple[float, ...]


@dataclass(frozen=True, eq=False)
class IterationRecord:
    """
    Снимок шага назначения.

    Массивы копируются и помечаются read-only при создании; уже
    read-only массивы (точки запущенной сессии) разделяются без копии.
    """

    iteration: int
    points: np.ndarray  # (N, 2)
    labels: np.ndarray  # (N,)
    distances: np.ndarray  # (N, K)
    t_assign: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", _frozen(self.points))
        object.__setattr__(self, "labels", _frozen(self.labels))
        object.__setattr__(self, "distances", _frozen(self.distances))

    @property
    def n_points(self) -> int:
        return int(self.distances.shape[0])

    @property
    def k(self) -> int:
        return int(self.distances.shape[1])

    @property
    def assigned_distances(self) -> np.ndarray:
        return self.distances[np.arange(self.n_points), self.labels]

    @property
    def inertia(self) -> float:
        """Сумма квадратов расстояний до назначенных центроидов."""
        d = self.assigned_distances
        return float(np.sum(d * d))

    def per_point(self) -> Iterator[PointDistance]:
        assigned = self.assigned_distances
        for i in range(self.n_points):
            yield PointDistance(
                point_index=i,
                assigned_cluster=int(self.labels[i]),
                distance_to_assigned=float(assigned[i]),
                distance_to_each_cluster=tuple(float(d) for d in self.distances[i]),
            )


@dataclass(frozen=True, eq=False)
class CentroidSnapshot:
    """Центроиды после шага обновления."""

    iteration: int
    centroids: np.ndarray  # (K, 2)
    shifts: np.ndarray  # (K,)
    t_update: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "centroids", _frozen(self.centroids))
        object.__setattr__(self, "shifts", _frozen(self.shifts))


@dataclass
class IterationHistory:
    """Журнал итераций; номера итераций начинаются с 1."""

    records: list[IterationRecord] = field(default_factory=list)
    trajectory: list[CentroidSnapshot] = field(default_factory=list)

    def append(self, record: IterationRecord) -> None:
        expected = len(self.records) + 1
        if record.iteration != expected:
            raise ValueError(
                f"Out-of-order iteration record: expected {expected}, "
                f"got {record.iteration}"
            )
        self.records.append(record)

    def append_centroids(self, snapshot: CentroidSnapshot) -> None:
        self.trajectory.append(snapshot)

    def get(self, iteration: int) -> IterationRecord:
        """
        Запись итерации с номером ``iteration`` (1-based).

        Raises:
            IterationNotFoundError: Если такая итерация не записана
        """
        if not 1 <= iteration <= len(self.records):
            raise IterationNotFoundError(iteration, len(self.records))
        return self.records[iteration - 1]

    def latest(self) -> IterationRecord | None:
        return self.records[-1] if self.records else None

    def centroid_path(self, cluster: int) -> np.ndarray:
        """След центроида ``cluster`` по всем шагам обновления: (T, 2)."""
        if not self.trajectory:
            return np.empty((0, 2), dtype=np.float64)
        return np.array([snap.centroids[cluster] for snap in self.trajectory])

    def clear(self) -> None:
        self.records.clear()
        self.trajectory.clear()

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[IterationRecord]:
        return iter(self.records)

    def export_csv(self, iteration: int) -> str:
        """
        Выгружает матрицу расстояний итерации в CSV.

        Колонки: Point, X, Y, Distance_to_C1..Ck, Assigned_Cluster,
        Assigned_Distance. Вещественные числа с 4 знаками после запятой,
        номера точек и кластеров начинаются с 1.

        Raises:
            IterationNotFoundError: Если такая итерация не записана
        """
        record = self.get(iteration)

        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(
            ["Point", "X", "Y"]
            + [f"Distance_to_C{c + 1}" for c in range(record.k)]
            + ["Assigned_Cluster", "Assigned_Distance"]
        )
        for pd in record.per_point():
            x, y = record.points[pd.point_index]
            writer.writerow(
                [pd.point_index + 1, f"{x:.4f}", f"{y:.4f}"]
                + [f"{d:.4f}" for d in pd.distance_to_each_cluster]
                + [f"C{pd.assigned_cluster + 1}", f"{pd.distance_to_assigned:.4f}"]
            )
        return buf.getvalue()
