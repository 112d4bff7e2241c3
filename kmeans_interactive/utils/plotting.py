"""
Отрисовка состояния сессии в PNG.

Точки раскрашиваются по назначенным кластерам, центроиды показаны
звёздами, пройденный путь каждого центроида показан пунктиром.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt
import numpy as np

from kmeans_interactive.history.ledger import IterationHistory

# Палитра кластеров (после 10-го цвета идёт по кругу)
CLUSTER_COLORS = [
    "#ef4444",
    "#3b82f6",
    "#10b981",
    "#f59e0b",
    "#8b5cf6",
    "#ec4899",
    "#14b8a6",
    "#f97316",
    "#06b6d4",
    "#84cc16",
]
UNASSIGNED_COLOR = "#6b7280"


def cluster_color(k: int) -> str:
    return CLUSTER_COLORS[k % len(CLUSTER_COLORS)]


def plot_clustering(
    ax: Any,
    points: np.ndarray,
    labels: np.ndarray | None,
    centroids: np.ndarray | None,
    history: IterationHistory | None = None,
    iteration: int = 0,
) -> None:
    """Рисует одно состояние кластеризации на переданных осях."""
    if labels is None or len(labels) == 0 or np.all(labels < 0):
        ax.scatter(
            points[:, 0],
            points[:, 1],
            s=30,
            c=UNASSIGNED_COLOR,
            alpha=0.7,
            label="Data Points",
        )
    else:
        for k in np.unique(labels[labels >= 0]):
            members = points[labels == k]
            ax.scatter(
                members[:, 0],
                members[:, 1],
                s=30,
                c=cluster_color(int(k)),
                alpha=0.7,
                label=f"Cluster {k + 1}",
            )

    if centroids is not None and len(centroids) > 0:
        if history is not None and history.trajectory:
            for k in range(len(centroids)):
                path = history.centroid_path(k)
                ax.plot(
                    path[:, 0],
                    path[:, 1],
                    linestyle="--",
                    linewidth=1,
                    color=cluster_color(k),
                    alpha=0.6,
                )
        ax.scatter(
            centroids[:, 0],
            centroids[:, 1],
            s=250,
            marker="*",
            c=[cluster_color(k) for k in range(len(centroids))],
            edgecolors="black",
            linewidths=1.5,
            label="Centroids",
        )

    ax.set_title(f"K-Means Clustering (Iteration {iteration})")
    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    ax.legend(loc="best", fontsize=8)
    ax.grid(True, alpha=0.3)


def save_clustering_plot(
    save_path: str | Path,
    points: np.ndarray,
    labels: np.ndarray | None,
    centroids: np.ndarray | None,
    history: IterationHistory | None = None,
    iteration: int = 0,
) -> Path:
    """Сохраняет график состояния в файл и возвращает путь к нему."""
    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(8, 8))
    plot_clustering(ax, points, labels, centroids, history=history, iteration=iteration)
    plt.savefig(save_path, dpi=150, bbox_inches="tight", facecolor="white")
    plt.close(fig)
    return save_path
