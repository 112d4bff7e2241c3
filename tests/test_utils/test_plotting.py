import matplotlib

matplotlib.use("Agg")

import numpy as np  # noqa: E402

from kmeans_interactive.config import SessionConfig  # noqa: E402
from kmeans_interactive.session import ClusteringSession  # noqa: E402
from kmeans_interactive.utils.plotting import (  # noqa: E402
    CLUSTER_COLORS,
    cluster_color,
    save_clustering_plot,
)


def test_cluster_color_wraps():
    assert cluster_color(0) == CLUSTER_COLORS[0]
    assert cluster_color(len(CLUSTER_COLORS) + 1) == CLUSTER_COLORS[1]


def test_save_unassigned_points(tmp_path):
    points = np.array([[0.0, 0.0], [1.0, 1.0]])

    path = save_clustering_plot(tmp_path / "idle.png", points, None, None)

    assert path.exists()
    assert path.stat().st_size > 0


def test_save_session_with_trails(tmp_path):
    session = ClusteringSession(SessionConfig(num_points=40, k=3, seed=1))
    session.generate_points()
    session.start()
    session.run_to_convergence()

    path = save_clustering_plot(
        tmp_path / "nested" / "run.png",
        session.points,
        session.assignments,
        session.centroids,
        history=session.history,
        iteration=session.iteration,
    )

    assert path.exists()
    assert path.stat().st_size > 0
