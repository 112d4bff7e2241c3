"""
Тесты согласованности между реализациями K-means.

NumPy и поэлементная реализации должны давать одинаковые назначения,
расстояния и центроиды; итог совпадает с алгоритмом Ллойда из scikit-learn
при той же начальной расстановке.
"""

import numpy as np
import pytest
from sklearn.cluster import KMeans

from kmeans_interactive.core.cpu_numpy import KMeansCPUNumpy
from kmeans_interactive.core.cpu_python import KMeansCPUPython
from kmeans_interactive.data.generator import generate


class TestImplementationConsistency:
    """Тесты согласованности между реализациями."""

    def test_numpy_vs_python_single_step(self, small_dataset):
        X, initial_centroids = small_dataset

        model_numpy = KMeansCPUNumpy(n_clusters=2)
        model_python = KMeansCPUPython(n_clusters=2)

        a_np = model_numpy.assign_step(X, initial_centroids)
        a_py = model_python.assign_step(X, initial_centroids)
        np.testing.assert_array_equal(a_np.labels, a_py.labels)
        np.testing.assert_allclose(a_np.distances, a_py.distances, rtol=1e-12)

        u_np = model_numpy.update_step(X, initial_centroids, a_np.labels)
        u_py = model_python.update_step(X, initial_centroids, a_py.labels)
        np.testing.assert_allclose(u_np.centroids, u_py.centroids, rtol=1e-12)
        assert u_np.changed == u_py.changed

    @pytest.mark.parametrize("seed", [1, 7, 42])
    def test_numpy_vs_python_fit(self, seed):
        X = generate(120, 4, seed)
        initial = X[[0, 30, 60, 90]]

        c_np, l_np, n_np, conv_np = KMeansCPUNumpy(n_clusters=4).fit(X, initial)
        c_py, l_py, n_py, conv_py = KMeansCPUPython(n_clusters=4).fit(X, initial)

        np.testing.assert_array_equal(l_np, l_py)
        np.testing.assert_allclose(c_np, c_py, rtol=1e-9, atol=1e-9)
        assert n_np == n_py
        assert conv_np == conv_py

    def test_numpy_vs_sklearn(self, small_dataset):
        """Финальные центроиды совпадают с sklearn (lloyd, та же инициализация)."""
        X, initial_centroids = small_dataset

        centroids, labels, _, converged = KMeansCPUNumpy(n_clusters=2).fit(
            X, initial_centroids
        )
        reference = KMeans(
            n_clusters=2,
            init=initial_centroids,
            n_init=1,
            max_iter=100,
            tol=0.0,
            algorithm="lloyd",
        ).fit(X)

        assert converged
        np.testing.assert_allclose(
            centroids,
            reference.cluster_centers_,
            rtol=1e-6,
            atol=1e-6,
            err_msg="NumPy и sklearn дают разные центроиды",
        )
        np.testing.assert_array_equal(labels, reference.labels_)
