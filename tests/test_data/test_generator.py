"""
Тесты генератора синтетических датасетов.
"""

import numpy as np
import pytest

from kmeans_interactive.core.seeded_random import SeededRandom
from kmeans_interactive.data.generator import GeneratorConfig, generate, generate_points
from kmeans_interactive.errors import ConfigurationError


class TestGenerate:
    """Тесты детерминированной генерации."""

    @pytest.mark.parametrize("seed", [0, 1, 42, 2024])
    def test_deterministic(self, seed):
        a = generate(97, 4, seed)
        b = generate(97, 4, seed)

        assert a.tobytes() == b.tobytes()

    def test_different_seeds_differ(self):
        assert not np.array_equal(generate(50, 3, 1), generate(50, 3, 2))

    @pytest.mark.parametrize(
        "num_points,k", [(0, 3), (1, 1), (10, 3), (100, 3), (101, 7), (13, 20)]
    )
    def test_shape(self, num_points, k):
        X = generate(num_points, k, 42)

        assert X.shape == (num_points, 2)
        assert X.dtype == np.float64

    def test_points_inside_bounded_square(self):
        X = generate(500, 5, 42)

        # центры в [-10, 10), радиус пятна 3
        assert np.all(np.abs(X) <= 13.0)

    def test_blob_points_within_radius(self):
        num_points, k, seed = 30, 3, 9
        X = generate(num_points, k, seed)

        # повторяем поток вручную: центр пятна, затем по 2 числа на точку
        rng = SeededRandom(seed)
        per_blob = num_points // k
        for b in range(k):
            cx = (rng.random() - 0.5) * 20
            cy = (rng.random() - 0.5) * 20
            for _ in range(per_blob):
                rng.random()
                rng.random()
            block = X[b * per_blob:(b + 1) * per_blob]
            radii = np.hypot(block[:, 0] - cx, block[:, 1] - cy)
            assert np.all(radii <= 3.0 + 1e-9)

    def test_at_most_five_blobs(self):
        """При k > 5 пятен всё равно 5, остаток рассыпан по квадрату."""
        rng = SeededRandom(42)
        X = generate_points(12, 8, rng)

        # 5 пятен по 2 точки (5 * (2 + 2*2) = 30 чисел) + 2 точки остатка (4 числа)
        assert X.shape == (12, 2)
        assert rng.seed == 42 + 30 + 4

    def test_cursor_advances(self):
        rng = SeededRandom(42)
        generate_points(9, 3, rng)

        # 3 пятна: 2 числа на центр + 2 числа на каждую из 3 точек
        assert rng.seed == 42 + 3 * (2 + 3 * 2)

    def test_custom_geometry(self):
        X = generate(200, 2, 3, config=GeneratorConfig(box_size=2.0, blob_radius=0.1))

        assert np.all(np.abs(X) <= 1.1 + 1e-9)

    def test_invalid_k(self):
        with pytest.raises(ConfigurationError):
            generate(10, 0, 42)

    def test_negative_num_points(self):
        with pytest.raises(ConfigurationError):
            generate(-1, 3, 42)
