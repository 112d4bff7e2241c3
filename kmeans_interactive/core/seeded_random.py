"""
Детерминированный генератор псевдослучайных чисел.

Последовательность: ``frac(sin(seed) * 10000)``, seed увеличивается на 1
после каждого вызова. Курсор seed открыт для чтения и записи, чтобы внешний
код мог переустановить его перед генерацией нового датасета.
"""

from __future__ import annotations

import math


class SeededRandom:
    """Поток чисел из [0, 1), полностью определяемый текущим seed."""

    def __init__(self, seed: int = 42) -> None:
        self.seed = int(seed)

    def random(self) -> float:
        x = math.sin(self.seed) * 10000
        self.seed += 1
        return x - math.floor(x)

    def randindex(self, n: int) -> int:
        """Случайный индекс из [0, n)."""
        # x - floor(x) может округлиться до 1.0 для крошечных отрицательных x
        return min(int(math.floor(self.random() * n)), n - 1)
