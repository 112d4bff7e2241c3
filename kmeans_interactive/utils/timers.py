"""
Высокоточные таймеры для шагов назначения и обновления.

Модуль предоставляет контекстный менеджер Timer для измерения времени
выполнения участков кода с использованием time.perf_counter() и
накопитель StepTimings для двух половин итерации K-means.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any


class Timer:
    """
    Контекстный менеджер для измерения времени выполнения кода.

    Использует time.perf_counter() для высокоточных измерений времени,
    не зависящих от системных часов.

    Пример использования:
        with Timer() as t:
            labels, distances = iterator.assign_clusters(X, centroids)
        elapsed_time = t.elapsed
    """

    def __init__(self) -> None:
        """Инициализация таймера."""
        self.start: float = 0.0
        self.end: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> Timer:
        """
        Вход в контекстный менеджер.

        Returns:
            Экземпляр Timer
        """
        self.start = time.perf_counter()
        return self

    def __exit__(self, *args: Any) -> None:
        """
        Выход из контекстного менеджера.

        Вычисляет прошедшее время и сохраняет в self.elapsed.
        """
        self.end = time.perf_counter()
        self.elapsed = self.end - self.start


@dataclass
class StepTimings:
    """Суммарные тайминги: T_назначения, T_обновления и их сумма."""

    t_assign_total: float = 0.0
    t_update_total: float = 0.0
    n_assign: int = 0
    n_update: int = 0

    @property
    def t_iter_total(self) -> float:
        return self.t_assign_total + self.t_update_total

    @property
    def t_assign_mean(self) -> float:
        """Среднее время одного шага назначения (0, если шагов не было)."""
        return self.t_assign_total / self.n_assign if self.n_assign else 0.0

    @property
    def t_update_mean(self) -> float:
        return self.t_update_total / self.n_update if self.n_update else 0.0

    def add_assign(self, elapsed: float) -> None:
        self.t_assign_total += elapsed
        self.n_assign += 1

    def add_update(self, elapsed: float) -> None:
        self.t_update_total += elapsed
        self.n_update += 1
