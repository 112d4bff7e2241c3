"""
Иерархия ошибок интерактивного K-means.

Все ошибки локально восстановимы: сессия никогда не попадает в
неконсистентное состояние, а ошибки конфигурации выбрасываются до любых
изменений состояния.
"""

from __future__ import annotations


class ClusteringError(ValueError):
    """Базовая ошибка пакета."""


class ConfigurationError(ClusteringError):
    """Некорректные параметры запуска (K, лимит итераций, метод и т.д.)."""


class InsufficientDataError(ClusteringError):
    """Запуск без единой точки."""


class InsufficientPointsError(ClusteringError):
    """Точек меньше, чем кластеров."""

    def __init__(self, n_points: int, k: int) -> None:
        super().__init__(
            f"Number of points ({n_points}) must be greater than or equal to K ({k})"
        )
        self.n_points = n_points
        self.k = k


class ParseError(ClusteringError):
    """Строка ввода не разобрана как пара координат."""

    def __init__(self, line: str, reason: str = "invalid format") -> None:
        super().__init__(f"Cannot parse point from {line!r}: {reason}")
        self.line = line
        self.reason = reason


class IterationNotFoundError(ClusteringError, LookupError):
    """В истории нет записи для запрошенной итерации."""

    def __init__(self, iteration: int, available: int) -> None:
        super().__init__(
            f"No data for iteration {iteration} "
            f"(history holds {available} iteration(s))"
        )
        self.iteration = iteration
        self.available = available
