from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from kmeans_interactive.errors import ConfigurationError

# Жёсткий предел числа итераций (страховка, а не гарантия сходимости)
MAX_ITERATIONS: int = 100

# Центроид считается сдвинувшимся, если ушёл дальше этого расстояния
CONVERGENCE_TOL: float = 1e-4


class InitMethod(str, Enum):
    UNIFORM = "uniform"
    KMEANS_PLUS_PLUS = "kmeans++"

    @classmethod
    def parse(cls, value: str | InitMethod) -> InitMethod:
        """Разбор имени метода; ``random`` принимается как синоним ``uniform``."""
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        if normalized == "random":
            return cls.UNIFORM
        for method in cls:
            if method.value == normalized:
                return method
        raise ConfigurationError(
            f"Unknown init method {value!r}; "
            f"expected one of {[m.value for m in cls]}"
        )


class SessionState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    CONVERGED = "converged"
    ABORTED = "aborted"


@dataclass
class SessionConfig:
    """
    Параметры сессии кластеризации.

    delay_ms влияет только на темп отрисовки во внешнем слое и
    не меняет результатов.
    """

    num_points: int = 100
    k: int = 3
    seed: int = 42
    init_method: InitMethod | str = InitMethod.UNIFORM
    delay_ms: int = 500
    max_iterations: int = MAX_ITERATIONS
    tol: float = CONVERGENCE_TOL

    def validate(self) -> None:
        """
        Проверяет параметры, не касаясь данных.

        Raises:
            ConfigurationError: Если хотя бы один параметр вне допустимого диапазона
        """
        if self.k < 1:
            raise ConfigurationError(f"K must be >= 1, got {self.k}")
        if self.num_points < 0:
            raise ConfigurationError(
                f"num_points must be >= 0, got {self.num_points}"
            )
        if self.max_iterations < 1:
            raise ConfigurationError(
                f"max_iterations must be >= 1, got {self.max_iterations}"
            )
        if self.tol < 0:
            raise ConfigurationError(f"tol must be >= 0, got {self.tol}")
        if self.delay_ms < 0:
            raise ConfigurationError(f"delay_ms must be >= 0, got {self.delay_ms}")
        self.init_method = InitMethod.parse(self.init_method)
