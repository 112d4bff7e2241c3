"""
Разбор точек, введённых пользователем в виде текста.

Одна точка на строку в формате ``(x, y)``: скобки и пробелы необязательны,
числа со знаком и дробной частью. Нераспознанные строки и строки с
нечисловыми значениями не прерывают разбор, а учитываются в счётчике ошибок.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from kmeans_interactive.errors import ParseError

_NUMBER = r"-?(?:\d+\.?\d*|\.\d+)"
POINT_PATTERN = re.compile(rf"\(?\s*({_NUMBER})\s*,\s*({_NUMBER})\s*\)?")


@dataclass(frozen=True)
class ParseResult:
    """Точки (M, 2) в порядке строк и счётчики разбора."""

    points: np.ndarray
    added_count: int
    error_count: int


def parse_line(line: str) -> tuple[float, float]:
    """
    Разбирает одну непустую строку.

    Raises:
        ParseError: Если пара чисел не найдена или значение не конечно
    """
    match = POINT_PATTERN.search(line)
    if match is None:
        raise ParseError(line)

    x = float(match.group(1))
    y = float(match.group(2))
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ParseError(line, reason="non-finite value")
    return x, y


def parse(text: str) -> ParseResult:
    """Разбирает текст построчно; пустые строки пропускаются без ошибки."""
    points: list[tuple[float, float]] = []
    error_count = 0

    for line in text.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        try:
            points.append(parse_line(stripped))
        except ParseError:
            error_count += 1

    return ParseResult(
        points=np.array(points, dtype=np.float64).reshape(-1, 2),
        added_count=len(points),
        error_count=error_count,
    )


def parse_file(path: str | Path) -> ParseResult:
    """Разбор точек из текстового файла."""
    with open(path, "r", encoding="utf-8") as f:
        return parse(f.read())
