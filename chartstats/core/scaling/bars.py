"""
Bars — Нормализация длин баров

- normalize_by_max_abs: доли |v| / max|v| для bar charts (P&L, importance)
- DivergingScale: бары, растущие влево/вправо от центральной линии
  (correlation bars со знаком)
"""

from dataclasses import dataclass
from typing import Sequence

from chartstats.core.math.numerical_safeguards import (
    all_finite,
    safe_divide,
    validate_finite,
    validate_non_negative,
)


def normalize_by_max_abs(values: Sequence[float], floor: float = 0.0) -> list[float]:
    """
    Нормализация модулей значений к [0, 1].

    Знаменатель: max(max|v|, floor).

    Args:
        values: Конечные значения
        floor: Минимальный знаменатель (>= 0)

    Returns:
        |v| / denominator; нули, если знаменатель нулевой

    Examples:
        >>> normalize_by_max_abs([-2.0, 1.0, 4.0])
        [0.5, 0.25, 1.0]
        >>> normalize_by_max_abs([0.2, -0.5], floor=1.0)
        [0.2, 0.5]
        >>> normalize_by_max_abs([0.0, 0.0])
        [0.0, 0.0]
    """
    validate_non_negative(floor, "floor")
    if not values:
        return []
    if not all_finite(values):
        raise ValueError("bar values must be finite (not NaN/Inf)")

    denominator = max(max(abs(v) for v in values), floor)
    return [safe_divide(abs(v), denominator, fallback=0.0) for v in values]


@dataclass(frozen=True)
class DivergingScale:
    """
    Шкала баров от центральной линии.

    px_per_unit = half_length / max_abs (или 1.0 при max_abs == 0).
    """

    center: float  # Пиксель центральной линии
    px_per_unit: float  # Пикселей на единицу значения

    def extent(self, value: float) -> tuple[float, float]:
        """
        Пиксельный отрезок бара (start <= end).

        Положительные значения растут вправо от центра, отрицательные — влево.
        """
        length = abs(value) * self.px_per_unit
        if value >= 0:
            return (self.center, self.center + length)
        return (self.center - length, self.center)

    def length(self, value: float) -> float:
        return abs(value) * self.px_per_unit


def make_diverging_scale(max_abs: float, center: float, half_length: float) -> DivergingScale:
    """
    Построение DivergingScale.

    Args:
        max_abs: Максимальный модуль значения среди баров
        center: Пиксель центральной линии
        half_length: Доступная длина в каждую сторону (пиксели)

    Examples:
        >>> make_diverging_scale(0.5, center=300.0, half_length=200.0).extent(-0.25)
        (200.0, 300.0)
        >>> make_diverging_scale(0.0, center=10.0, half_length=50.0).px_per_unit
        1.0
    """
    validate_non_negative(max_abs, "max_abs")
    validate_non_negative(half_length, "half_length")
    validate_finite(center, "center")

    px_per_unit = safe_divide(half_length, max_abs, fallback=1.0)
    return DivergingScale(center=center, px_per_unit=px_per_unit)
