"""
Correlation — Pearson корреляция и rolling lagged корреляции

Модуль считает корреляции для correlation timeline и correlation bar charts:
- pearson_correlation: коэффициент Пирсона двух выборок
- rolling_lagged_correlations: скользящее окно корреляций x[t] с y[t - k]
- rank_by_magnitude: сортировка по |значению| (порядок баров)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Неопределённая корреляция (n < 2, нулевая дисперсия, разная длина) → None
2. Результат всегда в [-1, 1] (clamp от ошибок округления)

ФОРМУЛЫ:
    r = Σ(dx·dy) / sqrt(Σdx² · Σdy²),  dx = x - mean(x), dy = y - mean(y)
    lag k: corr(x[i-w+1 .. i], y[i-w+1-k .. i-k])
"""

import math
from typing import Callable, Final, Sequence, TypeVar

from chartstats.core.math.numerical_safeguards import all_finite, clamp

T = TypeVar("T")

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

DEFAULT_WINDOW_SIZE: Final[int] = 30
DEFAULT_MAX_LAG: Final[int] = 2


# =============================================================================
# PEARSON
# =============================================================================


def pearson_correlation(xs: Sequence[float], ys: Sequence[float]) -> float | None:
    """
    Коэффициент корреляции Пирсона.

    Args:
        xs: Первая выборка
        ys: Вторая выборка (той же длины)

    Returns:
        Коэффициент в [-1, 1] или None, если длины различаются, n < 2,
        одна из дисперсий нулевая или есть NaN/Inf

    Examples:
        >>> pearson_correlation([1, 2, 3], [2, 4, 6])
        1.0
        >>> pearson_correlation([1, 2, 3], [5, 5, 5]) is None
        True
    """
    n = len(xs)
    if len(ys) != n or n < 2:
        return None
    if not all_finite(xs) or not all_finite(ys):
        return None

    mean_x = sum(xs) / n
    mean_y = sum(ys) / n

    sxx = syy = sxy = 0.0
    for x, y in zip(xs, ys):
        dx = x - mean_x
        dy = y - mean_y
        sxx += dx * dx
        syy += dy * dy
        sxy += dx * dy

    if sxx == 0 or syy == 0:
        return None

    return clamp(sxy / math.sqrt(sxx * syy), -1.0, 1.0)


# =============================================================================
# ROLLING LAGGED
# =============================================================================


def rolling_lagged_correlations(
    xs: Sequence[float],
    ys: Sequence[float],
    window_size: int = DEFAULT_WINDOW_SIZE,
    max_lag: int = DEFAULT_MAX_LAG,
) -> list[tuple[int, tuple[float | None, ...]]]:
    """
    Скользящие корреляции x с y, сдвинутым назад на 0..max_lag.

    Первая точка — индекс window_size - 1 + max_lag, чтобы окно с
    максимальным лагом целиком помещалось в ряд.

    Args:
        xs: Ряд x (например, дневная средняя разница цен)
        ys: Ряд y той же длины (например, 1-day FX change)
        window_size: Размер окна
        max_lag: Максимальный лаг

    Returns:
        Список (index, (corr_lag0, ..., corr_lag_max)); пустой, если
        len < window_size + max_lag

    Raises:
        ValueError: если длины рядов различаются, window_size < 2 или max_lag < 0
    """
    if len(xs) != len(ys):
        raise ValueError(f"xs and ys must have equal length, got {len(xs)} and {len(ys)}")
    if window_size < 2:
        raise ValueError(f"window_size must be >= 2, got {window_size}")
    if max_lag < 0:
        raise ValueError(f"max_lag must be non-negative, got {max_lag}")

    n = len(xs)
    if n < window_size + max_lag:
        return []

    rows: list[tuple[int, tuple[float | None, ...]]] = []
    for end in range(window_size - 1 + max_lag, n):
        start = end - (window_size - 1)
        window_x = xs[start : end + 1]
        per_lag = tuple(
            pearson_correlation(window_x, ys[start - lag : end - lag + 1])
            for lag in range(max_lag + 1)
        )
        rows.append((end, per_lag))
    return rows


# =============================================================================
# RANKING
# =============================================================================


def rank_by_magnitude(items: Sequence[T], value_fn: Callable[[T], float]) -> list[T]:
    """
    Сортировка по абсолютному значению, по убыванию (копия, стабильно).

    Examples:
        >>> rank_by_magnitude([0.1, -0.9, 0.5], lambda v: v)
        [-0.9, 0.5, 0.1]
    """
    return sorted(items, key=lambda item: abs(value_fn(item)), reverse=True)
