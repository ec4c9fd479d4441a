"""
Numerical Safeguards — Arithmetic guards for statistics and scaling

Общие примитивы, на которые опираются SummaryStatsEngine, AxisScaler и
chart layouts:
- Конечность значений наблюдений и пикселей (NaN/Inf)
- Деление для нормализации и шкал без ZeroDivisionError
- Допуски для сравнения ширины domain и медиан
- Clamp в пиксельный диапазон, линейная интерполяция, проверка параметров

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. safe_divide не делит на знаменатель ближе EPS_CALC к нулю
2. safe_divide не возвращает NaN/Inf
3. Все функции чистые: одинаковый вход → одинаковый выход
"""

import math
from typing import Final, Iterable

# =============================================================================
# ДОПУСКИ
# =============================================================================

# Порог нулевой ширины domain и нулевого знаменателя
EPS_CALC: Final[float] = 1e-12

# Относительный допуск is_close
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Абсолютный допуск is_close / is_zero
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12


# =============================================================================
# КОНЕЧНОСТЬ ЗНАЧЕНИЙ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """Значение пригодно для статистики: не NaN и не ±Inf."""
    return math.isfinite(value)


def all_finite(values: Iterable[float]) -> bool:
    """
    Все ли значения выборки конечны.

    Examples:
        >>> all_finite([1.0, -2.5])
        True
        >>> all_finite([])
        True
        >>> all_finite([0.3, float('nan')])
        False
    """
    return all(math.isfinite(v) for v in values)


def sanitize_float(value: float, fallback: float = 0.0) -> float:
    """
    NaN/Inf → fallback, конечные значения без изменений.

    Examples:
        >>> sanitize_float(42.0)
        42.0
        >>> sanitize_float(float('inf'), fallback=-1.0)
        -1.0
    """
    return value if is_valid_float(value) else fallback


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


def safe_divide(
    numerator: float,
    denominator: float,
    eps: float = EPS_CALC,
    fallback: float = 0.0,
) -> float:
    """
    Деление для нормализации баров и шкал.

    Если знаменатель по модулю меньше eps, либо любой операнд или результат
    не конечен, возвращается fallback.

    Args:
        numerator: Числитель
        denominator: Знаменатель (max |v|, ширина domain и т.п.)
        eps: Порог нулевого знаменателя (> 0)
        fallback: Результат для вырожденного случая

    Returns:
        numerator / denominator или fallback

    Raises:
        ValueError: если eps <= 0

    Examples:
        >>> safe_divide(200.0, 0.5)
        400.0
        >>> safe_divide(200.0, 0.0, fallback=1.0)
        1.0
    """
    if eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")

    if not (is_valid_float(numerator) and is_valid_float(denominator)):
        return fallback
    if abs(denominator) < eps:
        return fallback

    return sanitize_float(numerator / denominator, fallback=fallback)


# =============================================================================
# СРАВНЕНИЯ С ДОПУСКОМ
# =============================================================================


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Равенство float с допуском: |a - b| <= max(rel_tol * max(|a|, |b|), abs_tol).

    Examples:
        >>> is_close(5.5, 5.5 + 1e-12)
        True
        >>> is_close(5.5, 5.6)
        False
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def is_zero(value: float, tol: float = EPS_FLOAT_COMPARE_ABS) -> bool:
    """|value| <= tol (например, нулевая ширина domain)."""
    return abs(value) <= tol


# =============================================================================
# CLAMP / LERP
# =============================================================================


def clamp(
    value: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    Ограничение значения снизу и/или сверху.

    Отсутствующая граница (None) не ограничивает.

    Examples:
        >>> clamp(250.0, 0.0, 200.0)
        200.0
        >>> clamp(-3.0, min_value=0.0)
        0.0
    """
    if min_value is not None and value < min_value:
        value = min_value
    if max_value is not None and value > max_value:
        value = max_value
    return value


def lerp(start: float, end: float, t: float) -> float:
    """Линейная интерполяция start → end при доле t (без clamp)."""
    return start + (end - start) * t


# =============================================================================
# ПРОВЕРКА ПАРАМЕТРОВ
# =============================================================================


def validate_finite(value: float, name: str) -> None:
    """
    Raises:
        ValueError: если value NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")


def validate_non_negative(value: float, name: str) -> None:
    """
    Проверка параметров вроде pad_fraction, floor, half_length.

    Raises:
        ValueError: если value NaN/Inf или меньше нуля
    """
    validate_finite(value, name)
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
