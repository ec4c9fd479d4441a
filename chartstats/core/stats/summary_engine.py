"""
SummaryStatsEngine — Box-Plot Statistics

Модуль превращает неупорядоченный набор наблюдений в box-plot сводку:
- Квартили методом nearest-rank (без интерполяции)
- IQR fences и детекция outliers по правилу 1.5×IQR
- Whiskers (min/max) только по не-outlier подмножеству
- Среднее и стандартное отклонение по всем наблюдениям

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Входная коллекция никогда не мутируется (сортируется копия)
2. Пустой вход → нулевая сводка, без исключений и деления на ноль
3. min <= q1 <= median <= q3 <= max
4. Детерминизм: одинаковый вход → идентичный результат

PRECONDITION: значения конечны. Observation отклоняет NaN/Inf при создании;
float-значения проверяются здесь и NaN/Inf → InvalidNumericInput.
Для мягкой фильтрации вызывающий код использует finite_observations().

ФОРМУЛЫ:
    q1 = sorted[floor(n * 0.25)]
    q3 = sorted[floor(n * 0.75)]
    median = sorted[n // 2]                                  (n нечётное)
           = sorted[n/2 - 1] / 2 + sorted[n/2] / 2           (n чётное)
    lower_fence = q1 - 1.5 * (q3 - q1)
    upper_fence = q3 + 1.5 * (q3 - q1)

Медиана, mean и std_dev не переполняются для любых конечных float
(вплоть до ±sys.float_info.max). IQR и fences при таких значениях могут
стать ±inf: тогда outliers нет.
"""

import logging
import math
from typing import Final, Iterable, Sequence

from chartstats.core.domain.observation import Observation
from chartstats.core.domain.summary import SummaryStats
from chartstats.core.math.numerical_safeguards import is_valid_float

logger = logging.getLogger(__name__)

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Множитель IQR для fences (классическое правило Тьюки)
IQR_FENCE_MULTIPLIER: Final[float] = 1.5

# Ранги квартилей для nearest-rank метода
Q1_RANK: Final[float] = 0.25
Q3_RANK: Final[float] = 0.75


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidNumericInput(ValueError):
    """
    Во входе compute_summary обнаружен NaN/Inf.

    Нарушение precondition вызывающей стороной: данные должны быть
    санитизированы до вызова (см. finite_observations).
    """

    pass


# =============================================================================
# ВХОДНЫЕ ДАННЫЕ
# =============================================================================


def as_observations(items: Iterable[Observation | float]) -> list[Observation]:
    """
    Приведение входа к списку Observation.

    float-значения оборачиваются в Observation без метаданных.

    Raises:
        InvalidNumericInput: если среди float-значений есть NaN/Inf
    """
    result: list[Observation] = []
    for item in items:
        if isinstance(item, Observation):
            result.append(item)
            continue
        value = float(item)
        if not is_valid_float(value):
            raise InvalidNumericInput(f"Observation value must be finite, got {value}")
        result.append(Observation(value=value))
    return result


def finite_observations(items: Iterable[Observation | float]) -> list[Observation]:
    """
    Мягкая санитизация: отбрасывает NaN/Inf вместо исключения.

    Количество отброшенных значений пишется в лог (warning).
    """
    kept: list[Observation] = []
    dropped = 0
    for item in items:
        if isinstance(item, Observation):
            kept.append(item)
        elif is_valid_float(float(item)):
            kept.append(Observation(value=float(item)))
        else:
            dropped += 1

    if dropped:
        logger.warning("Dropped %d non-finite values before summary", dropped)
    return kept


# =============================================================================
# КВАНТИЛИ
# =============================================================================


def nearest_rank(sorted_values: Sequence[float], rank: float) -> float:
    """
    Квантиль методом nearest-rank: sorted[floor(n * rank)].

    Args:
        sorted_values: Значения по возрастанию (непустые)
        rank: Доля в [0, 1)

    Returns:
        Существующий элемент выборки (без интерполяции)

    Examples:
        >>> nearest_rank([1, 2, 3, 4, 5, 6, 7, 8, 9, 10], 0.25)
        3
        >>> nearest_rank([1, 2, 3, 4, 5, 6, 7, 8, 9, 10], 0.75)
        8
    """
    if not sorted_values:
        raise ValueError("sorted_values cannot be empty")
    if not 0 <= rank < 1:
        raise ValueError(f"rank must be in [0, 1), got {rank}")

    return sorted_values[math.floor(len(sorted_values) * rank)]


def median_of_sorted(sorted_values: Sequence[float]) -> float:
    """
    Медиана отсортированной выборки.

    Examples:
        >>> median_of_sorted([1, 2, 3, 4, 5, 6, 7, 8, 9, 10])
        5.5
        >>> median_of_sorted([1, 2, 3])
        2
    """
    n = len(sorted_values)
    if n == 0:
        raise ValueError("sorted_values cannot be empty")

    mid = n // 2
    if n % 2 == 0:
        # Половины складываются отдельно: a + b может переполниться
        return sorted_values[mid - 1] / 2 + sorted_values[mid] / 2
    return sorted_values[mid]


def mean_of(values: Sequence[float]) -> float:
    """
    Среднее арифметическое; 0.0 для пустого набора.

    Каждое слагаемое делится на n до суммирования (math.fsum), поэтому
    сумма не переполняется.

    Examples:
        >>> mean_of([1.7e308, 1.7e308])
        1.7e+308
    """
    if not values:
        return 0.0
    n = len(values)
    return math.fsum(v / n for v in values)


def population_std_dev(values: Sequence[float]) -> float:
    """
    Стандартное отклонение (population, делитель n); 0.0 для пустого набора.

    Значения масштабируются на max |v| перед возведением в квадрат:
    результат не превышает этого масштаба и не переполняется.

    Examples:
        >>> round(population_std_dev([2, 4, 4, 4, 5, 5, 7, 9]), 12)
        2.0
    """
    if not values:
        return 0.0

    scale = max(abs(v) for v in values)
    if scale == 0:
        return 0.0

    scaled = [v / scale for v in values]
    center = mean_of(scaled)
    variance = mean_of([(s - center) ** 2 for s in scaled])
    return math.sqrt(variance) * scale


# =============================================================================
# COMPUTE SUMMARY
# =============================================================================


def compute_summary(observations: Iterable[Observation | float]) -> SummaryStats:
    """
    Box-plot сводка набора наблюдений.

    Алгоритм:
        1. Сортировка копии по value (стабильная)
        2. median, q1, q3 (nearest-rank)
        3. IQR и fences: q1 - 1.5·IQR, q3 + 1.5·IQR
        4. outliers: value < lower_fence или value > upper_fence
        5. min/max по не-outlier подмножеству; если оно пусто —
           первый/последний элемент отсортированной выборки
        6. mean и std_dev по всем наблюдениям

    Args:
        observations: Observation или float значения (любой порядок)

    Returns:
        SummaryStats; для пустого входа — SummaryStats.empty()

    Raises:
        InvalidNumericInput: если float-значение NaN/Inf

    Examples:
        >>> s = compute_summary([1, 2, 3, 4, 5, 6, 7, 8, 9, 10])
        >>> (s.q1, s.median, s.q3)
        (3.0, 5.5, 8.0)
        >>> compute_summary([]).sample_size
        0
    """
    items = as_observations(observations)
    if not items:
        return SummaryStats.empty()

    ordered = sorted(items, key=lambda o: o.value)
    values = [o.value for o in ordered]
    n = len(values)

    median = median_of_sorted(values)
    q1 = nearest_rank(values, Q1_RANK)
    q3 = nearest_rank(values, Q3_RANK)

    iqr = q3 - q1
    lower_fence = q1 - IQR_FENCE_MULTIPLIER * iqr
    upper_fence = q3 + IQR_FENCE_MULTIPLIER * iqr

    outliers = tuple(o for o in ordered if o.value < lower_fence or o.value > upper_fence)
    inliers = [v for v in values if lower_fence <= v <= upper_fence]

    if inliers:
        whisker_low, whisker_high = inliers[0], inliers[-1]
    else:
        whisker_low, whisker_high = values[0], values[-1]

    mean = mean_of(values)
    std_dev = population_std_dev(values)

    logger.debug(
        "Summary computed: n=%d q1=%s median=%s q3=%s outliers=%d",
        n,
        q1,
        median,
        q3,
        len(outliers),
    )

    return SummaryStats(
        min=whisker_low,
        q1=q1,
        median=median,
        q3=q3,
        max=whisker_high,
        mean=mean,
        std_dev=std_dev,
        iqr=iqr,
        lower_fence=lower_fence,
        upper_fence=upper_fence,
        outliers=outliers,
        sample_size=n,
    )
