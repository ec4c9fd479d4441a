"""
Series — Операции над временными рядами

- Процентная разница цены исполнения и референсной цены
- Линейная интерполяция значения ряда в момент t (бинарный поиск)
- Относительное изменение ряда за лаг (например, 1-day FX change)

times всегда отсортированы по возрастанию и имеют ту же длину, что values.
"""

import bisect
from typing import Sequence

from chartstats.core.math.numerical_safeguards import is_valid_float, is_zero, lerp


def percent_difference(actual: float, reference: float) -> float | None:
    """
    Процентная разница: (actual - reference) / reference * 100.

    Returns:
        Процент или None, если reference == 0 или результат не конечен

    Examples:
        >>> percent_difference(110.0, 100.0)
        10.0
        >>> percent_difference(1.0, 0.0) is None
        True
    """
    if not is_valid_float(reference) or is_zero(reference):
        return None

    result = (actual - reference) / reference * 100
    if not is_valid_float(result):
        return None
    return result


def _check_series(times: Sequence[float], values: Sequence[float]) -> None:
    if len(times) != len(values):
        raise ValueError(
            f"times and values must have equal length, got {len(times)} and {len(values)}"
        )


def interpolate_at(times: Sequence[float], values: Sequence[float], t: float) -> float | None:
    """
    Значение ряда в момент t с линейной интерполяцией.

    Точное совпадение возвращает сохранённое значение без интерполяции.

    Returns:
        Значение или None, если t вне [times[0], times[-1]] или ряд пуст

    Examples:
        >>> interpolate_at([0, 10], [1.0, 2.0], 5)
        1.5
        >>> interpolate_at([0, 10], [1.0, 2.0], 10)
        2.0
        >>> interpolate_at([0, 10], [1.0, 2.0], 11) is None
        True
    """
    _check_series(times, values)

    n = len(times)
    if n == 0:
        return None
    if t < times[0] or t > times[-1]:
        return None

    idx = bisect.bisect_left(times, t)
    if idx < n and times[idx] == t:
        return values[idx]

    # t лежит между times[idx - 1] и times[idx]
    t0, t1 = times[idx - 1], times[idx]
    v0, v1 = values[idx - 1], values[idx]
    return lerp(v0, v1, (t - t0) / (t1 - t0))


def change_over(
    times: Sequence[float],
    values: Sequence[float],
    t: float,
    lag: float,
) -> float | None:
    """
    Относительное изменение ряда между t - lag и t.

    Returns:
        (v(t) - v(t - lag)) / v(t - lag) или None, если одна из точек вне
        ряда или v(t - lag) == 0

    Examples:
        >>> change_over([0, 86400], [1.0, 1.1], 86400, 86400)
        0.10000000000000009
    """
    current = interpolate_at(times, values, t)
    previous = interpolate_at(times, values, t - lag)
    if current is None or previous is None or is_zero(previous):
        return None
    return (current - previous) / previous
