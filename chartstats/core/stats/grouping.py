"""
Grouping — Группировка и агрегация наблюдений

Модуль строит группы наблюдений для per-day / per-week / per-category графиков:
- group_by_key: бакеты по ключу вызывающей стороны (порядок первого появления)
- aggregate: total / count / average по группе
- summarize_groups: box-plot сводка на каждую группу
- Ключевые функции: день, ISO-неделя, категория, пороговые бины

Все времена интерпретируются в UTC.
"""

import bisect
import math
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Final, Hashable, Iterable, Sequence

from chartstats.core.domain.observation import AggregateRecord, Observation
from chartstats.core.domain.summary import SummaryStats
from chartstats.core.math.numerical_safeguards import is_valid_float
from chartstats.core.stats.summary_engine import as_observations, compute_summary

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

SECONDS_PER_DAY: Final[int] = 86400

# Числовые timestamps больше этого порога считаются миллисекундами
MILLISECONDS_THRESHOLD: Final[float] = 1e12


KeyFn = Callable[[Observation], Hashable]
ValueFn = Callable[[Observation], float]


# =============================================================================
# GROUP / AGGREGATE
# =============================================================================


def group_by_key(
    observations: Iterable[Observation | float],
    key_fn: KeyFn,
) -> dict[Hashable, list[Observation]]:
    """
    Группировка наблюдений по ключу.

    Порядок ключей — порядок первого появления; внутри группы сохраняется
    порядок входа.

    Args:
        observations: Наблюдения (float оборачиваются в Observation)
        key_fn: Функция ключа (день, категория, бин)

    Returns:
        dict ключ → список наблюдений

    Examples:
        >>> groups = group_by_key([1.0, -2.0, 3.0], lambda o: o.value > 0)
        >>> list(groups)
        [True, False]
    """
    groups: dict[Hashable, list[Observation]] = {}
    for obs in as_observations(observations):
        groups.setdefault(key_fn(obs), []).append(obs)
    return groups


def aggregate(
    observations: Iterable[Observation | float],
    key_fn: KeyFn,
    value_fn: ValueFn | None = None,
) -> list[AggregateRecord]:
    """
    Агрегация total / count / average по группам.

    Используется для недельных P&L баров, P&L по металлам и т.п.
    Порядок результата — порядок первого появления ключа; сортировку
    выполняет вызывающая сторона.

    Args:
        observations: Наблюдения
        key_fn: Функция ключа группы
        value_fn: Извлекаемое значение (default: obs.value)

    Returns:
        Список AggregateRecord
    """
    extract = value_fn or (lambda obs: obs.value)

    records: list[AggregateRecord] = []
    for key, members in group_by_key(observations, key_fn).items():
        total = sum(extract(obs) for obs in members)
        count = len(members)
        records.append(AggregateRecord(key=key, total=total, count=count, average=total / count))
    return records


def summarize_groups(
    observations: Iterable[Observation | float],
    key_fn: KeyFn,
) -> dict[Hashable, SummaryStats]:
    """Box-plot сводка на каждую группу (порядок первого появления)."""
    return {
        key: compute_summary(members)
        for key, members in group_by_key(observations, key_fn).items()
    }


# =============================================================================
# ВРЕМЕННЫЕ КЛЮЧИ
# =============================================================================


def to_unix_seconds(ts: Any) -> int | None:
    """
    Нормализация timestamp в Unix-секунды (UTC).

    Поддерживает:
        - datetime (naive считается UTC)
        - ISO-8601 строки
        - числа: > 1e12 → миллисекунды, иначе секунды

    Returns:
        Целые секунды или None, если timestamp не распознан

    Examples:
        >>> to_unix_seconds(1736035200)
        1736035200
        >>> to_unix_seconds(1736035200123)
        1736035200
        >>> to_unix_seconds("2025-01-05T00:00:00Z")
        1736035200
        >>> to_unix_seconds("not a date") is None
        True
    """
    if isinstance(ts, bool) or ts is None:
        return None

    if isinstance(ts, (int, float)):
        if not is_valid_float(float(ts)):
            return None
        if ts > MILLISECONDS_THRESHOLD:
            return math.floor(ts / 1000)
        return math.floor(ts)

    if isinstance(ts, str):
        try:
            ts = datetime.fromisoformat(ts.replace("Z", "+00:00"))
        except ValueError:
            return None

    if isinstance(ts, datetime):
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        return math.floor(ts.timestamp())

    return None


def day_start_unix_seconds(t_sec: float) -> int:
    """
    Начало UTC-дня для timestamp в секундах.

    Examples:
        >>> day_start_unix_seconds(1736035200 + 3600)
        1736035200
    """
    return math.floor(t_sec / SECONDS_PER_DAY) * SECONDS_PER_DAY


def _utc_date(obs: Observation) -> date | None:
    if obs.timestamp is None:
        return None
    ts = obs.timestamp
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).date()


def by_day(obs: Observation) -> date | None:
    """Ключ: UTC-дата наблюдения (None без timestamp)."""
    return _utc_date(obs)


def by_week(obs: Observation) -> date | None:
    """Ключ: понедельник ISO-недели наблюдения (UTC)."""
    day = _utc_date(obs)
    if day is None:
        return None
    return day - timedelta(days=day.weekday())


def by_category(obs: Observation) -> str | None:
    """Ключ: категория наблюдения."""
    return obs.category


# =============================================================================
# ПОРОГОВЫЕ БИНЫ
# =============================================================================


def threshold_bucketer(
    edges: Sequence[float],
    labels: Sequence[Hashable],
) -> KeyFn:
    """
    Ключевая функция для полуоткрытых бинов по порогам.

    Бины: (-inf, e0), [e0, e1), ..., [e_last, +inf).

    Args:
        edges: Строго возрастающие пороги
        labels: Метки бинов, len(labels) == len(edges) + 1

    Returns:
        Функция obs → label

    Raises:
        ValueError: если пороги не возрастают, не конечны
                    или число меток не совпадает

    Examples:
        >>> key = threshold_bucketer([0.0, 10.0], ["<0%", "<10%", ">=10%"])
        >>> [key(Observation.of(v)) for v in (-1.0, 0.0, 9.9, 10.0)]
        ['<0%', '<10%', '<10%', '>=10%']
    """
    edges = list(edges)
    labels = list(labels)

    if len(labels) != len(edges) + 1:
        raise ValueError(
            f"labels must have len(edges) + 1 = {len(edges) + 1} items, got {len(labels)}"
        )
    for edge in edges:
        if not is_valid_float(edge):
            raise ValueError(f"bucket edges must be finite, got {edge}")
    for lower, upper in zip(edges, edges[1:]):
        if upper <= lower:
            raise ValueError(f"bucket edges must be strictly increasing, got {edges}")

    def key_fn(obs: Observation) -> Hashable:
        return labels[bisect.bisect_right(edges, obs.value)]

    return key_fn
