"""
AxisScaler — Linear Value-to-Pixel Scales

Модуль строит детерминированные линейные отображения domain → пиксели,
одинаковые для осей, баров и scatter-точек всех графиков:
- make_linear_scale: шкала с padding, clamp и защитой от вырожденного domain
- make_ticks: равномерные значения тиков, включая оба конца
- domain_from_values / domain_from_summary / symmetric_domain: построение domain
- label_indices: прореживание подписей оси

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Вырожденный domain (max == min) → середина пиксельного диапазона,
   деления на ноль не происходит
2. clamp=True → результат всегда внутри пиксельного диапазона
3. Шкала монотонна (неубывающая для прямого диапазона, невозрастающая
   для перевёрнутого)
4. Шкала чистая: без состояния и побочных эффектов

ФОРМУЛЫ:
    t = (value - d.min) / (d.max - d.min)
    pixel = p0 + t * (p1 - p0)
    padded domain: [min - f*span, max + f*span]
"""

import logging
import math
from typing import Final, Iterable, Sequence

from chartstats.core.domain.scale import Domain, ScaleOptions
from chartstats.core.domain.summary import SummaryStats
from chartstats.core.math.numerical_safeguards import (
    all_finite,
    clamp,
    lerp,
    validate_finite,
    validate_non_negative,
)

logger = logging.getLogger(__name__)

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Padding по умолчанию для box plot и scatter осей (10% span)
DEFAULT_PAD_FRACTION: Final[float] = 0.1

# Количество тиков оси по умолчанию
DEFAULT_TICK_COUNT: Final[int] = 6

# Максимум подписей на оси времени
DEFAULT_MAX_LABELS: Final[int] = 5

# Domain для пустых данных
FALLBACK_DOMAIN: Final[Domain] = Domain(min=0.0, max=1.0)


# =============================================================================
# LINEAR SCALE
# =============================================================================


class LinearScale:
    """
    Линейное отображение domain → [pixel_start, pixel_end].

    Экземпляр неизменяем после создания; вызов — чистая арифметика.
    Пиксельный диапазон может быть перевёрнут (pixel_start > pixel_end),
    например для оси Y в SVG.
    """

    __slots__ = ("domain", "pixel_start", "pixel_end", "clamp", "_low_px", "_high_px")

    def __init__(self, domain: Domain, pixel_start: float, pixel_end: float, clamp: bool = True):
        validate_finite(pixel_start, "pixel_start")
        validate_finite(pixel_end, "pixel_end")

        self.domain = domain
        self.pixel_start = pixel_start
        self.pixel_end = pixel_end
        self.clamp = clamp
        self._low_px = min(pixel_start, pixel_end)
        self._high_px = max(pixel_start, pixel_end)

    @property
    def pixel_midpoint(self) -> float:
        return (self.pixel_start + self.pixel_end) / 2

    def __call__(self, value: float) -> float:
        """
        Пиксельная координата значения.

        Args:
            value: Значение в единицах данных

        Returns:
            Пиксель; для вырожденного domain — середина диапазона
        """
        if self.domain.is_degenerate:
            return self.pixel_midpoint

        t = (value - self.domain.min) / self.domain.span
        pixel = lerp(self.pixel_start, self.pixel_end, t)

        if self.clamp:
            return clamp(pixel, self._low_px, self._high_px)
        return pixel

    def invert(self, pixel: float) -> float:
        """
        Обратное отображение пиксель → значение (hit-testing, tooltips).

        Для вырожденного domain возвращает domain.min; при clamp=True
        результат ограничен domain.
        """
        if self.domain.is_degenerate or self.pixel_start == self.pixel_end:
            return self.domain.min

        t = (pixel - self.pixel_start) / (self.pixel_end - self.pixel_start)
        value = lerp(self.domain.min, self.domain.max, t)

        if self.clamp:
            return clamp(value, self.domain.min, self.domain.max)
        return value

    def __repr__(self) -> str:
        return (
            f"LinearScale(domain=[{self.domain.min}, {self.domain.max}], "
            f"pixels=[{self.pixel_start}, {self.pixel_end}], clamp={self.clamp})"
        )


def make_linear_scale(
    domain: Domain,
    pixel_range: tuple[float, float],
    options: ScaleOptions | None = None,
) -> LinearScale:
    """
    Построение линейной шкалы domain → pixel_range.

    Args:
        domain: Диапазон значений
        pixel_range: (pixel_min, pixel_max); допускается перевёрнутый
        options: clamp (default True), pad_fraction (default 0)

    Returns:
        LinearScale (callable value → pixel)

    Examples:
        >>> scale = make_linear_scale(Domain(min=0, max=100), (0, 200))
        >>> scale(50)
        100.0
        >>> scale(150)
        200.0
        >>> make_linear_scale(Domain(min=5, max=5), (0, 200))(42)
        100.0
    """
    opts = options or ScaleOptions()
    effective = domain.padded(opts.pad_fraction)

    if effective.is_degenerate:
        logger.debug("Degenerate domain %s, scale maps to pixel midpoint", effective)

    pixel_start, pixel_end = pixel_range
    return LinearScale(effective, pixel_start, pixel_end, clamp=opts.clamp)


# =============================================================================
# TICKS
# =============================================================================


def make_ticks(domain: Domain, count: int, pad_fraction: float = 0.0) -> list[float]:
    """
    Равномерные значения тиков, включая оба конца (padded) domain.

    Args:
        domain: Диапазон значений
        count: Количество тиков (>= 2); при count < 2 → [domain.min]
        pad_fraction: Расширение domain перед построением

    Returns:
        Список из count значений по возрастанию

    Examples:
        >>> make_ticks(Domain(min=0, max=10), 6)
        [0.0, 2.0, 4.0, 6.0, 8.0, 10.0]
        >>> make_ticks(Domain(min=0, max=10), 1)
        [0.0]
    """
    effective = domain.padded(pad_fraction)

    if count < 2:
        return [effective.min]

    intervals = count - 1
    ticks = [effective.min + effective.span * (i / intervals) for i in range(intervals)]
    # Последний тик ровно на max, без накопленной ошибки
    ticks.append(effective.max)
    return ticks


def label_indices(n: int, max_labels: int = DEFAULT_MAX_LABELS) -> list[int]:
    """
    Индексы точек, которые получают подпись на оси.

    Шаг k = ceil(n / max_labels): 0, k, 2k, ...

    Examples:
        >>> label_indices(12, 5)
        [0, 3, 6, 9]
        >>> label_indices(0)
        []
    """
    if max_labels < 1:
        raise ValueError(f"max_labels must be >= 1, got {max_labels}")
    if n <= 0:
        return []

    step = math.ceil(n / max_labels)
    return list(range(0, n, step))


# =============================================================================
# DOMAIN CONSTRUCTION
# =============================================================================


def domain_from_values(
    values: Iterable[float],
    pad_fraction: float = 0.0,
    fallback: Domain = FALLBACK_DOMAIN,
) -> Domain:
    """
    Domain по min/max значений с padding.

    Args:
        values: Конечные значения
        pad_fraction: Доля span для расширения с обеих сторон
        fallback: Domain для пустого входа (default: [0, 1])

    Returns:
        Domain

    Raises:
        ValueError: если среди значений есть NaN/Inf

    Examples:
        >>> domain_from_values([0.0, 10.0], pad_fraction=0.1)
        Domain(min=-1.0, max=11.0)
        >>> domain_from_values([])
        Domain(min=0.0, max=1.0)
    """
    validate_non_negative(pad_fraction, "pad_fraction")

    items = list(values)
    if not items:
        return fallback
    if not all_finite(items):
        raise ValueError("domain values must be finite (not NaN/Inf)")

    return Domain(min=min(items), max=max(items)).padded(pad_fraction)


def domain_from_summary(
    stats: SummaryStats,
    pad_fraction: float = DEFAULT_PAD_FRACTION,
    fallback: Domain = FALLBACK_DOMAIN,
) -> Domain:
    """
    Domain box plot оси: whiskers, квартили, медиана и все outliers.

    Для пустой статистики возвращает fallback.
    """
    if stats.is_empty:
        return fallback

    values = [stats.min, stats.q1, stats.median, stats.q3, stats.max]
    values.extend(stats.outlier_values)
    return domain_from_values(values, pad_fraction=pad_fraction)


def symmetric_domain(
    values: Sequence[float],
    pad_fraction: float = DEFAULT_PAD_FRACTION,
) -> Domain:
    """
    Симметричный относительно нуля domain: [-(r + p), r + p].

    r = max |v|, p = r * pad_fraction. Используется для осей со знаковыми
    процентными отклонениями (ноль в центре).

    Examples:
        >>> symmetric_domain([-5.0, 10.0])
        Domain(min=-11.0, max=11.0)
        >>> symmetric_domain([])
        Domain(min=0.0, max=0.0)
    """
    validate_non_negative(pad_fraction, "pad_fraction")

    if not values:
        return Domain(min=0.0, max=0.0)
    if not all_finite(values):
        raise ValueError("domain values must be finite (not NaN/Inf)")

    radius = max(abs(v) for v in values)
    extent = radius + radius * pad_fraction
    return Domain(min=-extent, max=extent)
