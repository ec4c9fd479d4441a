"""
Bar Layouts — Diverging и magnitude bar charts

- layout_diverging_bars: correlation bars от центральной линии, строки
  упорядочены по |значению|
- layout_magnitude_bars: высоты баров агрегатов как доля доступной высоты
"""

from dataclasses import dataclass
from typing import Callable, Final, Generic, Sequence, TypeVar

from chartstats.core.domain.observation import AggregateRecord
from chartstats.core.math.numerical_safeguards import validate_non_negative
from chartstats.core.scaling.bars import make_diverging_scale, normalize_by_max_abs
from chartstats.core.stats.correlation import rank_by_magnitude

from .geometry import PlotArea

T = TypeVar("T")

# Максимальная доля высоты, занимаемая самым длинным баром
DEFAULT_MAX_BAR_FRACTION: Final[float] = 0.8


@dataclass(frozen=True)
class BarSegment(Generic[T]):
    """Бар одной строки diverging chart."""

    item: T
    value: float
    row: int  # Индекс строки после ранжирования
    start_x: float
    end_x: float

    @property
    def is_negative(self) -> bool:
        return self.value < 0

    @property
    def length(self) -> float:
        return self.end_x - self.start_x


def layout_diverging_bars(
    items: Sequence[T],
    value_fn: Callable[[T], float],
    plot: PlotArea,
) -> list[BarSegment[T]]:
    """
    Геометрия diverging bars (например, корреляции признаков).

    Центр — середина области графика; самый длинный бар занимает половину
    ширины.

    Args:
        items: Элементы (любой порядок)
        value_fn: Значение со знаком
        plot: Область графика

    Returns:
        Бары по убыванию |значения|
    """
    ranked = rank_by_magnitude(items, value_fn)
    if not ranked:
        return []

    max_abs = max(abs(value_fn(item)) for item in ranked)
    scale = make_diverging_scale(max_abs, center=plot.center_x, half_length=plot.plot_width / 2)

    segments: list[BarSegment[T]] = []
    for row, item in enumerate(ranked):
        value = value_fn(item)
        start_x, end_x = scale.extent(value)
        segments.append(BarSegment(item=item, value=value, row=row, start_x=start_x, end_x=end_x))
    return segments


def layout_magnitude_bars(
    records: Sequence[AggregateRecord],
    max_fraction: float = DEFAULT_MAX_BAR_FRACTION,
    value_fn: Callable[[AggregateRecord], float] | None = None,
    floor: float = 0.0,
) -> list[tuple[AggregateRecord, float]]:
    """
    Высоты баров агрегатов как доли доступной высоты.

    Args:
        records: Агрегаты (порядок сохраняется)
        max_fraction: Доля высоты для самого длинного бара (0..1)
        value_fn: Значение бара (default: record.average)
        floor: Минимальный знаменатель нормализации

    Returns:
        Пары (record, fraction), fraction в [0, max_fraction]
    """
    validate_non_negative(max_fraction, "max_fraction")
    if max_fraction > 1:
        raise ValueError(f"max_fraction must be <= 1, got {max_fraction}")

    extract = value_fn or (lambda record: record.average)
    fractions = normalize_by_max_abs([extract(r) for r in records], floor=floor)
    return [(record, fraction * max_fraction) for record, fraction in zip(records, fractions)]
