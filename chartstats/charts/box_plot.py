"""
Box Plot Layout — Горизонтальный box plot

Переводит SummaryStats в пиксельные координаты по оси X:
whiskers, квартили, медиана, среднее, outliers и тики оси.
Domain оси покрывает всю сводку вместе с outliers плюс 10% padding.
"""

from dataclasses import dataclass

from chartstats.core.domain.observation import Observation
from chartstats.core.domain.scale import Domain
from chartstats.core.domain.summary import SummaryStats
from chartstats.core.scaling.axis_scaler import (
    DEFAULT_PAD_FRACTION,
    DEFAULT_TICK_COUNT,
    domain_from_summary,
    make_linear_scale,
    make_ticks,
)

from .geometry import PlotArea


@dataclass(frozen=True)
class OutlierMark:
    """Outlier и его пиксельная координата."""

    observation: Observation
    x: float


@dataclass(frozen=True)
class BoxPlotLayout:
    """Пиксельная геометрия box plot (все x — абсолютные координаты)."""

    domain: Domain
    whisker_low_x: float
    q1_x: float
    median_x: float
    q3_x: float
    whisker_high_x: float
    mean_x: float
    center_y: float
    outliers: tuple[OutlierMark, ...]
    ticks: tuple[tuple[float, float], ...]  # (value, x)

    @property
    def box_width(self) -> float:
        return self.q3_x - self.q1_x


def layout_box_plot(
    stats: SummaryStats,
    plot: PlotArea,
    pad_fraction: float = DEFAULT_PAD_FRACTION,
    tick_count: int = DEFAULT_TICK_COUNT,
) -> BoxPlotLayout:
    """
    Геометрия горизонтального box plot.

    Args:
        stats: Box-plot сводка
        plot: Область графика
        pad_fraction: Padding domain оси (default 10%)
        tick_count: Количество тиков оси (default 6)

    Returns:
        BoxPlotLayout
    """
    domain = domain_from_summary(stats, pad_fraction=pad_fraction)
    # domain уже с padding
    scale_x = make_linear_scale(domain, (plot.left, plot.right))

    return BoxPlotLayout(
        domain=domain,
        whisker_low_x=scale_x(stats.min),
        q1_x=scale_x(stats.q1),
        median_x=scale_x(stats.median),
        q3_x=scale_x(stats.q3),
        whisker_high_x=scale_x(stats.max),
        mean_x=scale_x(stats.mean),
        center_y=plot.center_y,
        outliers=tuple(OutlierMark(observation=o, x=scale_x(o.value)) for o in stats.outliers),
        ticks=tuple((value, scale_x(value)) for value in make_ticks(domain, tick_count)),
    )
