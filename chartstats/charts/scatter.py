"""
Scatter Layout — Comparison scatter chart

Две независимые линейные шкалы (X слева направо, Y снизу вверх), domain
каждой оси — min/max данных с 10% padding либо заданный вызывающей стороной.
Точки удерживаются на inset пикселей внутри области графика.
"""

from dataclasses import dataclass
from typing import Callable, Final, Generic, Iterable, TypeVar

from chartstats.core.domain.scale import Domain
from chartstats.core.math.numerical_safeguards import clamp, is_valid_float, validate_non_negative
from chartstats.core.scaling.axis_scaler import (
    DEFAULT_PAD_FRACTION,
    DEFAULT_TICK_COUNT,
    domain_from_values,
    make_linear_scale,
    make_ticks,
)

from .geometry import PlotArea

T = TypeVar("T")

# Отступ точек от краёв области графика (пиксели)
DEFAULT_POINT_INSET_PX: Final[float] = 6.0


@dataclass(frozen=True)
class ScatterPoint(Generic[T]):
    item: T
    x: float
    y: float


@dataclass(frozen=True)
class ScatterLayout(Generic[T]):
    x_domain: Domain
    y_domain: Domain
    points: tuple[ScatterPoint[T], ...]
    x_ticks: tuple[tuple[float, float], ...]  # (value, x)
    y_ticks: tuple[tuple[float, float], ...]  # (value, y)


def layout_scatter(
    items: Iterable[T],
    x_fn: Callable[[T], float | None],
    y_fn: Callable[[T], float | None],
    plot: PlotArea,
    pad_fraction: float = DEFAULT_PAD_FRACTION,
    inset: float = DEFAULT_POINT_INSET_PX,
    x_domain: Domain | None = None,
    y_domain: Domain | None = None,
    tick_count: int = DEFAULT_TICK_COUNT,
) -> ScatterLayout[T]:
    """
    Геометрия scatter chart.

    Элементы, у которых x_fn или y_fn вернули None или NaN/Inf, пропускаются.

    Args:
        items: Элементы данных (сделки и т.п.)
        x_fn / y_fn: Извлечение координат в единицах данных
        plot: Область графика
        pad_fraction: Padding domain, вычисленного из данных
        inset: Отступ точек от краёв (пиксели); не больше половины
            ширины/высоты области, на узком графике точки у центра
        x_domain / y_domain: Заданные domain (без padding)
        tick_count: Количество тиков на каждой оси

    Returns:
        ScatterLayout

    Raises:
        ValueError: если inset отрицателен или NaN/Inf
    """
    validate_non_negative(inset, "inset")
    inset_x = min(inset, plot.plot_width / 2)
    inset_y = min(inset, plot.plot_height / 2)

    valid: list[tuple[T, float, float]] = []
    for item in items:
        x, y = x_fn(item), y_fn(item)
        if x is None or y is None or not is_valid_float(x) or not is_valid_float(y):
            continue
        valid.append((item, x, y))

    x_dom = x_domain or domain_from_values((x for _, x, _ in valid), pad_fraction=pad_fraction)
    y_dom = y_domain or domain_from_values((y for _, _, y in valid), pad_fraction=pad_fraction)

    scale_x = make_linear_scale(x_dom, (plot.left, plot.right))
    # SVG: большие значения выше, т.е. меньший y
    scale_y = make_linear_scale(y_dom, (plot.bottom, plot.top))

    points = tuple(
        ScatterPoint(
            item=item,
            x=clamp(scale_x(x), plot.left + inset_x, plot.right - inset_x),
            y=clamp(scale_y(y), plot.top + inset_y, plot.bottom - inset_y),
        )
        for item, x, y in valid
    )

    return ScatterLayout(
        x_domain=x_dom,
        y_domain=y_dom,
        points=points,
        x_ticks=tuple((v, scale_x(v)) for v in make_ticks(x_dom, tick_count)),
        y_ticks=tuple((v, scale_y(v)) for v in make_ticks(y_dom, tick_count)),
    )
