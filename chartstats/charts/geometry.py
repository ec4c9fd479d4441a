"""
PlotArea — Геометрия области графика
"""

from dataclasses import dataclass

from chartstats.core.math.numerical_safeguards import validate_non_negative


@dataclass(frozen=True)
class PlotArea:
    """
    Прямоугольник графика с отступами (пиксели, начало координат — левый
    верхний угол, Y растёт вниз как в SVG).
    """

    width: float
    height: float
    margin_top: float = 0.0
    margin_right: float = 0.0
    margin_bottom: float = 0.0
    margin_left: float = 0.0

    def __post_init__(self):
        for name in ("width", "height", "margin_top", "margin_right", "margin_bottom", "margin_left"):
            validate_non_negative(getattr(self, name), name)

        if self.plot_width <= 0:
            raise ValueError(
                f"horizontal margins {self.margin_left} + {self.margin_right} "
                f"leave no room in width {self.width}"
            )
        if self.plot_height <= 0:
            raise ValueError(
                f"vertical margins {self.margin_top} + {self.margin_bottom} "
                f"leave no room in height {self.height}"
            )

    @property
    def left(self) -> float:
        return self.margin_left

    @property
    def right(self) -> float:
        return self.width - self.margin_right

    @property
    def top(self) -> float:
        return self.margin_top

    @property
    def bottom(self) -> float:
        return self.height - self.margin_bottom

    @property
    def plot_width(self) -> float:
        return self.width - self.margin_left - self.margin_right

    @property
    def plot_height(self) -> float:
        return self.height - self.margin_top - self.margin_bottom

    @property
    def center_x(self) -> float:
        return self.left + self.plot_width / 2

    @property
    def center_y(self) -> float:
        return self.top + self.plot_height / 2
