"""
Chart layouts: thin consumers that turn statistics into pixel geometry.

Rendering itself (SVG, canvas, HTML) is left to the caller.
"""

from .bars import DEFAULT_MAX_BAR_FRACTION, BarSegment, layout_diverging_bars, layout_magnitude_bars
from .box_plot import BoxPlotLayout, OutlierMark, layout_box_plot
from .geometry import PlotArea
from .scatter import DEFAULT_POINT_INSET_PX, ScatterLayout, ScatterPoint, layout_scatter

__all__ = [
    # Geometry
    "PlotArea",
    # Box plot
    "BoxPlotLayout",
    "OutlierMark",
    "layout_box_plot",
    # Scatter
    "DEFAULT_POINT_INSET_PX",
    "ScatterLayout",
    "ScatterPoint",
    "layout_scatter",
    # Bars
    "DEFAULT_MAX_BAR_FRACTION",
    "BarSegment",
    "layout_diverging_bars",
    "layout_magnitude_bars",
]
