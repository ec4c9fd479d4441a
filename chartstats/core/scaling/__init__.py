"""
Core scaling modules для chartstats

Линейные шкалы, тики, построение domain и нормализация баров.
"""

# Axis scaler
from chartstats.core.scaling.axis_scaler import (
    DEFAULT_MAX_LABELS,
    DEFAULT_PAD_FRACTION,
    DEFAULT_TICK_COUNT,
    FALLBACK_DOMAIN,
    LinearScale,
    domain_from_summary,
    domain_from_values,
    label_indices,
    make_linear_scale,
    make_ticks,
    symmetric_domain,
)

# Bars
from chartstats.core.scaling.bars import (
    DivergingScale,
    make_diverging_scale,
    normalize_by_max_abs,
)

__all__ = [
    # Axis scaler: Constants
    "DEFAULT_MAX_LABELS",
    "DEFAULT_PAD_FRACTION",
    "DEFAULT_TICK_COUNT",
    "FALLBACK_DOMAIN",
    # Axis scaler: Types
    "LinearScale",
    # Axis scaler: Functions
    "domain_from_summary",
    "domain_from_values",
    "label_indices",
    "make_linear_scale",
    "make_ticks",
    "symmetric_domain",
    # Bars
    "DivergingScale",
    "make_diverging_scale",
    "normalize_by_max_abs",
]
