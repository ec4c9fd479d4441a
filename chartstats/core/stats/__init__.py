"""
Core stats modules для chartstats

Box-plot статистика, группировка, временные ряды и корреляции.
"""

# Summary engine
from chartstats.core.stats.summary_engine import (
    IQR_FENCE_MULTIPLIER,
    Q1_RANK,
    Q3_RANK,
    InvalidNumericInput,
    as_observations,
    compute_summary,
    finite_observations,
    mean_of,
    median_of_sorted,
    nearest_rank,
    population_std_dev,
)

# Grouping
from chartstats.core.stats.grouping import (
    MILLISECONDS_THRESHOLD,
    SECONDS_PER_DAY,
    aggregate,
    by_category,
    by_day,
    by_week,
    day_start_unix_seconds,
    group_by_key,
    summarize_groups,
    threshold_bucketer,
    to_unix_seconds,
)

# Series
from chartstats.core.stats.series import (
    change_over,
    interpolate_at,
    percent_difference,
)

# Correlation
from chartstats.core.stats.correlation import (
    DEFAULT_MAX_LAG,
    DEFAULT_WINDOW_SIZE,
    pearson_correlation,
    rank_by_magnitude,
    rolling_lagged_correlations,
)

__all__ = [
    # Summary engine: Constants
    "IQR_FENCE_MULTIPLIER",
    "Q1_RANK",
    "Q3_RANK",
    # Summary engine: Exceptions
    "InvalidNumericInput",
    # Summary engine: Functions
    "as_observations",
    "compute_summary",
    "finite_observations",
    "mean_of",
    "median_of_sorted",
    "nearest_rank",
    "population_std_dev",
    # Grouping: Constants
    "MILLISECONDS_THRESHOLD",
    "SECONDS_PER_DAY",
    # Grouping: Functions
    "aggregate",
    "by_category",
    "by_day",
    "by_week",
    "day_start_unix_seconds",
    "group_by_key",
    "summarize_groups",
    "threshold_bucketer",
    "to_unix_seconds",
    # Series
    "change_over",
    "interpolate_at",
    "percent_difference",
    # Correlation: Constants
    "DEFAULT_MAX_LAG",
    "DEFAULT_WINDOW_SIZE",
    # Correlation: Functions
    "pearson_correlation",
    "rank_by_magnitude",
    "rolling_lagged_correlations",
]
