"""
Data providers: sources of observations consumed by the statistics core.
"""

from .base import ObservationProvider, ObservationQuery
from .memory import InMemoryProvider
from .synthetic import (
    DEFAULT_CATEGORIES,
    DEFAULT_SEED,
    PER_TRADE_PROFILE,
    PER_YEAR_PROFILE,
    SyntheticProfile,
    SyntheticTradeProvider,
)

__all__ = [
    # Interface
    "ObservationProvider",
    "ObservationQuery",
    # Implementations
    "InMemoryProvider",
    "SyntheticTradeProvider",
    # Synthetic profiles
    "SyntheticProfile",
    "PER_TRADE_PROFILE",
    "PER_YEAR_PROFILE",
    "DEFAULT_CATEGORIES",
    "DEFAULT_SEED",
]
