"""
Domain models and value objects.

Contains fundamental entities: Observation, SummaryStats, Domain, ScaleOptions.
"""

from chartstats.core.domain.observation import AggregateRecord, Observation
from chartstats.core.domain.scale import Domain, ScaleOptions
from chartstats.core.domain.summary import SummaryStats

__all__ = [
    # Observation model
    "Observation",
    "AggregateRecord",
    # Summary model
    "SummaryStats",
    # Scale models
    "Domain",
    "ScaleOptions",
]
