"""
Contract Validation Module

Модуль для валидации JSON контрактов chartstats.
"""

from .validators import (
    AggregateRecordValidator,
    ContractValidator,
    ObservationValidator,
    SchemaLoader,
    SummaryStatsValidator,
    aggregate_to_payload,
    summary_to_payload,
    validate_aggregate_record,
    validate_observation,
    validate_summary_stats,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ObservationValidator",
    "SummaryStatsValidator",
    "AggregateRecordValidator",
    # Functions
    "validate_observation",
    "validate_summary_stats",
    "validate_aggregate_record",
    "summary_to_payload",
    "aggregate_to_payload",
]
