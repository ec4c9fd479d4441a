"""
Observation — Модель единичного наблюдения

Immutable Pydantic модель: числовое значение (цена сделки, P&L, коэффициент
корреляции, importance score) с опциональными метаданными.
Полная совместимость с JSON Schema (chartstats/core/contracts/schema/observation.json).
"""

from datetime import datetime
from typing import NamedTuple, Any

from pydantic import BaseModel, Field


# =============================================================================
# OBSERVATION MODEL
# =============================================================================


class Observation(BaseModel):
    """
    Модель наблюдения.

    value обязан быть конечным: NaN/Inf отклоняются при создании модели
    (pydantic ValidationError). Все вычисления статистики полагаются на это.

    Immutable модель (frozen=True).
    """

    value: float = Field(..., allow_inf_nan=False, description="Числовое значение наблюдения")
    id: str | None = Field(None, min_length=1, description="Идентификатор (trade id, trader id)")
    category: str | None = Field(
        None, min_length=1, description="Категория (тип контракта, металл, статус)"
    )
    timestamp: datetime | None = Field(None, description="Время наблюдения")

    model_config = {"frozen": True}

    @classmethod
    def of(cls, value: float) -> "Observation":
        """Наблюдение без метаданных."""
        return cls(value=value)


# =============================================================================
# AGGREGATES
# =============================================================================


class AggregateRecord(NamedTuple):
    """
    Агрегат одной группы наблюдений (недельный P&L, P&L по металлу и т.п.).
    """

    key: Any  # Ключ группы (дата, категория, label бина)
    total: float  # Сумма value_fn по группе
    count: int  # Количество наблюдений в группе
    average: float  # total / count
