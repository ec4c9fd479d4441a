"""
ObservationProvider — Интерфейс источника наблюдений

Статистическое ядро не знает, откуда приходят данные: mock-генератор,
in-memory список или реальный backend реализуют один интерфейс.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone

from pydantic import BaseModel, Field, model_validator

from chartstats.core.domain.observation import Observation


# =============================================================================
# QUERY MODEL
# =============================================================================


class ObservationQuery(BaseModel):
    """
    Фильтр наблюдений.

    Временное окно полуоткрытое: start <= timestamp < end (UTC).
    Наблюдения без timestamp не проходят фильтр, если задан start или end.

    Immutable модель (frozen=True).
    """

    category: str | None = Field(None, min_length=1, description="Точная категория")
    start: datetime | None = Field(None, description="Начало окна (включительно)")
    end: datetime | None = Field(None, description="Конец окна (исключительно)")
    limit: int | None = Field(None, gt=0, description="Максимум наблюдений в ответе")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_window(self) -> "ObservationQuery":
        """Проверка, что окно не перевёрнуто"""
        if self.start is not None and self.end is not None:
            if _as_utc(self.end) <= _as_utc(self.start):
                raise ValueError(f"end {self.end} must be after start {self.start}")
        return self

    def matches(self, obs: Observation) -> bool:
        """Проходит ли наблюдение фильтр (без учёта limit)."""
        if self.category is not None and obs.category != self.category:
            return False

        if self.start is None and self.end is None:
            return True
        if obs.timestamp is None:
            return False

        ts = _as_utc(obs.timestamp)
        if self.start is not None and ts < _as_utc(self.start):
            return False
        if self.end is not None and ts >= _as_utc(self.end):
            return False
        return True


def _as_utc(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


# =============================================================================
# PROVIDER INTERFACE
# =============================================================================


class ObservationProvider(ABC):
    """
    Базовый класс источника наблюдений.
    """

    @abstractmethod
    def fetch_observations(self, query: ObservationQuery | None = None) -> list[Observation]:
        """
        Наблюдения, удовлетворяющие query.

        Args:
            query: Фильтр (None — все наблюдения)

        Returns:
            Новый список наблюдений (вызывающая сторона может его мутировать)
        """
        raise NotImplementedError
