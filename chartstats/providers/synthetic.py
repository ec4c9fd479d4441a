"""
SyntheticTradeProvider — Детерминированный генератор mock P&L

Заменяет backend в демо и тестах. Распределение повторяет mock-данные
дашборда:
- Базовые значения: (U1 + U2 + U3 - 1.5) * scale, округление до целого
  (приближение нормального распределения суммой трёх равномерных)
- Каждое outlier_every-е наблюдение дополнительно порождает экстремальный
  outlier (с равной вероятностью из нижнего или верхнего хвоста)
- Случайная категория и timestamp в окне window_days до anchor

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Одинаковые seed, profile и anchor → идентичные наблюдения
2. Генератор не использует глобальный random state
"""

import logging
import random
from datetime import datetime, timedelta, timezone
from typing import Final

from pydantic import BaseModel, Field, model_validator

from chartstats.core.domain.observation import Observation

from .base import ObservationProvider, ObservationQuery

logger = logging.getLogger(__name__)

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

DEFAULT_CATEGORIES: Final[tuple[str, ...]] = ("Futures", "Options", "Swaps", "Forwards")

DEFAULT_SEED: Final[int] = 42


# =============================================================================
# PROFILE MODEL
# =============================================================================


class SyntheticProfile(BaseModel):
    """
    Параметры распределения синтетических P&L.

    Immutable модель (frozen=True).
    """

    sample_size: int = Field(..., gt=0, description="Количество базовых наблюдений")
    scale: float = Field(..., gt=0, description="Масштаб базового распределения")
    outlier_every: int = Field(..., gt=0, description="Outlier на каждое N-е наблюдение")
    low_outlier_range: tuple[float, float] = Field(..., description="Диапазон нижних outliers")
    high_outlier_range: tuple[float, float] = Field(..., description="Диапазон верхних outliers")
    window_days: float = Field(..., gt=0, description="Окно timestamps до anchor (дни)")
    id_prefix: str = Field(..., min_length=1, description="Префикс идентификаторов")
    categories: tuple[str, ...] = Field(DEFAULT_CATEGORIES, min_length=1)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_ranges(self) -> "SyntheticProfile":
        """Проверка, что диапазоны outliers не перевёрнуты"""
        for name in ("low_outlier_range", "high_outlier_range"):
            low, high = getattr(self, name)
            if high < low:
                raise ValueError(f"{name} must be (low, high), got ({low}, {high})")
        return self


# P&L на сделку: ~[-300, 300], outliers -1000..-500 / 1000..3000
PER_TRADE_PROFILE: Final[SyntheticProfile] = SyntheticProfile(
    sample_size=100,
    scale=200.0,
    outlier_every=30,
    low_outlier_range=(-1000.0, -500.0),
    high_outlier_range=(1000.0, 3000.0),
    window_days=30.0,
    id_prefix="day",
)

# Годовой P&L по трейдерам: ~[-30000, 30000], outliers -80000..-50000 / 100000..300000
PER_YEAR_PROFILE: Final[SyntheticProfile] = SyntheticProfile(
    sample_size=20,
    scale=20000.0,
    outlier_every=10,
    low_outlier_range=(-80000.0, -50000.0),
    high_outlier_range=(100000.0, 300000.0),
    window_days=365.0,
    id_prefix="year",
)


# =============================================================================
# PROVIDER
# =============================================================================


class SyntheticTradeProvider(ObservationProvider):
    """
    Провайдер синтетических P&L наблюдений.

    Каждый fetch_observations генерирует набор заново из seed, поэтому
    повторные вызовы возвращают одинаковые данные.
    """

    def __init__(
        self,
        profile: SyntheticProfile = PER_TRADE_PROFILE,
        seed: int = DEFAULT_SEED,
        anchor: datetime | None = None,
    ):
        self.profile = profile
        self.seed = seed
        anchor = anchor or datetime.now(timezone.utc)
        self.anchor = anchor if anchor.tzinfo else anchor.replace(tzinfo=timezone.utc)

    def generate(self) -> list[Observation]:
        """Полный синтетический набор (базовые значения + outliers)."""
        rng = random.Random(self.seed)
        p = self.profile
        window_seconds = p.window_days * 86400

        def stamp() -> datetime:
            return self.anchor - timedelta(seconds=rng.random() * window_seconds)

        observations: list[Observation] = []
        for i in range(p.sample_size):
            value = round((rng.random() + rng.random() + rng.random() - 1.5) * p.scale)
            observations.append(
                Observation(
                    value=float(value),
                    id=f"{p.id_prefix}-{i}",
                    category=rng.choice(p.categories),
                    timestamp=stamp(),
                )
            )

            if i % p.outlier_every == 0:
                low, high = p.low_outlier_range if rng.random() < 0.5 else p.high_outlier_range
                observations.append(
                    Observation(
                        value=rng.uniform(low, high),
                        id=f"{p.id_prefix}-outlier-{i}",
                        category=rng.choice(p.categories),
                        timestamp=stamp(),
                    )
                )

        logger.debug(
            "Generated %d synthetic observations (profile=%s, seed=%d)",
            len(observations),
            p.id_prefix,
            self.seed,
        )
        return observations

    def fetch_observations(self, query: ObservationQuery | None = None) -> list[Observation]:
        observations = self.generate()
        if query is None:
            return observations

        matched = [obs for obs in observations if query.matches(obs)]
        if query.limit is not None:
            matched = matched[: query.limit]
        return matched
