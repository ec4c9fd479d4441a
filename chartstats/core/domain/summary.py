"""
SummaryStats — Модель box-plot статистики

Immutable Pydantic модель, результат compute_summary.
Полная совместимость с JSON Schema (chartstats/core/contracts/schema/summary_stats.json).
"""

from pydantic import BaseModel, Field, model_validator

from .observation import Observation


# =============================================================================
# SUMMARY STATS MODEL
# =============================================================================


class SummaryStats(BaseModel):
    """
    Box-plot статистика набора наблюдений.

    min/max считаются только по не-outlier подмножеству (whiskers),
    mean и std_dev по всем наблюдениям, включая outliers.

    Инвариант: min <= q1 <= median <= q3 <= max.

    Immutable модель (frozen=True). Пересчитывается на каждом вызове,
    никогда не мутируется.
    """

    # Пятичисловая сводка
    min: float = Field(..., description="Минимум не-outlier значений (нижний whisker)")
    q1: float = Field(..., description="Первый квартиль (nearest-rank)")
    median: float = Field(..., description="Медиана")
    q3: float = Field(..., description="Третий квартиль (nearest-rank)")
    max: float = Field(..., description="Максимум не-outlier значений (верхний whisker)")

    # Моменты
    mean: float = Field(..., description="Среднее арифметическое по всем наблюдениям")
    std_dev: float = Field(0.0, ge=0, description="Стандартное отклонение (population)")

    # Fences
    iqr: float = Field(0.0, ge=0, description="Interquartile range: q3 - q1")
    lower_fence: float = Field(0.0, description="q1 - 1.5 * IQR")
    upper_fence: float = Field(0.0, description="q3 + 1.5 * IQR")

    outliers: tuple[Observation, ...] = Field(
        default=(), description="Наблюдения за пределами fences (по возрастанию value)"
    )
    sample_size: int = Field(..., ge=0, description="Количество наблюдений (включая outliers)")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_ordering(self) -> "SummaryStats":
        """Проверка порядка пятичисловой сводки"""
        if not (self.min <= self.q1 <= self.median <= self.q3 <= self.max):
            raise ValueError(
                "summary must satisfy min <= q1 <= median <= q3 <= max, got "
                f"{self.min}, {self.q1}, {self.median}, {self.q3}, {self.max}"
            )
        return self

    @classmethod
    def empty(cls) -> "SummaryStats":
        """Нулевая статистика для пустого набора наблюдений."""
        return cls(min=0.0, q1=0.0, median=0.0, q3=0.0, max=0.0, mean=0.0, sample_size=0)

    @property
    def is_empty(self) -> bool:
        return self.sample_size == 0

    @property
    def outlier_values(self) -> list[float]:
        return [o.value for o in self.outliers]

    def is_outlier(self, value: float) -> bool:
        """
        Проверка value по fences этой статистики.

        Для пустой статистики всегда False.
        """
        if self.is_empty:
            return False
        return value < self.lower_fence or value > self.upper_fence
