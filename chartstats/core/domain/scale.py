"""
Domain / ScaleOptions — Модели числового диапазона и параметров шкалы

Domain — отрезок значений, отображаемый на пиксельный диапазон.
ScaleOptions — параметры построения линейной шкалы.
"""

import sys
from typing import Final

from pydantic import BaseModel, Field, model_validator

# Границы padded domain не выходят за конечный диапазон float
_FLOAT_MAX: Final[float] = sys.float_info.max


# =============================================================================
# DOMAIN MODEL
# =============================================================================


class Domain(BaseModel):
    """
    Числовой диапазон [min, max].

    Допускается вырожденный диапазон (max == min): шкала отображает его в
    середину пиксельного диапазона. Перевёрнутый диапазон (max < min)
    отклоняется.

    Immutable модель (frozen=True).
    """

    min: float = Field(..., allow_inf_nan=False, description="Нижняя граница")
    max: float = Field(..., allow_inf_nan=False, description="Верхняя граница")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_bounds(self) -> "Domain":
        """Проверка, что max >= min"""
        if self.max < self.min:
            raise ValueError(f"domain max {self.max} must be >= min {self.min}")
        return self

    @property
    def span(self) -> float:
        return self.max - self.min

    @property
    def is_degenerate(self) -> bool:
        """Нулевая ширина: max == min (без допуска)."""
        return self.max == self.min

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2

    def padded(self, fraction: float) -> "Domain":
        """
        Расширение диапазона на fraction * span с обеих сторон.

        Вырожденный диапазон остаётся вырожденным. Границы ограничены
        ±sys.float_info.max: у диапазонов на пределе float padding обрезается.

        Examples:
            >>> Domain(min=0.0, max=10.0).padded(0.1)
            Domain(min=-1.0, max=11.0)
        """
        if fraction < 0:
            raise ValueError(f"pad fraction must be non-negative, got {fraction}")
        if fraction == 0:
            return self
        pad = self.span * fraction
        return Domain(
            min=max(self.min - pad, -_FLOAT_MAX),
            max=min(self.max + pad, _FLOAT_MAX),
        )

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


# =============================================================================
# SCALE OPTIONS
# =============================================================================


class ScaleOptions(BaseModel):
    """
    Параметры линейной шкалы.

    Immutable модель (frozen=True).
    """

    clamp: bool = Field(True, description="Ограничивать результат пиксельным диапазоном")
    pad_fraction: float = Field(
        0.0, ge=0, allow_inf_nan=False, description="Расширение domain (доля span) с обеих сторон"
    )

    model_config = {"frozen": True}
