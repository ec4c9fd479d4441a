"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. NaN/Inf проверки и санитизацию
2. Безопасное деление
3. Epsilon-сравнения float
4. Clamp / lerp
5. Валидацию параметров
"""

import pytest

from chartstats.core.math.numerical_safeguards import (
    EPS_CALC,
    EPS_FLOAT_COMPARE_ABS,
    all_finite,
    clamp,
    is_close,
    is_valid_float,
    is_zero,
    lerp,
    safe_divide,
    sanitize_float,
    validate_finite,
    validate_non_negative,
)

# =============================================================================
# ТЕСТЫ NaN/Inf
# =============================================================================


class TestFiniteChecks:
    """Тесты для is_valid_float / all_finite / sanitize_float"""

    def test_regular_values_valid(self) -> None:
        """Обычные значения валидны"""
        assert is_valid_float(0.0)
        assert is_valid_float(-1e300)
        assert is_valid_float(1e-300)

    def test_nan_inf_invalid(self) -> None:
        """NaN и Inf невалидны"""
        assert not is_valid_float(float("nan"))
        assert not is_valid_float(float("inf"))
        assert not is_valid_float(float("-inf"))

    def test_all_finite(self) -> None:
        """all_finite проверяет каждый элемент"""
        assert all_finite([1.0, 2.0, -3.0])
        assert all_finite([])
        assert not all_finite([1.0, float("nan")])

    def test_sanitize_float(self) -> None:
        """NaN/Inf заменяются fallback"""
        assert sanitize_float(10.0) == 10.0
        assert sanitize_float(float("nan")) == 0.0
        assert sanitize_float(float("-inf"), fallback=-1.0) == -1.0


# =============================================================================
# ТЕСТЫ БЕЗОПАСНОГО ДЕЛЕНИЯ
# =============================================================================


class TestSafeDivide:
    """Тесты для safe_divide"""

    def test_normal_division(self) -> None:
        """Обычное деление работает корректно"""
        assert safe_divide(10.0, 2.0) == 5.0
        assert safe_divide(-10.0, 4.0) == -2.5

    def test_division_by_zero_returns_fallback(self) -> None:
        """Деление на ноль возвращает fallback"""
        assert safe_divide(10.0, 0.0) == 0.0
        assert safe_divide(10.0, 0.0, fallback=1.0) == 1.0

    def test_tiny_denominator_treated_as_zero(self) -> None:
        """Знаменатель меньше eps считается нулём"""
        assert safe_divide(1.0, EPS_CALC / 10, fallback=-1.0) == -1.0

    def test_nan_inputs_return_fallback(self) -> None:
        """NaN/Inf на входе возвращают fallback"""
        assert safe_divide(float("nan"), 2.0, fallback=7.0) == 7.0
        assert safe_divide(2.0, float("inf"), fallback=7.0) == 7.0

    def test_invalid_eps_raises(self) -> None:
        """Невалидный eps вызывает ошибку"""
        with pytest.raises(ValueError, match="eps must be positive"):
            safe_divide(1.0, 1.0, eps=0.0)


# =============================================================================
# ТЕСТЫ СРАВНЕНИЙ
# =============================================================================


class TestComparisons:
    """Тесты для is_close / is_zero"""

    def test_is_close(self) -> None:
        """Близкие значения равны с учётом толерантности"""
        assert is_close(1.0, 1.0 + 1e-10)
        assert not is_close(1.0, 1.1)

    def test_is_zero(self) -> None:
        """Значения в пределах tol считаются нулём"""
        assert is_zero(0.0)
        assert is_zero(EPS_FLOAT_COMPARE_ABS / 2)
        assert not is_zero(1e-6)
        assert is_zero(1e-6, tol=1e-5)


# =============================================================================
# ТЕСТЫ УТИЛИТ
# =============================================================================


class TestClampAndLerp:
    """Тесты для clamp / lerp"""

    def test_clamp_inside_range(self) -> None:
        assert clamp(5.0, 0.0, 10.0) == 5.0

    def test_clamp_outside_range(self) -> None:
        assert clamp(-1.0, 0.0, 10.0) == 0.0
        assert clamp(15.0, 0.0, 10.0) == 10.0

    def test_clamp_one_sided(self) -> None:
        """Отсутствующая граница не ограничивает"""
        assert clamp(-100.0, max_value=10.0) == -100.0
        assert clamp(100.0, min_value=0.0) == 100.0

    def test_lerp(self) -> None:
        assert lerp(0.0, 200.0, 0.5) == 100.0
        assert lerp(200.0, 0.0, 0.25) == 150.0
        # Без clamp: экстраполяция
        assert lerp(0.0, 10.0, 1.5) == 15.0


# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ
# =============================================================================


class TestValidation:
    """Тесты для validate_finite / validate_non_negative"""

    def test_validate_finite(self) -> None:
        validate_finite(1.0, "x")
        with pytest.raises(ValueError, match="x must be a valid float"):
            validate_finite(float("nan"), "x")

    def test_validate_non_negative(self) -> None:
        validate_non_negative(0.0, "pad")
        with pytest.raises(ValueError, match="pad must be non-negative"):
            validate_non_negative(-0.1, "pad")
        with pytest.raises(ValueError, match="not NaN/Inf"):
            validate_non_negative(float("inf"), "pad")
