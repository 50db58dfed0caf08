"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. NaN/Inf проверки и санитизацию
2. Безопасное возведение в степень и деление
3. Толерантные сравнения float
4. Валидацию параметров
"""

import math

import pytest

from compecon.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    EXPONENT_SUM_TOLERANCE,
    is_close,
    is_greater,
    is_lesser_or_equal,
    is_valid_float,
    safe_power,
    safe_ratio,
    sanitize_float,
    validate_non_negative,
    validate_positive,
)


# =============================================================================
# ТЕСТЫ КОНСТАНТ
# =============================================================================


class TestEpsilonConstants:
    """Тесты для epsilon-параметров"""

    def test_constants_are_positive(self) -> None:
        """Все epsilon строго положительны"""
        assert EPS_FLOAT_COMPARE_ABS > 0
        assert EPS_FLOAT_COMPARE_REL > 0
        assert EXPONENT_SUM_TOLERANCE > 0

    def test_exponent_sum_tolerance_value(self) -> None:
        assert EXPONENT_SUM_TOLERANCE == 1e-6


# =============================================================================
# ТЕСТЫ NaN/Inf
# =============================================================================


class TestIsValidFloat:
    """Тесты для is_valid_float"""

    def test_finite_values_valid(self) -> None:
        assert is_valid_float(0.0)
        assert is_valid_float(-1.5)
        assert is_valid_float(1e300)

    def test_nan_and_inf_invalid(self) -> None:
        assert not is_valid_float(float("nan"))
        assert not is_valid_float(float("inf"))
        assert not is_valid_float(float("-inf"))


class TestSanitizeFloat:
    """Тесты для sanitize_float"""

    def test_valid_value_unchanged(self) -> None:
        assert sanitize_float(10.0) == 10.0

    def test_invalid_values_replaced(self) -> None:
        assert sanitize_float(float("nan")) == 0.0
        assert sanitize_float(float("inf")) == 0.0
        assert sanitize_float(float("-inf"), fallback=-1.0) == -1.0


# =============================================================================
# ТЕСТЫ БЕЗОПАСНОЙ АРИФМЕТИКИ
# =============================================================================


class TestSafePower:
    """Тесты для safe_power"""

    def test_regular_power(self) -> None:
        assert safe_power(4.0, 0.5) == pytest.approx(2.0)
        assert safe_power(8.0, 1.0 / 3.0) == pytest.approx(2.0)

    def test_zero_with_negative_exponent_is_inf(self) -> None:
        """0 ** (-e) → inf вместо ZeroDivisionError"""
        assert safe_power(0.0, -0.5) == math.inf

    def test_zero_with_positive_exponent_is_zero(self) -> None:
        assert safe_power(0.0, 0.5) == 0.0

    def test_zero_with_zero_exponent_is_one(self) -> None:
        assert safe_power(0.0, 0.0) == 1.0


class TestSafeRatio:
    """Тесты для safe_ratio"""

    def test_regular_division(self) -> None:
        assert safe_ratio(1.0, 4.0) == 0.25
        assert safe_ratio(-10.0, 2.0) == -5.0

    def test_division_by_zero_gives_signed_inf(self) -> None:
        assert safe_ratio(1.0, 0.0) == math.inf
        assert safe_ratio(-1.0, 0.0) == -math.inf

    def test_zero_by_zero_is_nan(self) -> None:
        assert math.isnan(safe_ratio(0.0, 0.0))

    def test_nan_numerator_by_zero_is_nan(self) -> None:
        assert math.isnan(safe_ratio(float("nan"), 0.0))

    def test_nan_denominator_is_nan(self) -> None:
        assert math.isnan(safe_ratio(1.0, float("nan")))


# =============================================================================
# ТЕСТЫ СРАВНЕНИЙ
# =============================================================================


class TestIsClose:
    """Тесты для is_close"""

    def test_close_values(self) -> None:
        assert is_close(1.0, 1.0 + 1e-10)
        assert is_close(0.0, 1e-13)

    def test_distant_values(self) -> None:
        assert not is_close(1.0, 1.1)


class TestIsGreater:
    """Тесты для is_greater"""

    def test_clearly_greater(self) -> None:
        assert is_greater(100.0, 50.0)

    def test_almost_equal_is_not_greater(self) -> None:
        """Накопленная ошибка float не считается превышением"""
        assert not is_greater(100.0, 100.0 - 1e-12)
        assert not is_greater(100.0, 100.0)

    def test_lesser_is_not_greater(self) -> None:
        assert not is_greater(50.0, 100.0)

    def test_nan_is_never_greater(self) -> None:
        assert not is_greater(100.0, float("nan"))


class TestIsLesserOrEqual:
    """Тесты для is_lesser_or_equal"""

    def test_lesser(self) -> None:
        assert is_lesser_or_equal(-1.0, 0.0)

    def test_equal_within_tolerance(self) -> None:
        assert is_lesser_or_equal(1e-13, 0.0)
        assert is_lesser_or_equal(0.0, 0.0)

    def test_greater(self) -> None:
        assert not is_lesser_or_equal(1.0, 0.0)


# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ
# =============================================================================


class TestValidatePositive:
    """Тесты для validate_positive"""

    def test_positive_passes(self) -> None:
        validate_positive(1.0, "x")
        validate_positive(1e-9, "x")

    def test_zero_and_negative_raise(self) -> None:
        with pytest.raises(ValueError, match="x must be positive"):
            validate_positive(0.0, "x")
        with pytest.raises(ValueError, match="x must be positive"):
            validate_positive(-1.0, "x")

    def test_nan_raises(self) -> None:
        with pytest.raises(ValueError, match="not NaN/Inf"):
            validate_positive(float("nan"), "x")


class TestValidateNonNegative:
    """Тесты для validate_non_negative"""

    def test_zero_passes(self) -> None:
        validate_non_negative(0.0, "x")

    def test_negative_raises(self) -> None:
        with pytest.raises(ValueError, match="x must be non-negative"):
            validate_non_negative(-0.1, "x")

    def test_inf_raises(self) -> None:
        with pytest.raises(ValueError, match="not NaN/Inf"):
            validate_non_negative(float("inf"), "x")
