"""
Numerical Safeguards — безопасные математические примитивы

Модуль обеспечивает численную устойчивость оптимизационного движка:
- Epsilon-параметры для сравнений float
- NaN/Inf проверки и санитизация
- Толерантные сравнения (greater / lesser-or-equal) для циклов по бюджету
- Безопасное возведение в степень (0 ** отрицательная степень → inf)
- Валидация параметров при конструировании

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Степень нуля с отрицательным показателем возвращает inf, а не исключение
2. NaN никогда не попадает в результирующий bundle (заменяется на 0.0)
3. Float сравнения всегда учитывают машинную точность
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Относительная толерантность для is_close
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Абсолютная толерантность для is_close
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12

# Толерантность для суммы экспонент Cobb-Douglas (Σ e_i == 1)
EXPONENT_SUM_TOLERANCE: Final[float] = 1e-6


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное, False если NaN или Inf
    """
    return math.isfinite(value)


def sanitize_float(value: float, fallback: float = 0.0) -> float:
    """
    Санитизация float: замена NaN/Inf на fallback значение.

    Args:
        value: Исходное значение
        fallback: Значение для замены NaN/Inf (default: 0.0)

    Returns:
        value если валидное, иначе fallback
    """
    if is_valid_float(value):
        return value
    return fallback


# =============================================================================
# БЕЗОПАСНАЯ АРИФМЕТИКА
# =============================================================================


def safe_power(base: float, exponent: float) -> float:
    """
    Возведение в степень с IEEE-семантикой для нуля.

    Python выбрасывает ZeroDivisionError для 0.0 ** (-e); здесь результат
    определён как +inf (предел x ** (-e) при x → 0+).

    Args:
        base: Основание (ожидается >= 0)
        exponent: Показатель степени

    Returns:
        base ** exponent, либо inf для (0, exponent < 0)

    Examples:
        >>> safe_power(4.0, 0.5)
        2.0
        >>> safe_power(0.0, -0.5)
        inf
        >>> safe_power(0.0, 0.5)
        0.0
    """
    if base == 0.0 and exponent < 0.0:
        return math.inf
    return base**exponent


def safe_ratio(numerator: float, denominator: float) -> float:
    """
    Деление с IEEE-семантикой вместо ZeroDivisionError.

    x / 0 → ±inf для x != 0, NaN для 0 / 0 и NaN-входов.

    Examples:
        >>> safe_ratio(1.0, 4.0)
        0.25
        >>> safe_ratio(1.0, 0.0)
        inf
        >>> math.isnan(safe_ratio(0.0, 0.0))
        True
    """
    if denominator == 0.0:
        if numerator == 0.0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


# =============================================================================
# EPSILON-СРАВНЕНИЯ FLOAT
# =============================================================================


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение float с учётом машинной точности.

    Алгоритм:
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def is_greater(a: float, b: float) -> bool:
    """
    a > b с учётом толерантности: a строго больше и не близко к b.

    Examples:
        >>> is_greater(100.0, 50.0)
        True
        >>> is_greater(100.0, 100.0 - 1e-12)
        False
    """
    return a > b and not is_close(a, b)


def is_lesser_or_equal(a: float, b: float) -> bool:
    """a <= b с учётом толерантности."""
    return a < b or is_close(a, b)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_positive(value: float, name: str) -> None:
    """
    Валидация, что значение конечное и строго положительное.

    Raises:
        ValueError: Если value <= 0 или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


def validate_non_negative(value: float, name: str) -> None:
    """
    Валидация, что значение конечное и неотрицательное.

    Raises:
        ValueError: Если value < 0 или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
