"""
Conversion — точное приведение скаляров и граница exact → double

Модуль фиксирует единственные допустимые способы:
- привести входной скаляр к точному рациональному представлению (Fraction)
- сериализовать точное значение в текст и обратно без потерь
- получить double из точного значения (в т.ч. корень для distance_matrix)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Приведение к Fraction никогда не теряет информацию
   (float берётся по точному двоичному значению, а не по repr)
2. exact → double: корректное округление float(Fraction), детерминировано
   и монотонно
3. NaN/Inf никогда не становятся точным значением
4. Текстовая форма "p/q" восстанавливается бит-в-бит
"""

import math
import re
from decimal import Decimal
from fractions import Fraction
from numbers import Rational
from typing import Final

# =============================================================================
# ТЕКСТОВАЯ ФОРМА
# =============================================================================

# Каноническая текстовая форма точного значения: "p" или "p/q", q > 1
EXACT_TEXT_PATTERN: Final[str] = r"^-?[0-9]+(/[1-9][0-9]*)?$"

_EXACT_TEXT_RE: Final[re.Pattern[str]] = re.compile(EXACT_TEXT_PATTERN)


# =============================================================================
# ТОЧНОЕ ПРИВЕДЕНИЕ
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


def to_fraction(value: object) -> Fraction:
    """
    Точное приведение скаляра к Fraction.

    Поддерживаемые входы:
    - int, bool исключён (True/False как координата почти всегда ошибка)
    - Fraction и любые numbers.Rational
    - Decimal (конечный)
    - float (конечный): берётся точное двоичное значение
    - str в форме "p", "p/q" или десятичной записи ("0.25")

    Args:
        value: Исходный скаляр

    Returns:
        Fraction, точно равная входу

    Raises:
        TypeError: Если тип не поддерживается
        ValueError: Если значение NaN/Inf или строка не разбирается

    Examples:
        >>> to_fraction(3)
        Fraction(3, 1)
        >>> to_fraction("1/3")
        Fraction(1, 3)
        >>> to_fraction(0.1) == Fraction(3602879701896397, 36028797018963968)
        True
    """
    if isinstance(value, bool):
        raise TypeError("bool is not an exact geometric scalar")

    if isinstance(value, Fraction):
        return value

    if isinstance(value, int):
        return Fraction(value)

    if isinstance(value, Rational):
        return Fraction(value.numerator, value.denominator)

    if isinstance(value, float):
        if not is_valid_float(value):
            raise ValueError(f"Cannot convert non-finite float {value} to an exact value")
        return Fraction(value)

    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Cannot convert non-finite Decimal {value} to an exact value")
        return Fraction(value)

    if isinstance(value, str):
        text = value.strip()
        try:
            return Fraction(text)
        except (ValueError, ZeroDivisionError) as e:
            raise ValueError(f"Cannot parse exact value from {value!r}") from e

    raise TypeError(f"Unsupported exact scalar type: {type(value).__name__}")


# =============================================================================
# СЕРИАЛИЗАЦИЯ
# =============================================================================


def fraction_to_text(value: Fraction) -> str:
    """
    Каноническая текстовая форма: "p" для целых, "p/q" иначе.

    Fraction всегда нормализована (q > 0, gcd = 1), поэтому форма единственна.
    """
    return str(value)


def fraction_from_text(text: str) -> Fraction:
    """
    Обратное преобразование к fraction_to_text.

    Raises:
        ValueError: Если текст не в канонической форме "p" / "p/q"
    """
    if not _EXACT_TEXT_RE.match(text):
        raise ValueError(f"Not a canonical exact value: {text!r}")
    return Fraction(text)


# =============================================================================
# ГРАНИЦА EXACT → DOUBLE
# =============================================================================


def to_double(value: Fraction) -> float:
    """
    Корректно округлённое double-приближение точного значения.

    float(Fraction) округляет к ближайшему представимому, поэтому
    a <= b влечёт to_double(a) <= to_double(b).
    """
    return float(value)


def sqrt_to_double(squared: Fraction) -> float:
    """
    double-приближение квадратного корня из точного неотрицательного значения.

    Для полных квадратов (числитель и знаменатель) корень извлекается точно,
    иначе math.sqrt от корректно округлённого double.

    Args:
        squared: Точное неотрицательное значение (квадрат расстояния)

    Returns:
        sqrt(squared) как float

    Raises:
        ValueError: Если squared < 0

    Examples:
        >>> sqrt_to_double(Fraction(25))
        5.0
        >>> sqrt_to_double(Fraction(1, 4))
        0.5
    """
    if squared < 0:
        raise ValueError(f"squared distance must be non-negative, got {squared}")

    num_root = math.isqrt(squared.numerator)
    den_root = math.isqrt(squared.denominator)
    if num_root * num_root == squared.numerator and den_root * den_root == squared.denominator:
        return to_double(Fraction(num_root, den_root))

    return math.sqrt(to_double(squared))
