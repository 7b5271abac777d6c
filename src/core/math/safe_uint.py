"""
Safe Unsigned Integer Math — Checked arithmetic для token amounts

Все суммы токенов — неотрицательные целые произвольной точности
(amount * 10**decimals легко выходит за пределы 64 бит).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Amount никогда не бывает отрицательным (вычитание с underflow — ошибка)
2. bool и float не принимаются как amount
3. Если задан max_value (например, UINT256_MAX) — переполнение является
   ошибкой, а не wraparound
"""

from typing import Final, Optional

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Количество десятичных знаков ERC20 токена по умолчанию
DEFAULT_DECIMALS: Final[int] = 18

# Максимум uint256 (опциональный потолок, как в Solidity >= 0.8)
UINT256_MAX: Final[int] = 2**256 - 1


class InvalidAmount(ValueError):
    """Amount не является неотрицательным целым."""

    pass


class AmountUnderflow(ArithmeticError):
    """Результат вычитания меньше нуля."""

    pass


class AmountOverflowError(ArithmeticError):
    """Результат сложения превышает max_value."""

    pass


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_valid_amount(value: object) -> bool:
    """
    Проверка, что значение — корректный amount.

    bool исключается явно (bool является подклассом int).
    """
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def validate_amount(value: object, name: str = "amount") -> int:
    """
    Валидация amount.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value без изменений

    Raises:
        InvalidAmount: Если value не int, является bool, или < 0
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmount(f"{name} must be an int, got {type(value).__name__}")

    if value < 0:
        raise InvalidAmount(f"{name} must be non-negative, got {value}")

    return value


# =============================================================================
# CHECKED ARITHMETIC
# =============================================================================


def checked_add(a: int, b: int, max_value: Optional[int] = None) -> int:
    """
    Сложение с проверкой потолка.

    Examples:
        >>> checked_add(2, 3)
        5
        >>> checked_add(UINT256_MAX, 0, max_value=UINT256_MAX) == UINT256_MAX
        True
    """
    result = a + b
    if max_value is not None and result > max_value:
        raise AmountOverflowError(f"{a} + {b} exceeds {max_value}")
    return result


def checked_sub(a: int, b: int) -> int:
    """
    Вычитание без ухода в минус.

    Examples:
        >>> checked_sub(5, 3)
        2
    """
    if b > a:
        raise AmountUnderflow(f"{a} - {b} is below zero")
    return a - b


def format_units(amount: int, decimals: int = DEFAULT_DECIMALS) -> str:
    """
    Человекочитаемое представление amount (без потери точности).

    Examples:
        >>> format_units(1500000000000000000)
        '1.5'
        >>> format_units(50, decimals=0)
        '50'
    """
    validate_amount(amount)
    if decimals == 0:
        return str(amount)

    whole, frac = divmod(amount, 10**decimals)
    frac_str = str(frac).rjust(decimals, "0").rstrip("0")
    return f"{whole}.{frac_str}" if frac_str else str(whole)
