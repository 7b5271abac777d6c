"""
Address — Идентификатор аккаунта

Фиксированная 20-байтная последовательность (EVM-style address).
Каноническая форма в памяти и при сериализации — lowercase hex строка
с префиксом "0x" (42 символа).

ZERO_ADDRESS — зарезервированный sentinel "нет аккаунта":
- не может получать mint/transfer
- не может быть spender в approve
- никогда не держит balance
"""

import re
from typing import Annotated, Final, Union

from pydantic import BeforeValidator


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Длина идентификатора в байтах
ADDRESS_LENGTH_BYTES: Final[int] = 20

# Нулевой идентификатор (sentinel)
ZERO_ADDRESS: Final[str] = "0x" + "00" * ADDRESS_LENGTH_BYTES

_HEX_ADDRESS_RE: Final[re.Pattern] = re.compile(r"(0x)?[0-9a-fA-F]{40}")


class InvalidAddress(ValueError):
    """Значение не является корректным 20-байтным идентификатором."""

    pass


# =============================================================================
# КОНВЕРТЕРЫ
# =============================================================================


def to_address(value: Union[str, bytes, bytearray]) -> str:
    """
    Нормализация идентификатора аккаунта в каноническую форму.

    Args:
        value: 20 байт (bytes/bytearray) или hex строка (с "0x" или без,
            регистр не важен)

    Returns:
        Lowercase hex строка "0x" + 40 hex символов

    Raises:
        InvalidAddress: Если длина или формат некорректны

    Examples:
        >>> to_address(b"\\x00" * 20) == ZERO_ADDRESS
        True
        >>> to_address("0xABCDEF0000000000000000000000000000000001")
        '0xabcdef0000000000000000000000000000000001'
    """
    if isinstance(value, (bytes, bytearray)):
        if len(value) != ADDRESS_LENGTH_BYTES:
            raise InvalidAddress(
                f"address must be {ADDRESS_LENGTH_BYTES} bytes, got {len(value)}"
            )
        return "0x" + bytes(value).hex()

    if isinstance(value, str):
        if not _HEX_ADDRESS_RE.fullmatch(value):
            raise InvalidAddress(f"malformed hex address: {value!r}")
        digits = value[2:] if value[:2] in ("0x", "0X") else value
        return "0x" + digits.lower()

    raise InvalidAddress(
        f"address must be str or bytes, got {type(value).__name__}"
    )


def _normalize_field(value: object) -> object:
    # InvalidAddress наследует ValueError: Pydantic вернет ValidationError
    if isinstance(value, (str, bytes, bytearray)):
        return to_address(value)
    raise InvalidAddress(f"address must be str or bytes, got {type(value).__name__}")


# Тип поля для Pydantic моделей: принимает bytes/hex, хранит canonical hex
Address = Annotated[
    str,
    BeforeValidator(_normalize_field),
]
