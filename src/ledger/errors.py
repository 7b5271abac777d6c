"""Ledger Errors — отказы операций ERC20 ledger-а.

Каждый отказ синхронный и детерминированный: операция отклоняется целиком,
состояние не меняется. reason — строка отказа в формате ERC20 revert reason.
"""

from typing import Final, Optional


# =============================================================================
# REASON STRINGS
# =============================================================================

# mint на нулевой адрес
MINT_TO_ZERO_ADDRESS: Final[str] = "ERC20: mint to the zero address"

# transfer / transferFrom
TRANSFER_FROM_ZERO_ADDRESS: Final[str] = "ERC20: transfer from the zero address"
TRANSFER_TO_ZERO_ADDRESS: Final[str] = "ERC20: transfer to the zero address"
TRANSFER_EXCEEDS_BALANCE: Final[str] = "ERC20: transfer amount exceeds balance"
TRANSFER_EXCEEDS_ALLOWANCE: Final[str] = "ERC20: transfer amount exceeds allowance"

# approve / increaseAllowance / decreaseAllowance
APPROVE_FROM_ZERO_ADDRESS: Final[str] = "ERC20: approve from the zero address"
APPROVE_TO_ZERO_ADDRESS: Final[str] = "ERC20: approve to the zero address"
DECREASED_ALLOWANCE_BELOW_ZERO: Final[str] = "ERC20: decreased allowance below zero"

# burn
BURN_FROM_ZERO_ADDRESS: Final[str] = "ERC20: burn from the zero address"
BURN_EXCEEDS_BALANCE: Final[str] = "ERC20: burn amount exceeds balance"

# checked arithmetic при заданном max_amount
AMOUNT_OVERFLOW: Final[str] = "ERC20: amount overflow"


# =============================================================================
# EXCEPTIONS
# =============================================================================


class LedgerError(Exception):
    """Базовый отказ операции ledger-а.

    Attributes:
        reason: строка отказа (ERC20 revert reason)
        operation: имя отклоненной операции (mint, transfer, ...)
    """

    default_reason: str = "ERC20: operation rejected"

    def __init__(self, reason: Optional[str] = None, operation: Optional[str] = None):
        self.reason = reason or self.default_reason
        self.operation = operation
        super().__init__(self.reason)


class InvalidRecipient(LedgerError):
    """Получатель — нулевой адрес."""

    default_reason = TRANSFER_TO_ZERO_ADDRESS


class InvalidSender(LedgerError):
    """Отправитель (caller или owner) — нулевой адрес."""

    default_reason = TRANSFER_FROM_ZERO_ADDRESS


class InvalidSpender(LedgerError):
    """Spender — нулевой адрес."""

    default_reason = APPROVE_TO_ZERO_ADDRESS


class InvalidApprover(LedgerError):
    """Владелец allowance — нулевой адрес."""

    default_reason = APPROVE_FROM_ZERO_ADDRESS


class InsufficientBalance(LedgerError):
    """Баланс меньше списываемой суммы."""

    default_reason = TRANSFER_EXCEEDS_BALANCE


class InsufficientAllowance(LedgerError):
    """Allowance owner → caller меньше суммы transferFrom."""

    default_reason = TRANSFER_EXCEEDS_ALLOWANCE


class AllowanceUnderflow(LedgerError):
    """decreaseAllowance ниже нуля."""

    default_reason = DECREASED_ALLOWANCE_BELOW_ZERO


class AmountOverflow(LedgerError):
    """Результат превышает LedgerConfig.max_amount."""

    default_reason = AMOUNT_OVERFLOW
