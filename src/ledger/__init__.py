"""Ledger — ERC20 token ledger и harness для вызовов.

- TokenLedger: stateless движок операций (state + caller → новый state + events)
- DeployedToken: развернутый токен с атрибуцией caller и event log
- LedgerError и подклассы: отказы операций с ERC20 reason strings
"""

from .config import LedgerConfig
from .errors import (
    AllowanceUnderflow,
    AmountOverflow,
    InsufficientAllowance,
    InsufficientBalance,
    InvalidApprover,
    InvalidRecipient,
    InvalidSender,
    InvalidSpender,
    LedgerError,
)
from .harness import DeployedToken, EventLog, LogEntry, Receipt, default_accounts
from .token_ledger import LedgerResult, TokenLedger

__all__ = [
    "TokenLedger",
    "LedgerResult",
    "LedgerConfig",
    "DeployedToken",
    "EventLog",
    "LogEntry",
    "Receipt",
    "default_accounts",
    "LedgerError",
    "InvalidRecipient",
    "InvalidSender",
    "InvalidSpender",
    "InvalidApprover",
    "InsufficientBalance",
    "InsufficientAllowance",
    "AllowanceUnderflow",
    "AmountOverflow",
]
