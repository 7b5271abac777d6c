"""
Contract Validation Module

Модуль для валидации JSON контрактов token ledger-а.
"""

from .validators import (
    SCHEMA_DIR,
    ApprovalEventValidator,
    ContractValidator,
    LedgerStateValidator,
    SchemaLoader,
    TransferEventValidator,
    default_loader,
    validate_approval_event,
    validate_event,
    validate_ledger_state,
    validate_transfer_event,
)

__all__ = [
    "SCHEMA_DIR",
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "LedgerStateValidator",
    "TransferEventValidator",
    "ApprovalEventValidator",
    # Functions
    "default_loader",
    "validate_ledger_state",
    "validate_transfer_event",
    "validate_approval_event",
    "validate_event",
]
