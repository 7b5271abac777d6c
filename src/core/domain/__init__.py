"""
Domain models and value objects.

Contains fundamental ledger entities: Address, LedgerState, Transfer/Approval events.
"""

from src.core.domain.address import (
    ADDRESS_LENGTH_BYTES,
    ZERO_ADDRESS,
    Address,
    InvalidAddress,
    to_address,
)
from src.core.domain.events import (
    ApprovalEvent,
    EventName,
    LedgerEvent,
    TransferEvent,
)
from src.core.domain.ledger_state import LedgerState

__all__ = [
    # Address module
    "ADDRESS_LENGTH_BYTES",
    "ZERO_ADDRESS",
    "Address",
    "InvalidAddress",
    "to_address",
    # Events
    "EventName",
    "TransferEvent",
    "ApprovalEvent",
    "LedgerEvent",
    # State
    "LedgerState",
]
