"""
Ledger Events — Структурированные записи событий ERC20

Immutable Pydantic модели событий, возвращаемых каждой успешной операцией
ledger-а (вместо неявного event log):
- TransferEvent(from, to, value) — mint, transfer, transferFrom, burn
- ApprovalEvent(owner, spender, value) — approve, increase/decreaseAllowance,
  transferFrom

model_dump(mode="json") совместим с JSON Schema
(src/core/contracts/schema/transfer_event.json, approval_event.json).
"""

from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, Field

from .address import Address


class EventName(str, Enum):
    """Имя события (как в ERC20 ABI)."""

    TRANSFER = "Transfer"
    APPROVAL = "Approval"


class TransferEvent(BaseModel):
    """
    Перемещение токенов.

    mint: from_ = ZERO_ADDRESS
    burn: to = ZERO_ADDRESS
    """

    event: Literal[EventName.TRANSFER] = EventName.TRANSFER
    from_: Address = Field(
        ..., alias="from", description="Отправитель (ZERO_ADDRESS при mint)"
    )
    to: Address = Field(..., description="Получатель (ZERO_ADDRESS при burn)")
    value: int = Field(..., ge=0, description="Количество (минимальные единицы)")

    model_config = {"frozen": True, "populate_by_name": True, "serialize_by_alias": True}


class ApprovalEvent(BaseModel):
    """Установка allowance; value — новое итоговое значение allowance."""

    event: Literal[EventName.APPROVAL] = EventName.APPROVAL
    owner: Address = Field(..., description="Владелец баланса")
    spender: Address = Field(..., description="Кому разрешено списание")
    value: int = Field(..., ge=0, description="Новое значение allowance")

    model_config = {"frozen": True}


LedgerEvent = Union[TransferEvent, ApprovalEvent]
