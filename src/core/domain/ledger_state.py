"""
LedgerState — Модель состояния ERC20 ledger-а

Immutable Pydantic модель: снапшот реестра балансов и allowance.
Полная совместимость с JSON Schema (src/core/contracts/schema/ledger_state.json).

Инварианты (проверяются при создании каждого снапшота):
- total_supply == sum(balances)
- ни один balance / allowance не отрицателен
- ZERO_ADDRESS не держит balance и не участвует в allowance
"""

from typing import Dict

from pydantic import BaseModel, Field, model_validator

from src.core.math.safe_uint import DEFAULT_DECIMALS

from .address import ZERO_ADDRESS, Address, to_address


class LedgerState(BaseModel):
    """
    Снапшот ledger-а.

    Immutable модель (frozen=True). Словари внутри считаются read-only:
    все операции ledger-а строят новые словари и новый экземпляр
    через model_copy(update=...).
    """

    # Метаданные (immutable после deploy)
    name: str = Field(..., description="Имя токена")
    symbol: str = Field(..., description="Тикер токена")
    decimals: int = Field(
        default=DEFAULT_DECIMALS, ge=0, le=255, description="Десятичные знаки"
    )

    # Реестры
    total_supply: int = Field(default=0, ge=0, description="Суммарная эмиссия")
    balances: Dict[Address, int] = Field(
        default_factory=dict, description="account → balance"
    )
    allowances: Dict[Address, Dict[Address, int]] = Field(
        default_factory=dict, description="owner → spender → allowance"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_invariants(self) -> "LedgerState":
        """Проверка инвариантов реестра."""
        for account, balance in self.balances.items():
            if balance < 0:
                raise ValueError(f"negative balance {balance} for {account}")
            if account == ZERO_ADDRESS and balance != 0:
                raise ValueError("zero address cannot hold a balance")

        supply = sum(self.balances.values())
        if supply != self.total_supply:
            raise ValueError(
                f"total_supply {self.total_supply} != sum of balances {supply}"
            )

        for owner, spenders in self.allowances.items():
            for spender, value in spenders.items():
                if value < 0:
                    raise ValueError(
                        f"negative allowance {value} for {owner} -> {spender}"
                    )
                if value and ZERO_ADDRESS in (owner, spender):
                    raise ValueError("zero address cannot be party to an allowance")

        return self

    def balance_of(self, account) -> int:
        """Баланс аккаунта (0 если аккаунт не встречался)."""
        return self.balances.get(to_address(account), 0)

    def allowance(self, owner, spender) -> int:
        """Allowance owner → spender (0 если не установлен)."""
        return self.allowances.get(to_address(owner), {}).get(to_address(spender), 0)

    def holders(self) -> list[str]:
        """Аккаунты с ненулевым балансом."""
        return [account for account, balance in self.balances.items() if balance > 0]
