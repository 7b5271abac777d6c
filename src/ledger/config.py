"""Конфигурация token ledger-а."""

from dataclasses import dataclass
from typing import Optional

from src.core.math.safe_uint import UINT256_MAX, is_valid_amount


@dataclass(frozen=True)
class LedgerConfig:
    """Конфигурация TokenLedger.

    max_amount:
    - None: amounts произвольной точности (без потолка)
    - UINT256_MAX: checked arithmetic как в Solidity >= 0.8 (переполнение
      balance / allowance / total_supply — отказ AmountOverflow)

    decimals не настраивается: всегда DEFAULT_DECIMALS (18).
    """

    max_amount: Optional[int] = None

    def __post_init__(self):
        if self.max_amount is not None and (
            not is_valid_amount(self.max_amount) or self.max_amount == 0
        ):
            raise ValueError(f"max_amount must be a positive int, got {self.max_amount!r}")

    @classmethod
    def uint256(cls) -> "LedgerConfig":
        """Потолок uint256."""
        return cls(max_amount=UINT256_MAX)
