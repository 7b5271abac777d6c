"""Invocation harness — развернутый токен с атрибуцией caller и event log.

Оборачивает stateless TokenLedger:
- хранит текущий LedgerState (заменяется только после успешного вызова)
- атрибутирует каждый вызов caller-у (sender=..., по умолчанию accounts[0])
- пишет события в append-only EventLog
- возвращает Receipt на каждый успешный вызов
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

from src.core.domain.address import ZERO_ADDRESS, to_address
from src.core.domain.events import EventName, LedgerEvent
from src.core.domain.ledger_state import LedgerState

from .config import LedgerConfig
from .token_ledger import LedgerResult, TokenLedger

logger = logging.getLogger(__name__)

# Количество детерминированных тестовых аккаунтов
DEFAULT_ACCOUNT_COUNT = 10


def default_accounts(count: int = DEFAULT_ACCOUNT_COUNT) -> List[str]:
    """Детерминированные ненулевые адреса 0x...01, 0x...02, ..."""
    return [to_address(f"{i:040x}") for i in range(1, count + 1)]


@dataclass(frozen=True)
class LogEntry:
    """Запись event log: порядковый номер вызова + событие."""

    tx_index: int
    operation: str
    event: LedgerEvent


@dataclass(frozen=True)
class Receipt:
    """Квитанция успешного вызова."""

    tx_index: int
    operation: str
    sender: str
    events: Tuple[LedgerEvent, ...]

    def has_event(self, name: EventName, **fields) -> bool:
        """True если есть событие name с указанными значениями полей.

        Адресные поля сравниваются в канонической форме; для Transfer
        поле отправителя передается как from_.
        """
        for event in self.events:
            if event.event != name:
                continue
            if all(_field_matches(event, key, value) for key, value in fields.items()):
                return True
        return False


def _field_matches(event: LedgerEvent, key: str, expected) -> bool:
    actual = getattr(event, key, None)
    if isinstance(actual, str) and isinstance(expected, (str, bytes, bytearray)):
        return actual == to_address(expected)
    return actual == expected


class EventLog:
    """Append-only журнал событий."""

    def __init__(self):
        self._entries: List[LogEntry] = []

    def record(self, tx_index: int, result: LedgerResult) -> None:
        for event in result.events:
            self._entries.append(
                LogEntry(tx_index=tx_index, operation=result.operation, event=event)
            )

    def filter(self, name: Optional[EventName] = None) -> List[LogEntry]:
        """Записи (опционально только с заданным именем события)."""
        if name is None:
            return list(self._entries)
        return [entry for entry in self._entries if entry.event.event == name]

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)


@dataclass
class DeployedToken:
    """Развернутый токен: ledger + текущее состояние + аккаунты + журнал."""

    ledger: TokenLedger
    state: LedgerState
    accounts: List[str]
    log: EventLog = field(default_factory=EventLog)
    tx_count: int = 0

    @classmethod
    def deploy(
        cls,
        name: str,
        symbol: str,
        accounts: Optional[Sequence] = None,
        config: Optional[LedgerConfig] = None,
    ) -> "DeployedToken":
        """Развертывание нового токена с параметрами (name, symbol)."""
        ledger = TokenLedger(config)
        resolved = [to_address(a) for a in accounts] if accounts else default_accounts()
        if ZERO_ADDRESS in resolved:
            raise ValueError("accounts cannot contain the zero address")

        logger.info("deployed %s (%s) with %d accounts", name, symbol, len(resolved))
        return cls(ledger=ledger, state=ledger.deploy(name, symbol), accounts=resolved)

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def name(self) -> str:
        return self.ledger.name(self.state)

    def symbol(self) -> str:
        return self.ledger.symbol(self.state)

    def decimals(self) -> int:
        return self.ledger.decimals(self.state)

    def total_supply(self) -> int:
        return self.ledger.total_supply(self.state)

    def balance_of(self, account) -> int:
        return self.ledger.balance_of(self.state, account)

    def allowance(self, owner, spender) -> int:
        return self.ledger.allowance(self.state, owner, spender)

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def mint(self, recipient, amount: int, sender=None) -> Receipt:
        return self._send(self.ledger.mint, sender, recipient, amount)

    def burn(self, amount: int, sender=None) -> Receipt:
        return self._send(self.ledger.burn, sender, amount)

    def transfer(self, recipient, amount: int, sender=None) -> Receipt:
        return self._send(self.ledger.transfer, sender, recipient, amount)

    def transfer_from(self, owner, recipient, amount: int, sender=None) -> Receipt:
        return self._send(self.ledger.transfer_from, sender, owner, recipient, amount)

    def approve(self, spender, amount: int, sender=None) -> Receipt:
        return self._send(self.ledger.approve, sender, spender, amount)

    def increase_allowance(self, spender, delta: int, sender=None) -> Receipt:
        return self._send(self.ledger.increase_allowance, sender, spender, delta)

    def decrease_allowance(self, spender, delta: int, sender=None) -> Receipt:
        return self._send(self.ledger.decrease_allowance, sender, spender, delta)

    def _send(self, operation, sender, *args) -> Receipt:
        caller = to_address(sender) if sender is not None else self.accounts[0]

        # При отказе исключение пробрасывается, self.state не меняется
        result = operation(self.state, caller, *args)

        self.state = result.state
        self.tx_count += 1
        self.log.record(self.tx_count, result)

        return Receipt(
            tx_index=self.tx_count,
            operation=result.operation,
            sender=caller,
            events=result.events,
        )
