"""Token Ledger — ERC20 реестр балансов и allowance.

Каждая операция — одношаговая транзакция validate-then-mutate:
- на вход: текущий LedgerState + caller (явно, без ambient msg.sender)
- на выход: LedgerResult с новым LedgerState и списком событий
- при отказе: LedgerError, входной state не изменен (state immutable)

Операции:
- views: name, symbol, decimals, total_supply, balance_of, allowance
- mint, burn
- transfer, transfer_from
- approve, increase_allowance, decrease_allowance
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from src.core.domain.address import ZERO_ADDRESS, to_address
from src.core.domain.events import (
    ApprovalEvent,
    EventName,
    LedgerEvent,
    TransferEvent,
)
from src.core.domain.ledger_state import LedgerState
from src.core.math.safe_uint import (
    DEFAULT_DECIMALS,
    AmountOverflowError,
    AmountUnderflow,
    checked_add,
    checked_sub,
    format_units,
    validate_amount,
)

from .config import LedgerConfig
from .errors import (
    APPROVE_FROM_ZERO_ADDRESS,
    APPROVE_TO_ZERO_ADDRESS,
    BURN_EXCEEDS_BALANCE,
    BURN_FROM_ZERO_ADDRESS,
    DECREASED_ALLOWANCE_BELOW_ZERO,
    MINT_TO_ZERO_ADDRESS,
    TRANSFER_EXCEEDS_ALLOWANCE,
    TRANSFER_EXCEEDS_BALANCE,
    TRANSFER_FROM_ZERO_ADDRESS,
    TRANSFER_TO_ZERO_ADDRESS,
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

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerResult:
    """Результат успешной операции ledger-а."""

    state: LedgerState
    events: Tuple[LedgerEvent, ...]

    # Диагностика
    operation: str
    caller: str

    def events_named(self, name: EventName) -> Tuple[LedgerEvent, ...]:
        """События с заданным именем (Transfer / Approval)."""
        return tuple(e for e in self.events if e.event == name)


class TokenLedger:
    """ERC20 Token Ledger.

    Stateless движок: не хранит состояние реестра, только конфигурацию.
    Один экземпляр можно использовать для любого числа LedgerState.

    Порядок проверок transfer_from:
    1. allowance[owner][caller] >= amount → иначе InsufficientAllowance
    2. balance[owner] >= amount → иначе InsufficientBalance
    3. recipient != ZERO_ADDRESS → иначе InvalidRecipient
    """

    def __init__(self, config: Optional[LedgerConfig] = None):
        """
        Args:
            config: конфигурация (default: без потолка amount)
        """
        self.config = config or LedgerConfig()

    # =========================================================================
    # DEPLOY
    # =========================================================================

    def deploy(self, name: str, symbol: str) -> LedgerState:
        """Новый пустой ledger: total_supply = 0, decimals = 18."""
        if not isinstance(name, str) or not isinstance(symbol, str):
            raise ValueError("name and symbol must be strings")

        logger.debug("deploy name=%s symbol=%s", name, symbol)
        return LedgerState(name=name, symbol=symbol, decimals=DEFAULT_DECIMALS)

    # =========================================================================
    # VIEWS
    # =========================================================================

    def name(self, state: LedgerState) -> str:
        return state.name

    def symbol(self, state: LedgerState) -> str:
        return state.symbol

    def decimals(self, state: LedgerState) -> int:
        return state.decimals

    def total_supply(self, state: LedgerState) -> int:
        return state.total_supply

    def balance_of(self, state: LedgerState, account) -> int:
        return state.balance_of(account)

    def allowance(self, state: LedgerState, owner, spender) -> int:
        return state.allowance(owner, spender)

    # =========================================================================
    # SUPPLY
    # =========================================================================

    def mint(self, state: LedgerState, caller, recipient, amount: int) -> LedgerResult:
        """Эмиссия amount на recipient.

        Без access control и без cap (кроме config.max_amount).
        Событие: Transfer(ZERO_ADDRESS, recipient, amount).
        """
        caller = to_address(caller)
        recipient = to_address(recipient)
        amount = self._amount(amount, "amount", "mint")

        if recipient == ZERO_ADDRESS:
            raise self._rejected(InvalidRecipient(MINT_TO_ZERO_ADDRESS, "mint"))

        total_supply = self._add(state.total_supply, amount, "mint")
        balances = dict(state.balances)
        balances[recipient] = self._add(balances.get(recipient, 0), amount, "mint")

        return self._create_result(
            state.model_copy(update={"balances": balances, "total_supply": total_supply}),
            [TransferEvent(from_=ZERO_ADDRESS, to=recipient, value=amount)],
            operation="mint",
            caller=caller,
        )

    def burn(self, state: LedgerState, caller, amount: int) -> LedgerResult:
        """Сжигание amount с баланса caller.

        Событие: Transfer(caller, ZERO_ADDRESS, amount).
        """
        caller = to_address(caller)
        amount = self._amount(amount, "amount", "burn")

        if caller == ZERO_ADDRESS:
            raise self._rejected(InvalidSender(BURN_FROM_ZERO_ADDRESS, "burn"))

        balances = dict(state.balances)
        balances[caller] = self._sub(
            balances.get(caller, 0), amount, InsufficientBalance(BURN_EXCEEDS_BALANCE, "burn")
        )
        # total_supply >= любого баланса, вычитание не может уйти в минус
        total_supply = self._sub(
            state.total_supply, amount, InsufficientBalance(BURN_EXCEEDS_BALANCE, "burn")
        )

        return self._create_result(
            state.model_copy(update={"balances": balances, "total_supply": total_supply}),
            [TransferEvent(from_=caller, to=ZERO_ADDRESS, value=amount)],
            operation="burn",
            caller=caller,
        )

    # =========================================================================
    # TRANSFERS
    # =========================================================================

    def transfer(self, state: LedgerState, caller, recipient, amount: int) -> LedgerResult:
        """Перевод amount от caller к recipient.

        Событие: Transfer(caller, recipient, amount).
        """
        caller = to_address(caller)
        recipient = to_address(recipient)
        amount = self._amount(amount, "amount", "transfer")

        balances = self._move(state, caller, recipient, amount, "transfer")

        return self._create_result(
            state.model_copy(update={"balances": balances}),
            [TransferEvent(from_=caller, to=recipient, value=amount)],
            operation="transfer",
            caller=caller,
        )

    def transfer_from(
        self, state: LedgerState, caller, owner, recipient, amount: int
    ) -> LedgerResult:
        """Перевод amount от owner к recipient за счет allowance owner → caller.

        События: Transfer(owner, recipient, amount),
        Approval(owner, caller, new_allowance).
        """
        caller = to_address(caller)
        owner = to_address(owner)
        recipient = to_address(recipient)
        amount = self._amount(amount, "amount", "transfer_from")

        new_allowance = self._sub(
            state.allowance(owner, caller),
            amount,
            InsufficientAllowance(TRANSFER_EXCEEDS_ALLOWANCE, "transfer_from"),
        )
        self._sub(
            state.balances.get(owner, 0),
            amount,
            InsufficientBalance(TRANSFER_EXCEEDS_BALANCE, "transfer_from"),
        )

        balances = self._move(state, owner, recipient, amount, "transfer_from")

        # caller становится spender в Approval: нулевой адрес недопустим
        if caller == ZERO_ADDRESS:
            raise self._rejected(InvalidSpender(APPROVE_TO_ZERO_ADDRESS, "transfer_from"))

        allowances = self._set_allowance(state, owner, caller, new_allowance)

        return self._create_result(
            state.model_copy(update={"balances": balances, "allowances": allowances}),
            [
                TransferEvent(from_=owner, to=recipient, value=amount),
                ApprovalEvent(owner=owner, spender=caller, value=new_allowance),
            ],
            operation="transfer_from",
            caller=caller,
        )

    # =========================================================================
    # ALLOWANCES
    # =========================================================================

    def approve(self, state: LedgerState, caller, spender, amount: int) -> LedgerResult:
        """allowance[caller][spender] = amount (перезапись, не сложение)."""
        caller = to_address(caller)
        spender = to_address(spender)
        amount = self._amount(amount, "amount", "approve")

        return self._approve(state, caller, spender, amount, "approve")

    def increase_allowance(self, state: LedgerState, caller, spender, delta: int) -> LedgerResult:
        """allowance[caller][spender] += delta; Approval с новым значением."""
        caller = to_address(caller)
        spender = to_address(spender)
        delta = self._amount(delta, "delta", "increase_allowance")

        new_value = self._add(state.allowance(caller, spender), delta, "increase_allowance")
        return self._approve(state, caller, spender, new_value, "increase_allowance")

    def decrease_allowance(self, state: LedgerState, caller, spender, delta: int) -> LedgerResult:
        """allowance[caller][spender] -= delta; ниже нуля — AllowanceUnderflow."""
        caller = to_address(caller)
        spender = to_address(spender)
        delta = self._amount(delta, "delta", "decrease_allowance")

        new_value = self._sub(
            state.allowance(caller, spender),
            delta,
            AllowanceUnderflow(DECREASED_ALLOWANCE_BELOW_ZERO, "decrease_allowance"),
        )
        return self._approve(state, caller, spender, new_value, "decrease_allowance")

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _approve(
        self, state: LedgerState, owner: str, spender: str, value: int, operation: str
    ) -> LedgerResult:
        if owner == ZERO_ADDRESS:
            raise self._rejected(InvalidApprover(APPROVE_FROM_ZERO_ADDRESS, operation))
        if spender == ZERO_ADDRESS:
            raise self._rejected(InvalidSpender(APPROVE_TO_ZERO_ADDRESS, operation))

        allowances = self._set_allowance(state, owner, spender, value)

        return self._create_result(
            state.model_copy(update={"allowances": allowances}),
            [ApprovalEvent(owner=owner, spender=spender, value=value)],
            operation=operation,
            caller=owner,
        )

    def _move(
        self, state: LedgerState, sender: str, recipient: str, amount: int, operation: str
    ) -> dict:
        """Новая таблица балансов после перемещения sender → recipient."""
        if sender == ZERO_ADDRESS:
            raise self._rejected(InvalidSender(TRANSFER_FROM_ZERO_ADDRESS, operation))
        if recipient == ZERO_ADDRESS:
            raise self._rejected(InvalidRecipient(TRANSFER_TO_ZERO_ADDRESS, operation))

        balances = dict(state.balances)
        balances[sender] = self._sub(
            balances.get(sender, 0),
            amount,
            InsufficientBalance(TRANSFER_EXCEEDS_BALANCE, operation),
        )
        # self-transfer: читаем уже обновленный баланс sender
        balances[recipient] = self._add(balances.get(recipient, 0), amount, operation)
        return balances

    def _set_allowance(self, state: LedgerState, owner: str, spender: str, value: int) -> dict:
        allowances = dict(state.allowances)
        spenders = dict(allowances.get(owner, {}))
        spenders[spender] = value
        allowances[owner] = spenders
        return allowances

    def _amount(self, value, name: str, operation: str) -> int:
        value = validate_amount(value, name)
        if self.config.max_amount is not None and value > self.config.max_amount:
            raise self._rejected(AmountOverflow(operation=operation))
        return value

    def _add(self, a: int, b: int, operation: str) -> int:
        try:
            return checked_add(a, b, self.config.max_amount)
        except AmountOverflowError as e:
            raise self._rejected(AmountOverflow(operation=operation)) from e

    def _sub(self, a: int, b: int, error: LedgerError) -> int:
        try:
            return checked_sub(a, b)
        except AmountUnderflow as e:
            raise self._rejected(error) from e

    def _rejected(self, error: LedgerError) -> LedgerError:
        logger.info("%s rejected: %s", error.operation, error.reason)
        return error

    def _create_result(
        self, state: LedgerState, events: list, operation: str, caller: str
    ) -> LedgerResult:
        """Создание результата операции."""
        logger.debug(
            "%s applied by %s: total_supply=%s events=%d",
            operation,
            caller,
            format_units(state.total_supply, state.decimals),
            len(events),
        )
        return LedgerResult(
            state=state,
            events=tuple(events),
            operation=operation,
            caller=caller,
        )
