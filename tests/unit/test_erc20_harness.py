"""Тесты ERC20 через DeployedToken (вызовы с атрибуцией sender).

Coverage:
- Сценарии MyToken/My: decimals, name, symbol, initial supply
- mint / transfer / approve / allowance / transferFrom через harness
- Receipt и EventLog
- Отказ не меняет текущее состояние harness-а
"""

import pytest

from src.core.domain import ZERO_ADDRESS, EventName
from src.ledger import (
    AllowanceUnderflow,
    DeployedToken,
    InsufficientAllowance,
    InsufficientBalance,
    InvalidRecipient,
    InvalidSpender,
    LedgerError,
    default_accounts,
)

NAME = "MyToken"
SYMBOL = "My"


@pytest.fixture
def token():
    return DeployedToken.deploy(NAME, SYMBOL)


@pytest.fixture
def accounts(token):
    return token.accounts


class TestDeploy:
    """Тесты развертывания."""

    def test_has_18_decimals(self, token):
        assert token.decimals() == 18

    def test_name_is_correct(self, token):
        assert token.name() == NAME

    def test_symbol_is_correct(self, token):
        assert token.symbol() == SYMBOL

    def test_initial_total_supply_is_zero(self, token):
        assert token.total_supply() == 0

    def test_default_accounts(self, accounts):
        assert accounts == default_accounts()
        assert len(set(accounts)) == 10
        assert ZERO_ADDRESS not in accounts

    def test_custom_accounts(self):
        token = DeployedToken.deploy(NAME, SYMBOL, accounts=[b"\x01" * 20, b"\x02" * 20])
        assert token.accounts == ["0x" + "01" * 20, "0x" + "02" * 20]

    def test_zero_account_rejected(self):
        with pytest.raises(ValueError, match="zero address"):
            DeployedToken.deploy(NAME, SYMBOL, accounts=[ZERO_ADDRESS])


class TestTransactions:
    """Сценарии вызовов."""

    def test_transfer_fails_to_zero_address(self, token):
        with pytest.raises(InvalidRecipient, match="ERC20: transfer to the zero address"):
            token.transfer(ZERO_ADDRESS, 50)

    def test_transfer_fails_not_enough_balance(self, token, accounts):
        with pytest.raises(InsufficientBalance, match="ERC20: transfer amount exceeds balance"):
            token.transfer(accounts[1], 50)

    def test_mint_fails_to_zero_address(self, token):
        with pytest.raises(InvalidRecipient, match="ERC20: mint to the zero address"):
            token.mint(ZERO_ADDRESS, 50)

    def test_mint(self, token, accounts):
        token.mint(accounts[1], 50)
        assert token.total_supply() == 50
        assert token.balance_of(accounts[1]) == 50

    def test_mint_and_transfer(self, token, accounts):
        token.mint(accounts[1], 50)
        token.transfer(accounts[2], 20, sender=accounts[1])

        assert token.balance_of(accounts[2]) == 20
        assert token.balance_of(accounts[1]) == 30

    def test_approve_fails_to_zero_address(self, token):
        with pytest.raises(InvalidSpender, match="ERC20: approve to the zero address"):
            token.approve(ZERO_ADDRESS, 30)

    def test_approve_emits_approval(self, token, accounts):
        receipt = token.approve(accounts[0], 30)
        assert receipt.has_event(
            EventName.APPROVAL, owner=accounts[0], spender=accounts[0], value=30
        )

    def test_allowance(self, token, accounts):
        token.increase_allowance(accounts[0], 20, sender=accounts[1])
        assert token.allowance(accounts[1], accounts[0]) == 20

    def test_transfer_from_fails_without_allowance(self, token, accounts):
        token.mint(accounts[1], 50)
        with pytest.raises(
            InsufficientAllowance, match="ERC20: transfer amount exceeds allowance"
        ):
            token.transfer_from(accounts[1], accounts[0], 30)
        assert token.balance_of(accounts[1]) == 50

    def test_transfer_from_emits_approval(self, token, accounts):
        token.mint(accounts[1], 50)
        token.increase_allowance(accounts[1], 50, sender=accounts[1])
        receipt = token.transfer_from(accounts[1], accounts[0], 30, sender=accounts[1])

        assert receipt.has_event(EventName.APPROVAL, value=20)
        assert receipt.has_event(
            EventName.TRANSFER, from_=accounts[1], to=accounts[0], value=30
        )

    def test_increase_allowance_fails_to_zero_address(self, token):
        with pytest.raises(InvalidSpender, match="ERC20: approve to the zero address"):
            token.increase_allowance(ZERO_ADDRESS, 50)

    def test_increase_allowance_emits_approval(self, token, accounts):
        token.mint(accounts[1], 50)
        receipt = token.increase_allowance(accounts[0], 20, sender=accounts[1])
        assert receipt.has_event(EventName.APPROVAL)

    def test_decrease_allowance_fails(self, token, accounts):
        with pytest.raises(AllowanceUnderflow, match="ERC20: decreased allowance below zero"):
            token.decrease_allowance(accounts[1], 50, sender=accounts[1])

    def test_decrease_allowance_emits_approval(self, token, accounts):
        token.increase_allowance(accounts[1], 50, sender=accounts[1])
        receipt = token.decrease_allowance(accounts[1], 20, sender=accounts[1])
        assert receipt.has_event(EventName.APPROVAL, value=30)

    def test_decrease_allowance_result(self, token, accounts):
        token.increase_allowance(accounts[1], 50, sender=accounts[1])
        token.decrease_allowance(accounts[1], 20, sender=accounts[1])
        assert token.allowance(accounts[1], accounts[1]) == 30

    def test_burn(self, token, accounts):
        token.mint(accounts[0], 50)
        receipt = token.burn(20)

        assert token.total_supply() == 30
        assert receipt.has_event(EventName.TRANSFER, to=ZERO_ADDRESS, value=20)


class TestReceiptsAndLog:
    """Тесты Receipt и EventLog."""

    def test_default_sender_is_first_account(self, token, accounts):
        receipt = token.mint(accounts[1], 1)
        assert receipt.sender == accounts[0]
        assert receipt.operation == "mint"

    def test_sender_as_bytes(self, token, accounts):
        token.mint(accounts[1], 10)
        receipt = token.transfer(accounts[2], 5, sender=bytes.fromhex(accounts[1][2:]))
        assert receipt.sender == accounts[1]

    def test_has_event_negative(self, token, accounts):
        receipt = token.mint(accounts[1], 1)
        assert not receipt.has_event(EventName.APPROVAL)
        assert not receipt.has_event(EventName.TRANSFER, value=2)

    def test_log_records_in_order(self, token, accounts):
        token.mint(accounts[1], 50)
        token.approve(accounts[2], 10, sender=accounts[1])
        token.transfer_from(accounts[1], accounts[3], 10, sender=accounts[2])

        entries = list(token.log)
        assert [e.tx_index for e in entries] == [1, 2, 3, 3]
        assert [e.event.event for e in entries] == [
            EventName.TRANSFER,
            EventName.APPROVAL,
            EventName.TRANSFER,
            EventName.APPROVAL,
        ]
        assert len(token.log.filter(EventName.TRANSFER)) == 2
        assert len(token.log.filter()) == 4

    def test_failed_call_not_logged(self, token, accounts):
        token.mint(accounts[1], 50)
        state_before = token.state

        with pytest.raises(LedgerError):
            token.transfer(accounts[2], 51, sender=accounts[1])

        assert token.state is state_before
        assert token.tx_count == 1
        assert len(token.log) == 1
