"""
Тесты Treasury Accessor

Проверяет:
1. NothingToWithdraw при нулевом балансе
2. Вывод всего баланса owner-у
3. Баланс обнулён до внешнего перевода (reentrancy)
4. Отказ funds sink восстанавливает баланс
"""

import pytest

from accounts import ALICE, BOB, OWNER, PRICE_WEI
from src.core.errors import NothingToWithdraw, Unauthorized, WithdrawalFailed
from src.mint.contract import MerkleMintContract
from src.treasury.accessor import FundsSink, InMemoryFundsSink, Treasury


class ReentrantSink(FundsSink):
    """Funds sink, повторно вызывающий withdraw во время перевода."""

    def __init__(self):
        self.contract = None
        self.reentry_error = None
        self.sent = []

    def send(self, recipient, amount_wei):
        try:
            self.contract.withdraw(OWNER)
        except NothingToWithdraw as exc:
            self.reentry_error = exc
        self.sent.append(amount_wei)


class BrokenSink(FundsSink):
    def send(self, recipient, amount_wei):
        raise ConnectionError("custody offline")


class TestTreasury:

    def test_nothing_to_withdraw(self):
        treasury = Treasury(InMemoryFundsSink())
        with pytest.raises(NothingToWithdraw):
            treasury.withdraw(OWNER)

    def test_withdraw_full_balance(self):
        sink = InMemoryFundsSink()
        treasury = Treasury(sink)
        treasury.deposit(3 * PRICE_WEI)
        treasury.deposit(PRICE_WEI)

        receipt = treasury.withdraw(OWNER)

        assert receipt.amount_wei == 4 * PRICE_WEI
        assert treasury.balance_wei == 0
        assert sink.received(OWNER) == 4 * PRICE_WEI

    def test_failed_transfer_restores_balance(self):
        treasury = Treasury(BrokenSink())
        treasury.deposit(PRICE_WEI)
        with pytest.raises(WithdrawalFailed):
            treasury.withdraw(OWNER)
        assert treasury.balance_wei == PRICE_WEI

    def test_reverse_deposit_cannot_go_negative(self):
        treasury = Treasury(InMemoryFundsSink())
        treasury.deposit(10)
        with pytest.raises(ValueError):
            treasury.reverse_deposit(11)

    def test_deposit_rejects_negative(self):
        treasury = Treasury(InMemoryFundsSink())
        with pytest.raises(ValueError):
            treasury.deposit(-1)


class TestContractWithdraw:

    def test_owner_withdraws_mint_proceeds(self, contract, funds_sink):
        contract.flip_sale(OWNER)
        contract.mint(ALICE, 2, value_wei=2 * PRICE_WEI)
        contract.mint(BOB, 1, value_wei=5 * PRICE_WEI)

        receipt = contract.withdraw(OWNER)

        assert receipt.amount_wei == 7 * PRICE_WEI
        assert contract.balance_wei() == 0
        assert funds_sink.received(OWNER) == 7 * PRICE_WEI

        with pytest.raises(NothingToWithdraw):
            contract.withdraw(OWNER)

    def test_non_owner_cannot_withdraw(self, contract):
        contract.flip_sale(OWNER)
        contract.mint(ALICE, 1, value_wei=PRICE_WEI)
        with pytest.raises(Unauthorized):
            contract.withdraw(ALICE)
        assert contract.balance_wei() == PRICE_WEI

    def test_reentrant_withdraw_sees_zero_balance(self, allowlist_tree, registry, sale_config):
        sink = ReentrantSink()
        contract = MerkleMintContract(
            OWNER, allowlist_tree.root, registry, funds_sink=sink, config=sale_config
        )
        sink.contract = contract
        contract.flip_sale(OWNER)
        contract.mint(ALICE, 1, value_wei=PRICE_WEI)

        contract.withdraw(OWNER)

        assert sink.sent == [PRICE_WEI]
        assert isinstance(sink.reentry_error, NothingToWithdraw)
        assert contract.balance_wei() == 0
