"""
Treasury Accessor — накопленный баланс оплат и его вывод owner-у

Порядок вывода (checks → effects → interaction):
1. balance == 0 → NothingToWithdraw
2. balance обнуляется ДО внешнего перевода
3. funds sink получает всю сумму; при отказе баланс восстанавливается

Повторный вход из funds sink видит уже обнулённый баланс.
"""

import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Dict, List, Tuple

from src.core.domain.identity import normalize_address
from src.core.domain.mint_request import WithdrawalReceipt
from src.core.domain.units import validate_wei
from src.core.errors import NothingToWithdraw, WithdrawalFailed

logger = logging.getLogger(__name__)


# =============================================================================
# FUNDS SINK
# =============================================================================


class FundsSink(ABC):
    """Получатель выводимых средств (custody plumbing хоста)."""

    @abstractmethod
    def send(self, recipient: str, amount_wei: int) -> None:
        """Перевести amount_wei получателю."""
        pass


class InMemoryFundsSink(FundsSink):
    """Фиксирует переводы в памяти."""

    def __init__(self):
        self.transfers: List[Tuple[str, int]] = []
        self._received: Dict[str, int] = defaultdict(int)

    def send(self, recipient: str, amount_wei: int) -> None:
        recipient = normalize_address(recipient)
        self.transfers.append((recipient, amount_wei))
        self._received[recipient] += amount_wei

    def received(self, recipient: str) -> int:
        return self._received[normalize_address(recipient)]


# =============================================================================
# TREASURY
# =============================================================================


class Treasury:
    """Баланс контракта в wei."""

    def __init__(self, funds_sink: FundsSink):
        self.funds_sink = funds_sink
        self._balance_wei = 0

    @property
    def balance_wei(self) -> int:
        return self._balance_wei

    def deposit(self, amount_wei: int) -> None:
        """Зачисление оплаты mint (переплата не возвращается)."""
        validate_wei(amount_wei, "amount_wei")
        self._balance_wei += amount_wei

    def reverse_deposit(self, amount_wei: int) -> None:
        """Откат зачисления неуспешного mint."""
        validate_wei(amount_wei, "amount_wei")
        if amount_wei > self._balance_wei:
            raise ValueError(
                f"cannot reverse {amount_wei} wei, balance is {self._balance_wei}"
            )
        self._balance_wei -= amount_wei

    def withdraw(self, recipient: str) -> WithdrawalReceipt:
        """
        Вывод всего баланса получателю.

        Args:
            recipient: адрес получателя (owner)

        Returns:
            WithdrawalReceipt

        Raises:
            NothingToWithdraw: Если баланс равен нулю
            WithdrawalFailed: Если funds sink отказал (баланс восстановлен)
        """
        amount = self._balance_wei
        if amount == 0:
            raise NothingToWithdraw("contract balance is zero")

        self._balance_wei = 0
        try:
            self.funds_sink.send(recipient, amount)
        except Exception as exc:
            self._balance_wei += amount
            logger.error("Withdrawal of %d wei to %s failed: %s", amount, recipient, exc)
            raise WithdrawalFailed(f"transfer of {amount} wei failed: {exc}") from exc

        logger.info("Withdrew %d wei to %s", amount, recipient)
        return WithdrawalReceipt(recipient=normalize_address(recipient), amount_wei=amount)
