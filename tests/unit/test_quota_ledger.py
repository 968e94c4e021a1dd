"""
Тесты Quota Ledger

Проверяет:
1. Lazy default: участник без записи владеет полной квотой
2. consume списывает ровно amount
3. InsufficientQuota без изменения записи
4. Монотонность и неотрицательность остатка
5. checkpoint / rollback
"""

import pytest

from accounts import ALICE, BOB
from src.allowlist.quota_ledger import QuotaLedger
from src.core.errors import InsufficientQuota, InvalidRequest


@pytest.fixture
def ledger():
    return QuotaLedger(default_quota=3)


class TestQuotaLedger:
    """Тесты QuotaLedger."""

    def test_unseen_identity_has_default_quota(self, ledger):
        assert ledger.available_quota(ALICE) == 3
        assert dict(ledger.entries()) == {}

    def test_consume_decrements_exactly(self, ledger):
        assert ledger.consume(ALICE, 2) == 1
        assert ledger.available_quota(ALICE) == 1
        # Другие участники не затронуты
        assert ledger.available_quota(BOB) == 3

    def test_consume_full_quota(self, ledger):
        ledger.consume(ALICE, 3)
        assert ledger.available_quota(ALICE) == 0

    def test_over_consume_rejected_without_mutation(self, ledger):
        ledger.consume(ALICE, 1)
        with pytest.raises(InsufficientQuota):
            ledger.consume(ALICE, 3)
        assert ledger.available_quota(ALICE) == 2

    def test_over_consume_unseen_identity_creates_no_entry(self, ledger):
        with pytest.raises(InsufficientQuota):
            ledger.consume(BOB, 4)
        assert BOB not in ledger.entries()

    @pytest.mark.parametrize("amount", [0, -1])
    def test_non_positive_amount_rejected(self, ledger, amount):
        with pytest.raises(InvalidRequest):
            ledger.consume(ALICE, amount)
        assert ledger.available_quota(ALICE) == 3

    def test_identity_normalized(self, ledger):
        ledger.consume(ALICE.lower(), 1)
        assert ledger.available_quota(ALICE.upper().replace("0X", "0x")) == 2

    def test_monotonic_and_non_negative(self, ledger):
        history = [ledger.available_quota(ALICE)]
        for amount in [1, 5, 1, 1, 1]:
            try:
                ledger.consume(ALICE, amount)
            except InsufficientQuota:
                pass
            history.append(ledger.available_quota(ALICE))
        assert history == sorted(history, reverse=True)
        assert min(history) == 0

    def test_rollback_restores_unseen_identity(self, ledger):
        checkpoint = ledger.checkpoint(ALICE)
        ledger.consume(ALICE, 2)
        ledger.rollback(checkpoint)
        assert ALICE.lower() not in {k.lower() for k in ledger.entries()}
        assert ledger.available_quota(ALICE) == 3

    def test_rollback_restores_previous_entry(self, ledger):
        ledger.consume(ALICE, 1)
        checkpoint = ledger.checkpoint(ALICE)
        ledger.consume(ALICE, 2)
        ledger.rollback(checkpoint)
        assert ledger.available_quota(ALICE) == 2

    def test_zero_default_quota(self):
        ledger = QuotaLedger(default_quota=0)
        with pytest.raises(InsufficientQuota):
            ledger.consume(ALICE, 1)

    def test_negative_default_rejected(self):
        with pytest.raises(ValueError):
            QuotaLedger(default_quota=-1)
