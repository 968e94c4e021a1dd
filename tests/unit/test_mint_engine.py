"""
Тесты MintEngine: порядок gates, effects до interactions, откат при отказе registry

Проверяет:
1. Ошибка соответствует первому заблокированному gate
2. Отказ registry посреди выпуска откатывает квоту, баланс и выпущенные id
3. Registry видит уже списанную квоту и зачисленную оплату (reentrancy)
"""

import pytest

from accounts import ALICE, MALLORY, PRICE_WEI
from src.allowlist.quota_ledger import QuotaLedger
from src.core.domain.mint_request import MintRequest
from src.core.errors import (
    InsufficientFunds,
    InvalidRequest,
    IssuanceFailed,
    NotAllowlisted,
    PhaseNotActive,
)
from src.mint.engine import GATE_ERRORS, MintEngine
from src.registry.memory import InMemoryTokenRegistry
from src.sale.phase_machine import SalePhaseMachine
from src.treasury.accessor import InMemoryFundsSink, Treasury


class FlakyRegistry(InMemoryTokenRegistry):
    """Registry, отказывающий на N-м вызове issue."""

    def __init__(self, fail_on_call: int):
        super().__init__()
        self.fail_on_call = fail_on_call
        self.calls = 0

    def issue(self, owner, token_id):
        self.calls += 1
        if self.calls == self.fail_on_call:
            raise RuntimeError("registry unavailable")
        super().issue(owner, token_id)


class RevokeDownRegistry(FlakyRegistry):
    """Registry, отказывающий на N-м issue и на каждом revoke."""

    def revoke(self, token_id):
        raise RuntimeError(f"revoke of {token_id} unavailable")


class ObservingRegistry(InMemoryTokenRegistry):
    """Registry, записывающий состояние engine в момент выпуска."""

    def __init__(self):
        super().__init__()
        self.engine = None
        self.observed = []

    def issue(self, owner, token_id):
        self.observed.append(
            (self.engine.ledger.available_quota(owner), self.engine.treasury.balance_wei)
        )
        super().issue(owner, token_id)


def build_engine(sale_config, allowlist_tree, registry):
    phase_machine = SalePhaseMachine()
    phase_machine.flip_presale()
    return MintEngine(
        config=sale_config,
        root=allowlist_tree.root,
        ledger=QuotaLedger(sale_config.max_presale_quota),
        phase_machine=phase_machine,
        registry=registry,
        treasury=Treasury(InMemoryFundsSink()),
    )


class TestGateOrdering:
    """Первый заблокированный gate определяет ошибку."""

    def test_gate_error_mapping_complete(self):
        assert sorted(GATE_ERRORS) == list(range(7))

    def test_shape_checked_before_payment(self, sale_config, allowlist_tree, registry):
        engine = build_engine(sale_config, allowlist_tree, registry)
        with pytest.raises(InvalidRequest):
            engine.mint_presale(MintRequest(caller=ALICE, number_of_tokens=0, value_wei=0))

    def test_payment_checked_before_phase(self, sale_config, allowlist_tree, registry):
        engine = build_engine(sale_config, allowlist_tree, registry)
        with pytest.raises(InsufficientFunds):
            engine.mint(MintRequest(caller=ALICE, number_of_tokens=1, value_wei=0))

    def test_gate_block_reason_carried_by_error(self, sale_config, allowlist_tree, registry):
        engine = build_engine(sale_config, allowlist_tree, registry)
        with pytest.raises(InsufficientFunds) as exc_info:
            engine.mint(MintRequest(caller=ALICE, number_of_tokens=2, value_wei=PRICE_WEI))

        assert exc_info.value.code == "insufficient_funds"
        assert exc_info.value.block_reason == "insufficient_payment"

    def test_phase_checked_before_proof(self, sale_config, allowlist_tree, registry):
        engine = build_engine(sale_config, allowlist_tree, registry)
        engine.phase_machine.flip_presale()
        with pytest.raises(PhaseNotActive):
            engine.mint_presale(
                MintRequest(caller=MALLORY, number_of_tokens=1, value_wei=PRICE_WEI)
            )

    def test_proof_checked(self, sale_config, allowlist_tree, registry):
        engine = build_engine(sale_config, allowlist_tree, registry)
        with pytest.raises(NotAllowlisted):
            engine.mint_presale(
                MintRequest(caller=MALLORY, number_of_tokens=1, value_wei=PRICE_WEI)
            )


class TestIssuanceRollback:
    """Отказ registry: всё или ничего."""

    def test_mid_batch_failure_rolls_back(self, sale_config, allowlist_tree):
        registry = FlakyRegistry(fail_on_call=2)
        engine = build_engine(sale_config, allowlist_tree, registry)
        request = MintRequest(
            caller=ALICE,
            number_of_tokens=3,
            value_wei=3 * PRICE_WEI,
            proof=tuple(allowlist_tree.proof(ALICE)),
        )

        with pytest.raises(IssuanceFailed):
            engine.mint_presale(request)

        assert registry.total_issued() == 0
        assert registry.balance_of(ALICE) == 0
        assert engine.ledger.available_quota(ALICE) == 3
        assert dict(engine.ledger.entries()) == {}
        assert engine.treasury.balance_wei == 0

    def test_public_failure_rolls_back_balance(self, sale_config, allowlist_tree):
        registry = FlakyRegistry(fail_on_call=1)
        engine = build_engine(sale_config, allowlist_tree, registry)
        engine.phase_machine.flip_sale()

        with pytest.raises(IssuanceFailed):
            engine.mint(MintRequest(caller=ALICE, number_of_tokens=1, value_wei=PRICE_WEI))

        assert engine.treasury.balance_wei == 0
        assert registry.total_issued() == 0

    def test_retry_after_failure_succeeds(self, sale_config, allowlist_tree):
        registry = FlakyRegistry(fail_on_call=1)
        engine = build_engine(sale_config, allowlist_tree, registry)
        request = MintRequest(
            caller=ALICE,
            number_of_tokens=1,
            value_wei=PRICE_WEI,
            proof=tuple(allowlist_tree.proof(ALICE)),
        )
        with pytest.raises(IssuanceFailed):
            engine.mint_presale(request)

        receipt = engine.mint_presale(request)

        assert receipt.token_ids == (0,)
        assert engine.ledger.available_quota(ALICE) == 2

    def test_revoke_failure_still_restores_quota_and_balance(self, sale_config, allowlist_tree):
        registry = RevokeDownRegistry(fail_on_call=2)
        engine = build_engine(sale_config, allowlist_tree, registry)
        request = MintRequest(
            caller=ALICE,
            number_of_tokens=2,
            value_wei=2 * PRICE_WEI,
            proof=tuple(allowlist_tree.proof(ALICE)),
        )

        with pytest.raises(IssuanceFailed) as exc_info:
            engine.mint_presale(request)

        assert exc_info.value.unrevoked_ids == (0,)
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert "revoke of 0 unavailable" in str(exc_info.value.__cause__)
        assert engine.ledger.available_quota(ALICE) == 3
        assert dict(engine.ledger.entries()) == {}
        assert engine.treasury.balance_wei == 0

    def test_clean_rollback_reports_no_unrevoked_ids(self, sale_config, allowlist_tree):
        registry = FlakyRegistry(fail_on_call=2)
        engine = build_engine(sale_config, allowlist_tree, registry)
        engine.phase_machine.flip_sale()

        with pytest.raises(IssuanceFailed) as exc_info:
            engine.mint(MintRequest(caller=ALICE, number_of_tokens=2, value_wei=2 * PRICE_WEI))

        assert exc_info.value.unrevoked_ids == ()
        assert str(exc_info.value.__cause__) == "registry unavailable"


class TestEffectsBeforeInteractions:

    def test_registry_observes_committed_state(self, sale_config, allowlist_tree):
        registry = ObservingRegistry()
        engine = build_engine(sale_config, allowlist_tree, registry)
        registry.engine = engine

        engine.mint_presale(
            MintRequest(
                caller=ALICE,
                number_of_tokens=2,
                value_wei=2 * PRICE_WEI,
                proof=tuple(allowlist_tree.proof(ALICE)),
            )
        )

        assert registry.observed == [(1, 2 * PRICE_WEI), (1, 2 * PRICE_WEI)]
