"""
Mint Authorization Engine — оркестрация двух точек входа mint

Public mint:  GATE 0 → 1 → 2 → 3 → 4 → выпуск
Presale mint: GATE 0 → 1 → 2 → 3 → 4 → 5 → 6 → списание квоты → выпуск

Первый заблокированный gate прерывает вызов соответствующей ошибкой.

Порядок исполнения (checks → effects → interactions):
1. Все gates (без мутаций)
2. Списание квоты (presale) и зачисление оплаты на баланс
3. Выпуск number_of_tokens последовательных id через registry

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Отказ на любом шаге оставляет ledger, фазу и баланс без изменений; supply
   тоже, если registry отзывает уже выпущенные id (иначе IssuanceFailed
   перечисляет их в unrevoked_ids)
2. Списание квоты == количество выпущенных токенов (ни частичного списания,
   ни выпуска без списания)
3. Переплата остаётся на балансе и не масштабирует количество
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple, Type

from src.allowlist.quota_ledger import QuotaCheckpoint, QuotaLedger
from src.core.domain.mint_request import MintReceipt, MintRequest
from src.core.domain.sale_state import SaleConfig
from src.core.errors import (
    ForbiddenIntermediary,
    InsufficientFunds,
    InsufficientQuota,
    InvalidRequest,
    IssuanceFailed,
    MintError,
    NotAllowlisted,
    PhaseNotActive,
    SupplyExceeded,
)
from src.gatekeeper.gates import (
    Gate00RequestShape,
    Gate01Payment,
    Gate02FirstParty,
    Gate03SalePhase,
    Gate04SupplyCap,
    Gate05AllowlistProof,
    Gate06Quota,
    MintEntryPoint,
)
from src.registry.base import TokenRegistry
from src.sale.phase_machine import SalePhaseMachine
from src.treasury.accessor import Treasury

logger = logging.getLogger(__name__)


# Ошибка для каждого gate (по номеру в цепочке)
GATE_ERRORS: Dict[int, Type[MintError]] = {
    0: InvalidRequest,
    1: InsufficientFunds,
    2: ForbiddenIntermediary,
    3: PhaseNotActive,
    4: SupplyExceeded,
    5: NotAllowlisted,
    6: InsufficientQuota,
}


class MintEngine:
    """Mint Authorization Engine.

    Владеет ссылками на всё изменяемое состояние (ledger, фаза, treasury)
    и registry. Сериализацию вызовов обеспечивает вызывающая сторона
    (MerkleMintContract держит один lock на все операции).
    """

    def __init__(
        self,
        config: SaleConfig,
        root: bytes,
        ledger: QuotaLedger,
        phase_machine: SalePhaseMachine,
        registry: TokenRegistry,
        treasury: Treasury,
    ):
        self.config = config
        self.root = root
        self.ledger = ledger
        self.phase_machine = phase_machine
        self.registry = registry
        self.treasury = treasury

        self.gate00 = Gate00RequestShape(config)
        self.gate01 = Gate01Payment(config)
        self.gate02 = Gate02FirstParty()
        self.gate03 = Gate03SalePhase()
        self.gate04 = Gate04SupplyCap(config)
        self.gate05 = Gate05AllowlistProof(root)
        self.gate06 = Gate06Quota(ledger)

    # =========================================================================
    # ENTRY POINTS
    # =========================================================================

    def mint(self, request: MintRequest) -> MintReceipt:
        """Public mint.

        Raises:
            InvalidRequest, InsufficientFunds, ForbiddenIntermediary,
            PhaseNotActive, SupplyExceeded, IssuanceFailed
        """
        self._authorize_common(request, MintEntryPoint.PUBLIC)
        return self._execute(request, checkpoint=None)

    def mint_presale(self, request: MintRequest) -> MintReceipt:
        """Allowlist (presale) mint.

        Raises:
            InvalidRequest, InsufficientFunds, ForbiddenIntermediary,
            PhaseNotActive, SupplyExceeded, NotAllowlisted,
            InsufficientQuota, IssuanceFailed
        """
        gate04_result = self._authorize_common(request, MintEntryPoint.PRESALE)

        gate05_result = self.gate05.evaluate(gate04_result, request.caller, request.proof)
        self._raise_if_blocked(5, gate05_result, request)

        gate06_result = self.gate06.evaluate(
            gate05_result, request.caller, request.number_of_tokens
        )
        self._raise_if_blocked(6, gate06_result, request)

        # Effects: квота списывается до выпуска
        checkpoint = self.ledger.checkpoint(request.caller)
        self.ledger.consume(request.caller, request.number_of_tokens)
        return self._execute(request, checkpoint=checkpoint)

    # =========================================================================
    # AUTHORIZATION
    # =========================================================================

    def _authorize_common(self, request: MintRequest, entry_point: MintEntryPoint):
        """Gates 0-4, общие для обеих точек входа. Возвращает Gate04Result."""
        n = request.number_of_tokens

        gate00_result = self.gate00.evaluate(n)
        self._raise_if_blocked(0, gate00_result, request)

        gate01_result = self.gate01.evaluate(gate00_result, request.value_wei)
        self._raise_if_blocked(1, gate01_result, request)

        gate02_result = self.gate02.evaluate(gate01_result, request)
        self._raise_if_blocked(2, gate02_result, request)

        gate03_result = self.gate03.evaluate(
            gate02_result, entry_point, self.phase_machine.phase
        )
        self._raise_if_blocked(3, gate03_result, request)

        gate04_result = self.gate04.evaluate(gate03_result, self.registry.total_issued(), n)
        self._raise_if_blocked(4, gate04_result, request)

        return gate04_result

    def _raise_if_blocked(self, gate_number: int, result, request: MintRequest) -> None:
        if result.entry_allowed:
            return
        logger.info(
            "Mint rejected at GATE %d: caller=%s n=%d reason=%s (%s)",
            gate_number,
            request.caller,
            request.number_of_tokens,
            result.block_reason,
            result.details,
        )
        raise GATE_ERRORS[gate_number](result.details, block_reason=result.block_reason)

    # =========================================================================
    # EXECUTION
    # =========================================================================

    def _execute(
        self,
        request: MintRequest,
        checkpoint: Optional[QuotaCheckpoint],
    ) -> MintReceipt:
        """Зачисление оплаты и выпуск токенов; откат при отказе registry."""
        phase = self.phase_machine.phase
        first_id = self.registry.total_issued()
        token_ids = tuple(range(first_id, first_id + request.number_of_tokens))

        self.treasury.deposit(request.value_wei)

        issued: List[int] = []
        try:
            for token_id in token_ids:
                self.registry.issue(request.caller, token_id)
                issued.append(token_id)
        except Exception as exc:
            unrevoked, revoke_error = self._rollback(request, checkpoint, issued)
            logger.error(
                "Issuance failed for %s after %d of %d tokens: %s",
                request.caller,
                len(issued),
                len(token_ids),
                exc,
            )
            if revoke_error is not None:
                logger.critical(
                    "Registry could not revoke token(s) %s: %s", list(unrevoked), revoke_error
                )
                raise IssuanceFailed(
                    f"registry rejected issuance: {exc}; "
                    f"revoke of {list(unrevoked)} failed: {revoke_error}",
                    unrevoked_ids=unrevoked,
                ) from revoke_error
            raise IssuanceFailed(f"registry rejected issuance: {exc}") from exc

        quota_remaining = (
            self.ledger.available_quota(request.caller) if checkpoint is not None else None
        )
        logger.info(
            "Minted %d token(s) %s to %s in %s phase, paid %d wei",
            len(token_ids),
            list(token_ids),
            request.caller,
            phase.value,
            request.value_wei,
        )
        return MintReceipt(
            minter=request.caller,
            token_ids=token_ids,
            paid_wei=request.value_wei,
            phase=phase,
            quota_remaining=quota_remaining,
        )

    def _rollback(
        self,
        request: MintRequest,
        checkpoint: Optional[QuotaCheckpoint],
        issued: Sequence[int],
    ) -> Tuple[Tuple[int, ...], Optional[Exception]]:
        """Откат неуспешного выпуска.

        Локальное состояние (квота, баланс) откатывается первым и не зависит
        от registry. Затем отзываются уже выпущенные id; отказ revoke одного id
        не прерывает отзыв остальных.

        Returns:
            (id, которые не удалось отозвать; первая ошибка revoke или None)
        """
        if checkpoint is not None:
            self.ledger.rollback(checkpoint)
        self.treasury.reverse_deposit(request.value_wei)

        unrevoked: List[int] = []
        first_error: Optional[Exception] = None
        for token_id in reversed(issued):
            try:
                self.registry.revoke(token_id)
            except Exception as exc:
                unrevoked.append(token_id)
                if first_error is None:
                    first_error = exc
        return tuple(unrevoked), first_error
