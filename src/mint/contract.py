"""
MerkleMintContract — публичная поверхность mint контракта

Собирает компоненты в один агрегат:
- SalePhaseMachine (фаза продажи)
- QuotaLedger (presale квоты)
- Treasury (баланс оплат)
- MintEngine (авторизация и выпуск)
- TokenRegistry (внешний реестр)

Owner-only: flip_presale, flip_sale, withdraw (иначе Unauthorized).
Публичные: mint, mint_presale и read-only аксессоры.

Сериализация: каждый вызов выполняется целиком под одним RLock, ни один
вызов не видит промежуточное состояние другого.
"""

import logging
import threading
from typing import Optional, Sequence

from jsonschema import ValidationError

from src.allowlist.merkle import Node, coerce_root
from src.allowlist.quota_ledger import QuotaLedger
from src.core.config import settings
from src.core.contracts import MintRequestContract, MintStateContract
from src.core.domain.identity import normalize_address, same_identity
from src.core.domain.mint_request import MintReceipt, MintRequest, WithdrawalReceipt
from src.core.domain.sale_state import MintStateSnapshot, SaleConfig, SalePhase
from src.core.errors import InvalidRequest, Unauthorized
from src.core.logging_utils import configure_logging
from src.mint.engine import MintEngine
from src.registry.base import TokenRegistry
from src.sale.phase_machine import PhaseTransitionResult, SalePhaseMachine
from src.treasury.accessor import FundsSink, InMemoryFundsSink, Treasury

logger = logging.getLogger(__name__)


class MerkleMintContract:
    """Mint контракт с Merkle allowlist presale и public sale."""

    def __init__(
        self,
        owner: str,
        allowlist_root: Node,
        registry: TokenRegistry,
        funds_sink: Optional[FundsSink] = None,
        config: Optional[SaleConfig] = None,
    ):
        """
        Args:
            owner: адрес владельца (owner-only операции, получатель вывода)
            allowlist_root: 32-байтный Merkle root (bytes или 0x hex), неизменяем
            registry: внешний реестр токенов
            funds_sink: получатель выводимых средств (по умолчанию in-memory)
            config: параметры продажи (по умолчанию из settings)

        Raises:
            ValueError: Если owner не адрес или root не 32 байта
        """
        configure_logging(settings.log_level)

        self._owner = normalize_address(owner)
        self._root = coerce_root(allowlist_root)
        self.config = config or settings.sale_config()
        self.registry = registry

        self._lock = threading.RLock()
        self._phase_machine = SalePhaseMachine()
        self._ledger = QuotaLedger(self.config.max_presale_quota)
        self._treasury = Treasury(funds_sink or InMemoryFundsSink())
        self._request_contract = MintRequestContract()
        self._state_contract = MintStateContract()
        self._engine = MintEngine(
            config=self.config,
            root=self._root,
            ledger=self._ledger,
            phase_machine=self._phase_machine,
            registry=registry,
            treasury=self._treasury,
        )

        logger.info(
            "Mint contract created: owner=%s root=0x%s max_tokens=%d",
            self._owner,
            self._root.hex(),
            self.config.max_tokens,
        )

    # =========================================================================
    # OWNER-ONLY
    # =========================================================================

    def _require_owner(self, caller: str, operation: str) -> None:
        if not same_identity(caller, self._owner):
            logger.warning("Unauthorized %s attempt by %s", operation, caller)
            raise Unauthorized(f"{operation} is restricted to the contract owner")

    def flip_presale(self, caller: str) -> PhaseTransitionResult:
        with self._lock:
            self._require_owner(caller, "flip_presale")
            return self._phase_machine.flip_presale()

    def flip_sale(self, caller: str) -> PhaseTransitionResult:
        with self._lock:
            self._require_owner(caller, "flip_sale")
            return self._phase_machine.flip_sale()

    def withdraw(self, caller: str) -> WithdrawalReceipt:
        """Вывод всего баланса owner-у.

        Raises:
            Unauthorized: Если caller не owner
            NothingToWithdraw: Если баланс равен нулю
            WithdrawalFailed: Если funds sink отказал
        """
        with self._lock:
            self._require_owner(caller, "withdraw")
            return self._treasury.withdraw(self._owner)

    # =========================================================================
    # MINT
    # =========================================================================

    def mint(
        self,
        caller: str,
        number_of_tokens: int,
        value_wei: int = 0,
        origin: Optional[str] = None,
    ) -> MintReceipt:
        """Public mint: number_of_tokens токенов за value_wei."""
        request = MintRequest(
            caller=caller,
            origin=origin,
            number_of_tokens=number_of_tokens,
            value_wei=value_wei,
        )
        return self.submit(request, presale=False)

    def mint_presale(
        self,
        caller: str,
        number_of_tokens: int,
        proof: Sequence[Node],
        value_wei: int = 0,
        origin: Optional[str] = None,
    ) -> MintReceipt:
        """Presale mint участника allowlist по Merkle proof."""
        request = MintRequest(
            caller=caller,
            origin=origin,
            number_of_tokens=number_of_tokens,
            value_wei=value_wei,
            proof=tuple(proof),
        )
        return self.submit(request, presale=True)

    def submit(self, request: MintRequest, presale: bool) -> MintReceipt:
        """Исполнение готового MintRequest под lock контракта.

        Запрос сначала проверяется по contracts/schema/mint_request.json.

        Raises:
            InvalidRequest: Если запрос нарушает JSON контракт
            MintError: Отказ одного из gates или registry
        """
        with self._lock:
            try:
                self._request_contract.check(request)
            except ValidationError as e:
                logger.warning("Mint request violates contract: %s", e.message)
                raise InvalidRequest(
                    f"mint request violates contract: {e.message}",
                    block_reason="request_contract_violation",
                ) from e
            if presale:
                return self._engine.mint_presale(request)
            return self._engine.mint(request)

    # =========================================================================
    # READ-ONLY
    # =========================================================================

    @property
    def owner(self) -> str:
        return self._owner

    def root(self) -> bytes:
        return self._root

    def phase(self) -> SalePhase:
        with self._lock:
            return self._phase_machine.phase

    def sale_is_active(self) -> bool:
        with self._lock:
            return self._phase_machine.sale_is_active

    def presale_is_active(self) -> bool:
        with self._lock:
            return self._phase_machine.presale_is_active

    def available_quota(self, identity: str) -> int:
        with self._lock:
            return self._ledger.available_quota(identity)

    def total_issued(self) -> int:
        with self._lock:
            return self.registry.total_issued()

    def balance_wei(self) -> int:
        with self._lock:
            return self._treasury.balance_wei

    def snapshot(self) -> MintStateSnapshot:
        """Согласованный снапшот состояния (contracts/schema/mint_state.json)."""
        with self._lock:
            phase = self._phase_machine.phase
            snapshot = MintStateSnapshot(
                owner=self._owner,
                allowlist_root="0x" + self._root.hex(),
                phase=phase,
                sale_is_active=phase.sale_is_active,
                presale_is_active=phase.presale_is_active,
                total_issued=self.registry.total_issued(),
                balance_wei=self._treasury.balance_wei,
                config=self.config,
                quota_entries=dict(self._ledger.entries()),
            )
            self._state_contract.check(snapshot)
            return snapshot
