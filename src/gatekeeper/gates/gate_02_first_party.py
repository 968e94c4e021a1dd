"""GATE 2: Только прямой вызов (anti-bot)

Вызов через посредника (helper contract, relay) блокируется:
caller (непосредственный вызывающий) должен совпадать с origin
(инициатор транзакции, сообщается доверенным диспетчером хоста).

Назначение: не допустить автоматизированный bulk-mint через
вспомогательные контракты.
"""

from dataclasses import dataclass

from src.core.domain.mint_request import MintRequest
from src.gatekeeper.gates.gate_01_payment import Gate01Result


@dataclass(frozen=True)
class Gate02Result:
    """Результат GATE 2."""

    entry_allowed: bool
    block_reason: str

    caller: str
    origin: str

    # Детали
    details: str


class Gate02FirstParty:
    """GATE 2: caller == origin."""

    def evaluate(
        self,
        gate01_result: Gate01Result,
        request: MintRequest,
    ) -> Gate02Result:
        """Оценка GATE 2.

        Args:
            gate01_result: результат GATE 1
            request: запрос на mint (caller / origin)

        Returns:
            Gate02Result с решением о допуске
        """
        origin = request.origin or request.caller

        if not gate01_result.entry_allowed:
            return Gate02Result(
                entry_allowed=False,
                block_reason=f"gate01_blocked: {gate01_result.block_reason}",
                caller=request.caller,
                origin=origin,
                details=f"GATE 1 blocked: {gate01_result.block_reason}"
            )

        if not request.is_first_party:
            return Gate02Result(
                entry_allowed=False,
                block_reason="intermediary_caller",
                caller=request.caller,
                origin=origin,
                details=f"Relayed call rejected: caller={request.caller} origin={origin}"
            )

        return Gate02Result(
            entry_allowed=True,
            block_reason="",
            caller=request.caller,
            origin=origin,
            details=f"PASS: first-party caller {request.caller}"
        )
