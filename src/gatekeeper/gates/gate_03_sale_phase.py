"""GATE 3: Фаза продажи

- MintEntryPoint.PUBLIC требует SalePhase.PUBLIC (sale_is_active)
- MintEntryPoint.PRESALE требует SalePhase.PRESALE (presale_is_active)

Gate только читает фазу; переключения делает SalePhaseMachine.
"""

from dataclasses import dataclass
from enum import Enum

from src.core.domain.sale_state import SalePhase
from src.gatekeeper.gates.gate_02_first_party import Gate02Result


class MintEntryPoint(str, Enum):
    """Точка входа mint."""

    PUBLIC = "PUBLIC"
    PRESALE = "PRESALE"


# Фаза, в которой открыта точка входа
_REQUIRED_PHASE = {
    MintEntryPoint.PUBLIC: SalePhase.PUBLIC,
    MintEntryPoint.PRESALE: SalePhase.PRESALE,
}


@dataclass(frozen=True)
class Gate03Result:
    """Результат GATE 3."""

    entry_allowed: bool
    block_reason: str

    entry_point: MintEntryPoint
    current_phase: SalePhase
    required_phase: SalePhase

    # Детали
    details: str


class Gate03SalePhase:
    """GATE 3: фаза продажи соответствует точке входа."""

    def evaluate(
        self,
        gate02_result: Gate02Result,
        entry_point: MintEntryPoint,
        current_phase: SalePhase,
    ) -> Gate03Result:
        """Оценка GATE 3.

        Args:
            gate02_result: результат GATE 2
            entry_point: PUBLIC или PRESALE
            current_phase: текущая фаза продажи

        Returns:
            Gate03Result с решением о допуске
        """
        required_phase = _REQUIRED_PHASE[entry_point]

        if not gate02_result.entry_allowed:
            return Gate03Result(
                entry_allowed=False,
                block_reason=f"gate02_blocked: {gate02_result.block_reason}",
                entry_point=entry_point,
                current_phase=current_phase,
                required_phase=required_phase,
                details=f"GATE 2 blocked: {gate02_result.block_reason}"
            )

        if current_phase != required_phase:
            reason = (
                "sale_not_active" if entry_point == MintEntryPoint.PUBLIC
                else "presale_not_active"
            )
            return Gate03Result(
                entry_allowed=False,
                block_reason=reason,
                entry_point=entry_point,
                current_phase=current_phase,
                required_phase=required_phase,
                details=(
                    f"{entry_point.value} mint requires phase {required_phase.value}, "
                    f"current phase is {current_phase.value}"
                )
            )

        return Gate03Result(
            entry_allowed=True,
            block_reason="",
            entry_point=entry_point,
            current_phase=current_phase,
            required_phase=required_phase,
            details=f"PASS: phase={current_phase.value}"
        )
