"""GATE 4: Глобальный лимит выпуска

total_issued + number_of_tokens > max_tokens → блокировка.

Проверка выполняется до любой мутации, поэтому лимит держится всё время
жизни контракта без отката.
"""

from dataclasses import dataclass

from src.core.domain.sale_state import SaleConfig
from src.gatekeeper.gates.gate_03_sale_phase import Gate03Result


@dataclass(frozen=True)
class Gate04Result:
    """Результат GATE 4."""

    entry_allowed: bool
    block_reason: str

    total_issued: int
    number_of_tokens: int
    max_tokens: int
    remaining_supply: int

    # Детали
    details: str


class Gate04SupplyCap:
    """GATE 4: total_issued + number_of_tokens <= max_tokens."""

    def __init__(self, config: SaleConfig):
        self.config = config

    def evaluate(
        self,
        gate03_result: Gate03Result,
        total_issued: int,
        number_of_tokens: int,
    ) -> Gate04Result:
        """Оценка GATE 4.

        Args:
            gate03_result: результат GATE 3
            total_issued: текущий выпуск (из registry)
            number_of_tokens: запрошенное количество

        Returns:
            Gate04Result с решением о допуске
        """
        max_tokens = self.config.max_tokens
        remaining = max(max_tokens - total_issued, 0)

        if not gate03_result.entry_allowed:
            return Gate04Result(
                entry_allowed=False,
                block_reason=f"gate03_blocked: {gate03_result.block_reason}",
                total_issued=total_issued,
                number_of_tokens=number_of_tokens,
                max_tokens=max_tokens,
                remaining_supply=remaining,
                details=f"GATE 3 blocked: {gate03_result.block_reason}"
            )

        if total_issued + number_of_tokens > max_tokens:
            return Gate04Result(
                entry_allowed=False,
                block_reason="max_supply_exceeded",
                total_issued=total_issued,
                number_of_tokens=number_of_tokens,
                max_tokens=max_tokens,
                remaining_supply=remaining,
                details=(
                    f"Purchase would exceed max supply: {total_issued} + "
                    f"{number_of_tokens} > {max_tokens}"
                )
            )

        return Gate04Result(
            entry_allowed=True,
            block_reason="",
            total_issued=total_issued,
            number_of_tokens=number_of_tokens,
            max_tokens=max_tokens,
            remaining_supply=remaining,
            details=f"PASS: remaining_supply={remaining}"
        )
