"""GATE 1: Достаточность оплаты

- required = token_price_wei × number_of_tokens (целые wei, units.required_payment_wei)
- value_wei < required → блокировка
- Переплата допускается и не влияет на количество токенов (возврата нет)

Интеграция:
- Использует результат GATE 0 (количество должно быть валидным)
"""

from dataclasses import dataclass

from src.core.domain.sale_state import SaleConfig
from src.core.domain.units import required_payment_wei
from src.gatekeeper.gates.gate_00_request_shape import Gate00Result


@dataclass(frozen=True)
class Gate01Result:
    """Результат GATE 1."""

    entry_allowed: bool
    block_reason: str

    # Оплата
    value_wei: int
    required_wei: int
    overpayment_wei: int

    # Детали
    details: str


class Gate01Payment:
    """GATE 1: attached value >= token_price × number_of_tokens."""

    def __init__(self, config: SaleConfig):
        self.config = config

    def evaluate(
        self,
        gate00_result: Gate00Result,
        value_wei: int,
    ) -> Gate01Result:
        """Оценка GATE 1.

        Args:
            gate00_result: результат GATE 0
            value_wei: приложенная оплата

        Returns:
            Gate01Result с решением о допуске
        """
        if not gate00_result.entry_allowed:
            return Gate01Result(
                entry_allowed=False,
                block_reason=f"gate00_blocked: {gate00_result.block_reason}",
                value_wei=value_wei,
                required_wei=0,
                overpayment_wei=0,
                details=f"GATE 0 blocked: {gate00_result.block_reason}"
            )

        required = required_payment_wei(
            self.config.token_price_wei, gate00_result.number_of_tokens
        )

        if value_wei < required:
            return Gate01Result(
                entry_allowed=False,
                block_reason="insufficient_payment",
                value_wei=value_wei,
                required_wei=required,
                overpayment_wei=0,
                details=f"Insufficient funds: value_wei={value_wei} < required_wei={required}"
            )

        return Gate01Result(
            entry_allowed=True,
            block_reason="",
            value_wei=value_wei,
            required_wei=required,
            overpayment_wei=value_wei - required,
            details=f"PASS: value_wei={value_wei}, required_wei={required}"
        )
