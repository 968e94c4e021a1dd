"""GATE 6: Остаток presale квоты

number_of_tokens > available_quota(caller) → блокировка.

Gate только читает ledger; списание делает MintEngine после прохождения
всех gates (effects до interactions).
"""

from dataclasses import dataclass

from src.allowlist.quota_ledger import QuotaLedger
from src.gatekeeper.gates.gate_05_allowlist_proof import Gate05Result


@dataclass(frozen=True)
class Gate06Result:
    """Результат GATE 6."""

    entry_allowed: bool
    block_reason: str

    caller: str
    available_quota: int
    number_of_tokens: int

    # Детали
    details: str


class Gate06Quota:
    """GATE 6: number_of_tokens <= available_quota(caller)."""

    def __init__(self, ledger: QuotaLedger):
        self.ledger = ledger

    def evaluate(
        self,
        gate05_result: Gate05Result,
        caller: str,
        number_of_tokens: int,
    ) -> Gate06Result:
        """Оценка GATE 6.

        Args:
            gate05_result: результат GATE 5
            caller: адрес участника allowlist
            number_of_tokens: запрошенное количество

        Returns:
            Gate06Result с решением о допуске
        """
        available = self.ledger.available_quota(caller)

        if not gate05_result.entry_allowed:
            return Gate06Result(
                entry_allowed=False,
                block_reason=f"gate05_blocked: {gate05_result.block_reason}",
                caller=caller,
                available_quota=available,
                number_of_tokens=number_of_tokens,
                details=f"GATE 5 blocked: {gate05_result.block_reason}"
            )

        if number_of_tokens > available:
            return Gate06Result(
                entry_allowed=False,
                block_reason="quota_exhausted",
                caller=caller,
                available_quota=available,
                number_of_tokens=number_of_tokens,
                details=(
                    f"Requested {number_of_tokens} exceeds remaining presale quota "
                    f"{available} for {caller}"
                )
            )

        return Gate06Result(
            entry_allowed=True,
            block_reason="",
            caller=caller,
            available_quota=available,
            number_of_tokens=number_of_tokens,
            details=f"PASS: available_quota={available}"
        )
