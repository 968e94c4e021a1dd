"""GATE 0: Форма запроса (количество токенов)

Первый gate в цепочке, общий для public и presale mint:
- number_of_tokens == 0 → блокировка
- number_of_tokens >= max_purchase → блокировка (лимит за вызов ИСКЛЮЧАЮЩИЙ)

Не обращается к состоянию контракта: самая дешёвая проверка идёт первой.
"""

from dataclasses import dataclass

from src.core.domain.sale_state import SaleConfig


@dataclass(frozen=True)
class Gate00Result:
    """Результат GATE 0."""

    entry_allowed: bool
    block_reason: str

    # Входные параметры для диагностики
    number_of_tokens: int
    max_purchase: int

    # Детали
    details: str


class Gate00RequestShape:
    """GATE 0: допустимое количество токенов за вызов.

    Допустимо: 1 <= number_of_tokens < max_purchase.
    """

    def __init__(self, config: SaleConfig):
        self.config = config

    def evaluate(self, number_of_tokens: int) -> Gate00Result:
        """Оценка GATE 0.

        Args:
            number_of_tokens: запрошенное количество

        Returns:
            Gate00Result с решением о допуске
        """
        max_purchase = self.config.max_purchase

        if number_of_tokens <= 0:
            return Gate00Result(
                entry_allowed=False,
                block_reason="zero_tokens_requested",
                number_of_tokens=number_of_tokens,
                max_purchase=max_purchase,
                details="number_of_tokens must be at least 1"
            )

        if number_of_tokens >= max_purchase:
            return Gate00Result(
                entry_allowed=False,
                block_reason="exceeds_per_call_limit",
                number_of_tokens=number_of_tokens,
                max_purchase=max_purchase,
                details=f"number_of_tokens={number_of_tokens} >= max_purchase={max_purchase}"
            )

        return Gate00Result(
            entry_allowed=True,
            block_reason="",
            number_of_tokens=number_of_tokens,
            max_purchase=max_purchase,
            details=f"PASS: number_of_tokens={number_of_tokens}"
        )
