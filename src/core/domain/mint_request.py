"""
MintRequest — Модели запроса на mint и квитанций

Immutable Pydantic модели:
- MintRequest: кто вызывает, сколько токенов, сколько оплачено, proof
- MintReceipt: результат успешного mint
- WithdrawalReceipt: результат вывода средств

Совместимость с JSON Schema: contracts/schema/mint_request.json.
"""

from typing import Any, Optional, Tuple, Union

from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator

from .identity import normalize_address
from .sale_state import SalePhase


class MintRequest(BaseModel):
    """
    Запрос на mint.

    caller — непосредственный вызывающий; origin — инициатор транзакции,
    которого сообщает доверенный диспетчер хоста. Если origin не указан,
    вызов считается прямым (origin = caller).

    number_of_tokens допускает 0 на уровне модели: отказ по количеству
    формирует GATE 0, а не валидация модели.
    """

    caller: str = Field(..., description="Адрес вызывающего")
    origin: Optional[str] = Field(None, description="Адрес инициатора транзакции")
    number_of_tokens: int = Field(..., ge=0, description="Количество токенов")
    value_wei: int = Field(0, ge=0, description="Приложенная оплата (wei)")
    proof: Tuple[Union[bytes, str], ...] = Field(
        default=(), description="Merkle proof (sibling hashes) для presale"
    )

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def default_origin(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("origin") is None and "caller" in data:
            data = {**data, "origin": data["caller"]}
        return data

    @field_validator("caller", "origin")
    @classmethod
    def validate_address(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return normalize_address(v)

    @field_serializer("proof")
    def serialize_proof(self, proof: Tuple[Union[bytes, str], ...]) -> Tuple[str, ...]:
        """bytes узлы → 0x hex; строки остаются как есть (длину проверяет verifier)."""
        return tuple(
            "0x" + bytes(node).hex() if isinstance(node, (bytes, bytearray)) else node
            for node in proof
        )

    @property
    def is_first_party(self) -> bool:
        return self.caller == self.origin


class MintReceipt(BaseModel):
    """Результат успешного mint."""

    minter: str
    token_ids: Tuple[int, ...]
    paid_wei: int = Field(..., ge=0)
    phase: SalePhase
    quota_remaining: Optional[int] = Field(
        None, description="Остаток квоты после presale mint (None для public)"
    )

    model_config = {"frozen": True}

    @property
    def count(self) -> int:
        return len(self.token_ids)


class WithdrawalReceipt(BaseModel):
    """Результат вывода баланса owner-у."""

    recipient: str
    amount_wei: int = Field(..., gt=0)

    model_config = {"frozen": True}
