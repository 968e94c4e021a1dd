"""
SaleState — Модели фаз продажи, конфигурации и снапшота состояния

Immutable Pydantic модели:
- SalePhase: CLOSED / PRESALE / PUBLIC (одно значение вместо двух флагов)
- SaleConfig: цена и лимиты, фиксируются при создании контракта
- MintStateSnapshot: снапшот состояния контракта
  (совместим с contracts/schema/mint_state.json)
"""

from enum import Enum
from typing import Dict

from pydantic import BaseModel, Field, field_validator

from .units import DEFAULT_TOKEN_PRICE_WEI


# =============================================================================
# ENUMS
# =============================================================================


class SalePhase(str, Enum):
    """
    Фаза продажи.

    PUBLIC и PRESALE взаимоисключающие по построению.
    """

    CLOSED = "CLOSED"
    PRESALE = "PRESALE"
    PUBLIC = "PUBLIC"

    @property
    def sale_is_active(self) -> bool:
        return self is SalePhase.PUBLIC

    @property
    def presale_is_active(self) -> bool:
        return self is SalePhase.PRESALE


# =============================================================================
# SALE CONFIG
# =============================================================================


class SaleConfig(BaseModel):
    """
    Неизменяемые параметры продажи.

    max_purchase — ИСКЛЮЧАЮЩАЯ верхняя граница количества за вызов:
    допустимо 1 <= number_of_tokens < max_purchase.
    """

    token_price_wei: int = Field(
        DEFAULT_TOKEN_PRICE_WEI, ge=0, description="Цена одного токена (wei)"
    )
    max_purchase: int = Field(
        21, ge=2, description="Исключающий лимит количества токенов за вызов"
    )
    max_tokens: int = Field(10_000, gt=0, description="Глобальный лимит выпуска")
    max_presale_quota: int = Field(
        3, ge=0, description="Квота presale по умолчанию для каждого участника"
    )

    model_config = {"frozen": True}


# =============================================================================
# SNAPSHOT
# =============================================================================


class MintStateSnapshot(BaseModel):
    """
    Снапшот состояния контракта.

    Полная совместимость с JSON Schema (contracts/schema/mint_state.json).
    """

    schema_version: str = Field("1", description="Версия схемы снапшота")
    owner: str = Field(..., min_length=42, max_length=42, description="Owner адрес")
    allowlist_root: str = Field(..., description="Merkle root allowlist (0x hex)")
    phase: SalePhase = Field(..., description="Текущая фаза продажи")
    sale_is_active: bool
    presale_is_active: bool
    total_issued: int = Field(..., ge=0)
    balance_wei: int = Field(..., ge=0)
    config: SaleConfig
    quota_entries: Dict[str, int] = Field(
        default_factory=dict, description="Записанные остатки квот по адресам"
    )

    model_config = {"frozen": True}

    @field_validator("allowlist_root")
    @classmethod
    def validate_root_hex(cls, v: str) -> str:
        """Root — 32 байта в hex с префиксом 0x."""
        if not v.startswith("0x") or len(v) != 66:
            raise ValueError(f"allowlist_root must be 0x-prefixed 32-byte hex, got {v!r}")
        int(v, 16)
        return v

    @field_validator("quota_entries")
    @classmethod
    def validate_quota_non_negative(cls, v: Dict[str, int]) -> Dict[str, int]:
        for address, remaining in v.items():
            if remaining < 0:
                raise ValueError(f"negative quota for {address}: {remaining}")
        return v
