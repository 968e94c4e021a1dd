"""
Config — настройки продажи из окружения

Переменные окружения с префиксом MINT_ (или .env файл):
- MINT_TOKEN_PRICE_WEI
- MINT_MAX_PURCHASE
- MINT_MAX_TOKENS
- MINT_MAX_PRESALE_QUOTA
- MINT_LOG_LEVEL
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.domain.sale_state import SaleConfig
from src.core.domain.units import DEFAULT_TOKEN_PRICE_WEI


class MintSettings(BaseSettings):
    # Sale parameters (immutable after contract construction)
    token_price_wei: int = DEFAULT_TOKEN_PRICE_WEI
    max_purchase: int = 21
    max_tokens: int = 10_000
    max_presale_quota: int = 3

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="MINT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def sale_config(self) -> SaleConfig:
        """Immutable SaleConfig из текущих настроек."""
        return SaleConfig(
            token_price_wei=self.token_price_wei,
            max_purchase=self.max_purchase,
            max_tokens=self.max_tokens,
            max_presale_quota=self.max_presale_quota,
        )


settings = MintSettings()
