"""Тесты MintSettings (pydantic-settings, префикс MINT_)."""

import logging

from accounts import OWNER
from src.core.config import MintSettings, settings
from src.core.domain.units import DEFAULT_TOKEN_PRICE_WEI
from src.core.logging_utils import configure_logging
from src.mint import contract as contract_module


class TestMintSettings:

    def test_defaults(self, monkeypatch):
        for name in ["MINT_TOKEN_PRICE_WEI", "MINT_MAX_PURCHASE", "MINT_MAX_TOKENS"]:
            monkeypatch.delenv(name, raising=False)
        s = MintSettings(_env_file=None)
        assert s.token_price_wei == DEFAULT_TOKEN_PRICE_WEI
        assert s.max_tokens == 10_000

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("MINT_MAX_TOKENS", "500")
        monkeypatch.setenv("MINT_MAX_PRESALE_QUOTA", "1")
        config = MintSettings(_env_file=None).sale_config()
        assert config.max_tokens == 500
        assert config.max_presale_quota == 1


class TestConfigureLogging:

    def test_keeps_existing_handlers(self):
        root = logging.getLogger()
        before = list(root.handlers)
        configure_logging("DEBUG")
        if before:
            assert root.handlers == before
        else:
            assert len(root.handlers) == 1

    def test_contract_applies_settings_log_level(self, monkeypatch, allowlist_tree, registry):
        """MerkleMintContract настраивает логирование из settings.log_level."""
        levels = []
        monkeypatch.setattr(settings, "log_level", "WARNING")
        monkeypatch.setattr(contract_module, "configure_logging", levels.append)

        contract_module.MerkleMintContract(
            owner=OWNER, allowlist_root=allowlist_tree.root, registry=registry
        )

        assert levels == ["WARNING"]
