"""Общие fixtures для unit тестов mint системы."""

import pytest

from accounts import ALICE, BOB, CAROL, DAVE, EVE, OWNER, PRICE_WEI
from merkle_builder import SortedPairMerkleTree
from src.core.domain.sale_state import SaleConfig
from src.mint.contract import MerkleMintContract
from src.registry.memory import InMemoryTokenRegistry
from src.treasury.accessor import InMemoryFundsSink


@pytest.fixture
def sale_config():
    """Параметры продажи: цена 0.5 ether, лимит 21 за вызов, квота 3."""
    return SaleConfig(
        token_price_wei=PRICE_WEI,
        max_purchase=21,
        max_tokens=10_000,
        max_presale_quota=3,
    )


@pytest.fixture
def allowlist_tree():
    """Allowlist из шести адресов."""
    return SortedPairMerkleTree([OWNER, ALICE, BOB, CAROL, DAVE, EVE])


@pytest.fixture
def registry():
    return InMemoryTokenRegistry()


@pytest.fixture
def funds_sink():
    return InMemoryFundsSink()


@pytest.fixture
def contract(allowlist_tree, registry, funds_sink, sale_config):
    return MerkleMintContract(
        owner=OWNER,
        allowlist_root=allowlist_tree.root,
        registry=registry,
        funds_sink=funds_sink,
        config=sale_config,
    )
