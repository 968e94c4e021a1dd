"""
Domain models and value objects.

Contains fundamental domain entities: SalePhase, SaleConfig, MintRequest,
receipts, state snapshot, wei units and address identities.
"""

from src.core.domain.identity import address_bytes, normalize_address, same_identity
from src.core.domain.mint_request import MintReceipt, MintRequest, WithdrawalReceipt
from src.core.domain.sale_state import MintStateSnapshot, SaleConfig, SalePhase
from src.core.domain.units import (
    DEFAULT_TOKEN_PRICE_WEI,
    WEI_PER_ETHER,
    ether_to_wei,
    required_payment_wei,
    validate_wei,
    wei_to_ether,
)

__all__ = [
    # Units module
    "WEI_PER_ETHER",
    "DEFAULT_TOKEN_PRICE_WEI",
    "ether_to_wei",
    "wei_to_ether",
    "required_payment_wei",
    "validate_wei",
    # Identity
    "normalize_address",
    "address_bytes",
    "same_identity",
    # Sale state
    "SalePhase",
    "SaleConfig",
    "MintStateSnapshot",
    # Requests and receipts
    "MintRequest",
    "MintReceipt",
    "WithdrawalReceipt",
]
