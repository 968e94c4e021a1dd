"""Mint — авторизация и исполнение mint.

- MintEngine: цепочка gates, списание квоты, выпуск через registry
- MerkleMintContract: owner-gating, сериализация, read-only аксессоры
"""

from .contract import MerkleMintContract
from .engine import GATE_ERRORS, MintEngine

__all__ = [
    "MerkleMintContract",
    "MintEngine",
    "GATE_ERRORS",
]
