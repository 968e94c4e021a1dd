"""Allowlist — Merkle проверка членства и presale квоты.

- merkle: sorted-pair Merkle proof verifier (чистые функции)
- quota_ledger: per-identity остатки квот с lazy default
"""

from .merkle import (
    NODE_SIZE,
    coerce_node,
    coerce_root,
    hash_leaf,
    hash_pair,
    process_proof,
    verify,
    verify_address,
)
from .quota_ledger import QuotaCheckpoint, QuotaLedger

__all__ = [
    "NODE_SIZE",
    "coerce_node",
    "coerce_root",
    "hash_leaf",
    "hash_pair",
    "process_proof",
    "verify",
    "verify_address",
    "QuotaCheckpoint",
    "QuotaLedger",
]
