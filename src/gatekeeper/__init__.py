"""Gatekeeper — система гейтов для допуска mint к исполнению.

- 7 gates с фиксированным порядком
- Gates 0-4 общие для public и presale mint
- Gates 5-6 только для presale (proof и квота)
- Gates не мутируют состояние: списание квоты и выпуск делает MintEngine
"""

from .gates import (
    Gate00RequestShape,
    Gate01Payment,
    Gate02FirstParty,
    Gate03SalePhase,
    Gate04SupplyCap,
    Gate05AllowlistProof,
    Gate06Quota,
    MintEntryPoint,
)

__all__ = [
    "Gate00RequestShape",
    "Gate01Payment",
    "Gate02FirstParty",
    "Gate03SalePhase",
    "Gate04SupplyCap",
    "Gate05AllowlistProof",
    "Gate06Quota",
    "MintEntryPoint",
]
