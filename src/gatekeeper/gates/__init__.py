"""Gates — индивидуальные гейты авторизации mint.

Порядок (дешёвые и общие проверки первыми):
- GATE 0: Форма запроса (0 < number_of_tokens < max_purchase)
- GATE 1: Достаточность оплаты
- GATE 2: Только прямой вызов (caller == origin)
- GATE 3: Фаза продажи для точки входа
- GATE 4: Глобальный лимит выпуска
- GATE 5: Merkle proof allowlist (только presale)
- GATE 6: Остаток presale квоты (только presale)
"""

from .gate_00_request_shape import Gate00RequestShape, Gate00Result
from .gate_01_payment import Gate01Payment, Gate01Result
from .gate_02_first_party import Gate02FirstParty, Gate02Result
from .gate_03_sale_phase import Gate03SalePhase, Gate03Result, MintEntryPoint
from .gate_04_supply_cap import Gate04SupplyCap, Gate04Result
from .gate_05_allowlist_proof import Gate05AllowlistProof, Gate05Result
from .gate_06_quota import Gate06Quota, Gate06Result

__all__ = [
    "Gate00RequestShape",
    "Gate00Result",
    "Gate01Payment",
    "Gate01Result",
    "Gate02FirstParty",
    "Gate02Result",
    "Gate03SalePhase",
    "Gate03Result",
    "MintEntryPoint",
    "Gate04SupplyCap",
    "Gate04Result",
    "Gate05AllowlistProof",
    "Gate05Result",
    "Gate06Quota",
    "Gate06Result",
]
