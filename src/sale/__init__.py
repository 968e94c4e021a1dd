"""Sale — управление фазами продажи.

- SalePhaseMachine: CLOSED / PRESALE / PUBLIC с owner-переключателями
- Взаимоисключение PUBLIC и PRESALE
"""

from .phase_machine import (
    SalePhaseMachine,
    PhaseTransitionResult,
)

__all__ = [
    "SalePhaseMachine",
    "PhaseTransitionResult",
]
