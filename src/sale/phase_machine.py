"""Sale Phase State Machine — управление фазами продажи.

- Состояния CLOSED / PRESALE / PUBLIC хранятся одним значением
- Две независимые toggle-операции (flip_presale / flip_sale) для
  совместимости с поведением двух булевых флагов
- Вход в PUBLIC всегда гасит PRESALE; выход из PUBLIC не восстанавливает PRESALE
"""

import logging
from dataclasses import dataclass

from src.core.domain.sale_state import SalePhase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhaseTransitionResult:
    """Результат переключения фазы."""

    new_phase: SalePhase
    previous_phase: SalePhase

    # Диагностика
    transition_occurred: bool
    transition_reason: str

    # Для отладки
    details: str


class SalePhaseMachine:
    """Sale Phase State Machine.

    Transitions:
    - flip_presale: CLOSED → PRESALE, PRESALE → CLOSED, PUBLIC → PUBLIC (no-op)
    - flip_sale: CLOSED → PUBLIC, PRESALE → PUBLIC, PUBLIC → CLOSED

    Нет таймеров и терминального состояния: фазы переключаются сколько угодно,
    в том числе после достижения лимита выпуска.
    """

    def __init__(self, initial_phase: SalePhase = SalePhase.CLOSED):
        self._phase = initial_phase

    @property
    def phase(self) -> SalePhase:
        return self._phase

    @property
    def sale_is_active(self) -> bool:
        return self._phase.sale_is_active

    @property
    def presale_is_active(self) -> bool:
        return self._phase.presale_is_active

    def flip_presale(self) -> PhaseTransitionResult:
        """Инверсия presale флага.

        В PUBLIC флаг presale не может быть поднят (взаимоисключение),
        и public sale не завершается: фаза остаётся PUBLIC.
        """
        current = self._phase

        if current == SalePhase.PUBLIC:
            result = self._create_result(
                new_phase=current,
                previous_phase=current,
                transition_occurred=False,
                transition_reason="presale_suppressed_by_public_sale",
                details="flip_presale ignored: public sale is active",
            )
            logger.warning(result.details)
            return result

        new_phase = SalePhase.CLOSED if current == SalePhase.PRESALE else SalePhase.PRESALE
        return self._apply(current, new_phase, reason="flip_presale")

    def flip_sale(self) -> PhaseTransitionResult:
        """Инверсия public sale флага.

        Активация public sale гасит presale; деактивация переводит в CLOSED.
        """
        current = self._phase
        new_phase = SalePhase.CLOSED if current == SalePhase.PUBLIC else SalePhase.PUBLIC
        return self._apply(current, new_phase, reason="flip_sale")

    def _apply(
        self,
        current: SalePhase,
        new_phase: SalePhase,
        reason: str
    ) -> PhaseTransitionResult:
        self._phase = new_phase
        result = self._create_result(
            new_phase=new_phase,
            previous_phase=current,
            transition_occurred=True,
            transition_reason=f"{reason}_{current.value}_to_{new_phase.value}",
            details=f"Sale phase: {current.value} → {new_phase.value}"
        )
        logger.info(result.details)
        return result

    def _create_result(
        self,
        new_phase: SalePhase,
        previous_phase: SalePhase,
        transition_occurred: bool,
        transition_reason: str,
        details: str
    ) -> PhaseTransitionResult:
        """Создание результата перехода."""
        return PhaseTransitionResult(
            new_phase=new_phase,
            previous_phase=previous_phase,
            transition_occurred=transition_occurred,
            transition_reason=transition_reason,
            details=details
        )
