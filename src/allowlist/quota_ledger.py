"""
Quota Ledger — остатки presale квот по участникам

Lazy-default семантика: участник без записи владеет полной квотой
default_quota. Запись появляется при первом успешном consume и дальше
только уменьшается.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Остаток никогда не отрицательный
2. available_quota не возрастает во времени (кроме rollback неуспешного вызова)
3. consume списывает ровно amount или не списывает ничего
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from src.core.domain.identity import normalize_address
from src.core.errors import InsufficientQuota, InvalidRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuotaCheckpoint:
    """Сохранённая запись участника до consume (для rollback)."""

    identity: str
    previous: Optional[int]


class QuotaLedger:
    """Per-identity остатки квот с get-or-default чтением."""

    def __init__(self, default_quota: int):
        """
        Args:
            default_quota: квота участника без записи
        """
        if default_quota < 0:
            raise ValueError(f"default_quota must be non-negative, got {default_quota}")
        self.default_quota = default_quota
        self._remaining: Dict[str, int] = {}

    def available_quota(self, identity: str) -> int:
        """Остаток квоты: запись или default_quota если записи нет."""
        key = normalize_address(identity)
        return self._remaining.get(key, self.default_quota)

    def checkpoint(self, identity: str) -> QuotaCheckpoint:
        key = normalize_address(identity)
        return QuotaCheckpoint(identity=key, previous=self._remaining.get(key))

    def consume(self, identity: str, amount: int) -> int:
        """
        Списание amount из квоты участника.

        Args:
            identity: адрес участника
            amount: количество (> 0)

        Returns:
            Новый остаток

        Raises:
            InvalidRequest: Если amount <= 0
            InsufficientQuota: Если amount > available_quota(identity)
        """
        if amount <= 0:
            raise InvalidRequest(f"quota amount must be positive, got {amount}")

        key = normalize_address(identity)
        available = self._remaining.get(key, self.default_quota)
        if amount > available:
            raise InsufficientQuota(
                f"requested {amount} exceeds remaining quota {available} for {key}"
            )

        remaining = available - amount
        self._remaining[key] = remaining
        logger.debug("Quota consumed: identity=%s amount=%d remaining=%d", key, amount, remaining)
        return remaining

    def rollback(self, checkpoint: QuotaCheckpoint) -> None:
        """Восстановление записи участника из checkpoint."""
        if checkpoint.previous is None:
            self._remaining.pop(checkpoint.identity, None)
        else:
            self._remaining[checkpoint.identity] = checkpoint.previous
        logger.debug("Quota rolled back: identity=%s", checkpoint.identity)

    def entries(self) -> Mapping[str, int]:
        """Read-only представление записанных остатков."""
        return MappingProxyType(self._remaining)
