"""
InMemoryTokenRegistry — реестр токенов в памяти

Эталонная реализация TokenRegistry для локального запуска и тестов.
"""

import logging
from collections import Counter
from typing import Dict

from src.core.domain.identity import normalize_address
from src.core.errors import TokenAlreadyIssued
from src.registry.base import TokenRegistry

logger = logging.getLogger(__name__)

# Владелец предвыпущенных id по умолчанию
ZERO_ADDRESS = "0x" + "00" * 20


class InMemoryTokenRegistry(TokenRegistry):
    """Registry на dict: token_id -> owner."""

    def __init__(self, preissued: int = 0, preissued_owner: str = ZERO_ADDRESS):
        self._owners: Dict[int, str] = {}
        self._balances: Counter = Counter()
        for token_id in range(preissued):
            self.issue(preissued_owner, token_id)

    def issue(self, owner: str, token_id: int) -> None:
        if token_id < 0:
            raise ValueError(f"token_id must be non-negative, got {token_id}")
        if token_id in self._owners:
            raise TokenAlreadyIssued(f"token {token_id} already issued")
        owner = normalize_address(owner)
        self._owners[token_id] = owner
        self._balances[owner] += 1
        logger.debug("Issued token %d to %s", token_id, owner)

    def revoke(self, token_id: int) -> None:
        owner = self._owners.pop(token_id)
        self._balances[owner] -= 1
        if self._balances[owner] == 0:
            del self._balances[owner]
        logger.debug("Revoked token %d from %s", token_id, owner)

    def total_issued(self) -> int:
        return len(self._owners)

    def owner_of(self, token_id: int) -> str:
        return self._owners[token_id]

    def balance_of(self, owner: str) -> int:
        return self._balances[normalize_address(owner)]
