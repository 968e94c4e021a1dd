"""
TokenRegistry — абстракция внешнего реестра токенов

Registry присваивает id и хранит владельцев выпущенных токенов.
MintEngine вызывает issue и total_issued, а revoke только для отката id,
выпущенных в том же неуспешном вызове. Запросы владения (owner_of,
balance_of) доступны вызывающим и тестам.
"""

from abc import ABC, abstractmethod


class TokenRegistry(ABC):
    """
    Реестр невзаимозаменяемых токенов.

    Реализация обязана:
    - отклонять повторный выпуск id (TokenAlreadyIssued)
    - учитывать каждый выпущенный id в total_issued()
    - поддерживать revoke, чтобы неуспешная партия не оставляла следов
    """

    @abstractmethod
    def issue(self, owner: str, token_id: int) -> None:
        """Выпуск токена token_id на адрес owner."""
        pass

    @abstractmethod
    def revoke(self, token_id: int) -> None:
        """Отзыв токена (KeyError, если id не выпущен)."""
        pass

    @abstractmethod
    def total_issued(self) -> int:
        """Количество выпущенных токенов."""
        pass

    @abstractmethod
    def owner_of(self, token_id: int) -> str:
        """Владелец выпущенного токена (KeyError, если id не выпущен)."""
        pass

    @abstractmethod
    def balance_of(self, owner: str) -> int:
        """Количество токенов у owner."""
        pass
