"""
Errors — таксономия отказов mint authorization

Все ошибки пользовательские, синхронные и не ретраятся без изменения входа.
Ни одна не восстанавливается внутри: отказ прерывает весь вызов без
частичной мутации состояния.
"""

from typing import Tuple


class MintError(Exception):
    """
    Базовый класс отказов.

    code — стабильный машиночитаемый идентификатор класса ошибки.
    block_reason — причина блокировки gate, вызвавшего отказ
    (например, code="insufficient_funds", block_reason="insufficient_payment");
    пустая строка, если отказ возник вне цепочки gates.
    """

    code: str = "mint_error"

    def __init__(self, message: str = "", block_reason: str = ""):
        super().__init__(message or self.code)
        self.message = message or self.code
        self.block_reason = block_reason


class InvalidRequest(MintError):
    """Нулевое количество или превышение лимита за вызов."""

    code = "invalid_request"


class InsufficientFunds(MintError):
    """Оплата меньше token_price * number_of_tokens."""

    code = "insufficient_funds"


class PhaseNotActive(MintError):
    """Фаза продаж не соответствует вызванной точке входа."""

    code = "phase_not_active"


class SupplyExceeded(MintError):
    """Выпуск нарушил бы глобальный лимит max_tokens."""

    code = "supply_exceeded"


class NotAllowlisted(MintError):
    """Merkle proof не прошёл проверку."""

    code = "not_allowlisted"


class InsufficientQuota(MintError):
    """Оставшаяся квота presale меньше запрошенного количества."""

    code = "insufficient_quota"


class ForbiddenIntermediary(MintError):
    """Вызов пришёл через посредника (caller != origin)."""

    code = "forbidden_intermediary"


class Unauthorized(MintError):
    """Не-owner вызвал owner-only операцию."""

    code = "unauthorized"


class NothingToWithdraw(MintError):
    """Баланс контракта равен нулю."""

    code = "nothing_to_withdraw"


# =============================================================================
# COLLABORATOR FAILURES
# =============================================================================


class TokenAlreadyIssued(MintError):
    """Registry: token id уже выпущен."""

    code = "token_already_issued"


class IssuanceFailed(MintError):
    """
    Registry отказал при выпуске.

    Квота и баланс всегда откатаны. unrevoked_ids — id, которые registry
    не смог отозвать при откате (пусто, если откат registry прошёл целиком).
    """

    code = "issuance_failed"

    def __init__(self, message: str = "", unrevoked_ids: Tuple[int, ...] = ()):
        super().__init__(message)
        self.unrevoked_ids = tuple(unrevoked_ids)


class WithdrawalFailed(MintError):
    """Funds sink отказал при переводе; баланс восстановлен."""

    code = "withdrawal_failed"
