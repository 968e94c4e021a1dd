"""
Units — Централизованный модуль конверсии денежных единиц

Единственный допустимый способ преобразований между:
- wei (целое, минимальная единица оплаты)
- ether (Decimal, человекочитаемая единица)
- required payment (token_price_wei × number_of_tokens)

ЗАПРЕЩЕНО сравнивать оплату с ценой в float: все расчёты в целых wei.
"""

from decimal import Decimal, InvalidOperation
from typing import Final, Union


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Количество wei в одном ether
WEI_PER_ETHER: Final[int] = 10**18

# Цена токена по умолчанию (0.5 ether)
DEFAULT_TOKEN_PRICE_WEI: Final[int] = 500_000_000_000_000_000


# =============================================================================
# БАЗОВЫЕ КОНВЕРТЕРЫ
# =============================================================================


def ether_to_wei(amount: Union[str, int, Decimal]) -> int:
    """
    Конверсия: ether → wei

    Args:
        amount: Количество ether (строка, int или Decimal; float запрещён)

    Returns:
        Целое количество wei

    Raises:
        ValueError: Если значение отрицательное, дробное в wei или не число
    """
    if isinstance(amount, float):
        raise ValueError("float amounts are not allowed, pass str or Decimal")
    try:
        value = Decimal(amount)
    except InvalidOperation:
        raise ValueError(f"amount is not a number: {amount!r}")

    if value < 0:
        raise ValueError(f"amount must be non-negative, got {value}")

    wei = value * WEI_PER_ETHER
    if wei != wei.to_integral_value():
        raise ValueError(f"amount {value} has more precision than 1 wei")
    return int(wei)


def wei_to_ether(amount_wei: int) -> Decimal:
    """
    Конверсия: wei → ether

    Args:
        amount_wei: Количество wei

    Returns:
        Decimal ether (без потери точности)
    """
    validate_wei(amount_wei, "amount_wei")
    return Decimal(amount_wei) / Decimal(WEI_PER_ETHER)


def required_payment_wei(token_price_wei: int, number_of_tokens: int) -> int:
    """
    Минимальная оплата за number_of_tokens.

    required = token_price_wei * number_of_tokens

    Args:
        token_price_wei: Цена одного токена (wei)
        number_of_tokens: Количество токенов

    Returns:
        Требуемая оплата (wei)
    """
    validate_wei(token_price_wei, "token_price_wei")
    if number_of_tokens < 0:
        raise ValueError(f"number_of_tokens must be non-negative, got {number_of_tokens}")
    return token_price_wei * number_of_tokens


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_wei(amount_wei: int, name: str = "amount_wei") -> None:
    """
    Проверка, что значение — неотрицательное целое wei.

    bool исключается явно (bool — подкласс int).

    Raises:
        ValueError: Если значение не int или отрицательное
    """
    if isinstance(amount_wei, bool) or not isinstance(amount_wei, int):
        raise ValueError(f"{name} must be an integer amount of wei, got {amount_wei!r}")
    if amount_wei < 0:
        raise ValueError(f"{name} must be non-negative, got {amount_wei}")
