"""Treasury — баланс оплат и owner-вывод средств."""

from .accessor import FundsSink, InMemoryFundsSink, Treasury

__all__ = [
    "FundsSink",
    "InMemoryFundsSink",
    "Treasury",
]
