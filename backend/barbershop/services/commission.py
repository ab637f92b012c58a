"""
Commission Calculator - per-transaction commission/profit split.

The barber's commission is ``total_price * rate / 100`` rounded to cents;
the shop's profit is whatever remains after subtracting that rounded
commission. Profit is never rounded on its own, so commission + profit is
always exactly the transaction price.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from barbershop.core import config
from barbershop.domain.entities import (
    HUNDRED,
    CommissionSplit,
    validate_amount,
    validate_rate,
)

CENTS = Decimal("0.01")


def effective_rate(rate: Any) -> Decimal:
    """Return ``rate`` as Decimal, or the configured default when it is None.

    Raises:
        InvalidRate: if ``rate`` is present but outside [0, 100].
    """
    validated = validate_rate(rate)
    if validated is None:
        return config.DEFAULT_COMMISSION_RATE
    return validated


def commission_of(total_price: Any, rate: Optional[Any] = None) -> Decimal:
    """Commission owed to the barber for one transaction.

    Raises:
        InvalidAmount: for a negative or non-numeric ``total_price``.
        InvalidRate: for a non-numeric rate or one outside [0, 100].
    """
    amount = validate_amount(total_price)
    percentage = effective_rate(rate)
    commission = (amount * percentage / HUNDRED).quantize(CENTS, rounding=ROUND_HALF_UP)
    # Sub-cent prices could round above the price itself
    return min(commission, amount)


def split_of(total_price: Any, rate: Optional[Any] = None) -> CommissionSplit:
    """Split one transaction into barber commission and shop profit."""
    amount = validate_amount(total_price)
    commission = commission_of(amount, rate)
    return CommissionSplit(commission=commission, profit=amount - commission)
