"""USDC unit conversion.

Amounts cross the contract boundary as integers scaled by 10**6.  Human
facing values are :class:`decimal.Decimal`; conversion happens once, at the
edge.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, localcontext
from typing import Union

USDC_DECIMALS = 6

Amount = Union[int, str, float, Decimal]


def to_smallest_unit(amount: Amount, decimals: int = USDC_DECIMALS) -> int:
    """Convert a human-readable amount (e.g. ``"12.5"``) to base units.

    Floats are converted through ``str()`` so ``0.1`` means ``"0.1"``.

    Raises:
        ValueError: If *amount* is not a finite non-negative number or
            carries more fractional digits than *decimals*.
    """
    if isinstance(amount, bool):
        raise ValueError(f"invalid amount: {amount!r}")
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount).strip())
    except InvalidOperation as e:
        raise ValueError(f"invalid amount: {amount!r}") from e
    if not value.is_finite():
        raise ValueError(f"invalid amount: {amount!r}")
    if value < 0:
        raise ValueError(f"amount must not be negative: {amount!r}")

    with localcontext() as ctx:
        ctx.prec = 100
        scaled = value.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise ValueError(
            f"amount {amount!r} has more than {decimals} fractional digits"
        )
    return int(scaled)


def to_decimal(units: int, decimals: int = USDC_DECIMALS) -> Decimal:
    """Convert base units to a Decimal without any context rounding."""
    return Decimal(f"{int(units)}E-{decimals}")
