"""
Location: python/paypals_sdk/money.py

Summary:
    Fixed-point money helpers. All amounts are decimal.Decimal quantized
    to cents with ROUND_HALF_UP, the convention used for currency
    display. Floats are converted through str() so binary rounding
    artifacts never enter a calculation.

Usage:
    Shared by payload.py (amount field formatting) and split.py
    (share allocation).

Example:
    from paypals_sdk.money import allocate_evenly, to_money

    to_money("10")                        # Decimal("10.00")
    allocate_evenly(Decimal("10.00"), 3)  # [3.34, 3.33, 3.33]
    allocate_evenly(Decimal("0.02"), 4)   # [0.02, 0.00, 0.00, 0.00]
"""

from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

CENT = Decimal("0.01")

MoneyInput = Union[Decimal, int, float, str]


class InvalidAmount(ValueError):
    """Exception raised for negative, non-finite, non-numeric or oversized amounts."""
    pass


def to_decimal(value: MoneyInput, name: str = "amount") -> Decimal:
    """
    Convert input to a finite, non-negative Decimal without rounding.

    Args:
        value: Amount or rate as Decimal, int, float or numeric string
        name: Label used in error messages

    Returns:
        The value as Decimal

    Raises:
        InvalidAmount: If value is negative, NaN, infinite or not numeric
    """
    if isinstance(value, bool):
        raise InvalidAmount(f"{name} must be numeric, got {value!r}")
    try:
        if isinstance(value, float):
            result = Decimal(str(value))
        else:
            result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmount(f"{name} must be numeric, got {value!r}") from None

    if not result.is_finite():
        raise InvalidAmount(f"{name} must be finite, got {value!r}")
    if result < 0:
        raise InvalidAmount(f"{name} must not be negative, got {value!r}")
    return result


def quantize(value: Decimal, rounding: str = ROUND_HALF_UP) -> Decimal:
    """
    Round a Decimal to cents, half up unless told otherwise.

    Raises:
        InvalidAmount: If the value has too many digits to carry cents
            in the current decimal context
    """
    try:
        return value.quantize(CENT, rounding=rounding)
    except InvalidOperation:
        raise InvalidAmount(f"amount {value} is too large to represent in cents") from None


def to_money(value: MoneyInput, name: str = "amount") -> Decimal:
    """
    Validate and round an amount to cents.

    Raises:
        InvalidAmount: See to_decimal() and quantize()
    """
    return quantize(to_decimal(value, name))


def format_amount(value: Decimal) -> str:
    """Render a money amount with exactly two fractional digits."""
    return f"{quantize(value):.2f}"


def allocate_evenly(total: Decimal, count: int) -> list[Decimal]:
    """
    Divide a cent amount into count shares that sum exactly to total.

    Each share is total / count rounded down to cents. The remainder,
    always between zero and count - 1 cents, is added to the first
    share, so no share is ever negative.

    Args:
        total: Amount already quantized to cents
        count: Number of shares, at least 1

    Returns:
        List of count shares
    """
    share = quantize(total / count, ROUND_DOWN)
    shares = [share] * count
    shares[0] = total - share * (count - 1)
    return shares


def allocate_by_weights(
    total: Decimal,
    weights: list[Decimal],
    remainder_correction: bool = False,
) -> list[Decimal]:
    """
    Split a cent amount proportionally to weights.

    Each share is total * weight rounded to cents independently. With
    remainder_correction the weights are normalized to sum to 1, each
    share is rounded down and the first share absorbs the non-negative
    remainder, as in allocate_evenly().

    Args:
        total: Amount already quantized to cents
        weights: Fractions, expected to sum to roughly 1
        remainder_correction: Force the shares to sum to total

    Returns:
        One share per weight
    """
    weight_total = sum(weights, Decimal("0"))
    if not remainder_correction or not weight_total:
        return [quantize(total * w) for w in weights]

    shares = [quantize(total * w / weight_total, ROUND_DOWN) for w in weights]
    shares[0] += total - sum(shares, Decimal("0"))
    return shares
