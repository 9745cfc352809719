"""Conversions between API decimal amounts and stored minor units."""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, InvalidOperation

CENTS = Decimal("0.01")


def to_cents(amount: Decimal | int | str) -> int:
    """Convert a decimal amount with at most two fractional digits into cents.

    Raises ``ValueError`` for non-finite values or sub-cent precision.
    """
    try:
        value = Decimal(str(amount))
        quantized = value.quantize(CENTS)
    except InvalidOperation as exc:
        # quantize raises for infinities and magnitudes beyond the context precision
        raise ValueError(f"invalid amount: {amount!r}") from exc
    if value != quantized:
        raise ValueError("amount supports at most two decimal places")
    return int(quantized * 100)


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENTS)


def net_of_fee(gross_cents: int, fee_percentage: Decimal) -> int:
    """Return what the faculty keeps after the platform fee, rounded down to the cent."""
    share = Decimal(gross_cents) * (Decimal(100) - fee_percentage) / Decimal(100)
    return int(share.to_integral_value(rounding=ROUND_DOWN))


__all__ = ["to_cents", "from_cents", "net_of_fee"]
