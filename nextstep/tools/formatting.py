"""Display helpers shared by the NextStep copy: currency and plural nouns."""

from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Optional

_CENTS = Decimal("0.01")


def _to_decimal(amount: Decimal | float | int) -> Decimal:
    """Convert to Decimal via the shortest repr so 1.005 stays 1.005, not 1.00499..."""
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))


def round_to_cents(amount: Decimal | float | int) -> Decimal:
    """Round half away from zero to whole cents, at any magnitude."""
    value = _to_decimal(amount)
    with localcontext() as ctx:
        # Integer digits plus the two decimal places
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(_CENTS, rounding=ROUND_HALF_UP)


def format_money(amount: Decimal | float | int) -> str:
    """
    Format an amount as US dollars with two decimals and thousands separators.

    Halves round away from zero (1234.505 -> "$1,234.51"). Negative amounts
    render as "-$1.00". Zero never carries a sign.
    """
    value = round_to_cents(amount)
    if value.is_zero():
        return "$0.00"

    prefix = "-" if value < 0 else ""
    return f"{prefix}${abs(value):,.2f}"


def pluralize(count: int, singular: str, plural: Optional[str] = None) -> str:
    """Pick the noun form for ``count``: singular only for exactly 1."""
    if count == 1:
        return singular
    return plural if plural is not None else f"{singular}s"


def count_noun(count: int, singular: str, plural: Optional[str] = None) -> str:
    """'1 debt account', '0 debt accounts', '3 debt accounts'"""
    return f"{count} {pluralize(count, singular, plural)}"
