"""Fixed-rate conversion between the display currency and the gateway currency.

Order totals are stored in order meta as plain two-place decimal strings
(``"1234.50"``, never ``"1,234.50"``) so they round-trip through
:class:`~decimal.Decimal` without locale handling.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENTS = Decimal("0.01")


def convert(amount: Decimal, rate: Decimal) -> Decimal:
    """Convert *amount* at *rate*, rounded half-up to two decimal places.

    Args:
        amount: Amount in the display currency.
        rate: Units of gateway currency per unit of display currency.

    Returns:
        The converted amount, e.g. ``convert(Decimal("100.00"), Decimal("0.37")) == Decimal("37.00")``.
    """
    return (Decimal(amount) * Decimal(rate)).quantize(CENTS, rounding=ROUND_HALF_UP)


def to_meta(amount: Decimal) -> str:
    """Render *amount* as the two-place string kept in order meta."""
    return str(Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP))


def from_meta(value: str | None) -> Decimal:
    """Parse an order meta total, tolerating grouping commas.

    Empty or malformed values yield ``Decimal("0.00")``.
    """
    if not value:
        return Decimal("0.00")
    try:
        amount = Decimal(value.replace(",", "").strip())
    except InvalidOperation:
        return Decimal("0.00")
    if not amount.is_finite():
        return Decimal("0.00")
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
