"""Money helpers.

Aggregation happens in integer minor units (cents) so large sums do not
drift; Decimal major units are only produced at the boundary.
"""

from decimal import Decimal, ROUND_HALF_UP

CENTS = Decimal("0.01")
ONE_DECIMAL = Decimal("0.1")


def to_minor_units(amount: Decimal) -> int:
    """Convert a major-unit amount to integer cents, rounding half up."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor_units(minor: int) -> Decimal:
    """Convert integer cents back to a two-place Decimal."""
    return (Decimal(minor) / 100).quantize(CENTS)


def quantize_amount(amount: Decimal) -> Decimal:
    """Round an amount to cents."""
    return Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)


def format_currency(amount: Decimal) -> str:
    """Format an amount as USD for display, e.g. ``$1,234.50`` or ``-$20.00``."""
    amount = quantize_amount(amount)
    if amount < 0:
        return f"-${-amount:,.2f}"
    return f"${amount:,.2f}"


def format_change(change: Decimal | None) -> str:
    """Format a percentage change, or N/A when it is not applicable."""
    if change is None:
        return "N/A"
    change = Decimal(change).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)
    if change == 0:
        change = abs(change)
    sign = "+" if change > 0 else ""
    return f"{sign}{change}%"
