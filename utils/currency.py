"""Money conversion at the display boundary.

Amounts are stored in cents (integer). Dollars only exist on the way in
(form input) and on the way out (formatted strings).
"""

from decimal import Decimal, ROUND_HALF_UP


def to_cents(amount: float | int | str | Decimal) -> int:
    """
    Convert a dollar amount to integer cents.

    Goes through Decimal(str(...)) so 19.99 becomes 1999, not 1998.

    Raises:
        ValueError: If amount is not a finite number
    """
    value = Decimal(str(amount))
    if not value.is_finite():
        raise ValueError(f"Amount must be a finite number, got {amount!r}")
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_currency(amount_cents: int | str | Decimal | None) -> str:
    """
    Format an amount in cents as US dollars, e.g. 123456 -> "$1,234.56".

    Aggregate columns come back from Postgres as Decimal or None; both are
    accepted. None formats as $0.00.
    """
    cents = Decimal(str(amount_cents)) if amount_cents is not None else Decimal(0)
    dollars = (cents / 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"
