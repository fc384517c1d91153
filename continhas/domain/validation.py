"""Pure functions for input validation and money formatting.

Rejected input never reaches the ledger: the shell validates first and only
builds an Expense from values that pass.

All monetary amounts are in centavos (Money type).
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from continhas.domain.models import Money

_CURRENCY_PREFIX = re.compile(r"^R\$", re.IGNORECASE)
_DOT_DECIMAL = re.compile(r"^-?\d*\.\d{1,2}$")


def validate_expense(name: str, value: Money | None, due_day: int | None = None) -> str | None:
    """Validate the fields of an expense form.

    Args:
        name: Expense name.
        value: Parsed amount in centavos (None when the input did not parse).
        due_day: Optional due day of the month.

    Returns:
        Error message, or None if the input is valid.
    """
    if not name.strip():
        return "Name must not be empty"

    if value is None:
        return "Value is not a valid amount"

    if value <= 0:
        return "Value must be greater than zero"

    if due_day is not None and not 1 <= due_day <= 31:
        return "Due day must be between 1 and 31"

    return None


def validate_due_day(due_day: int) -> str | None:
    """Validate a reminder day for the monthly reminder."""
    if not 1 <= due_day <= 31:
        return "Due day must be between 1 and 31"
    return None


def parse_money(text: str) -> Money | None:
    """Parse a user-typed amount into centavos.

    Accepts Brazilian formatting ("R$ 1.200,50", "1200,50") as well as a
    plain dot decimal ("1200.50"). With a comma present, dots are thousands
    separators.

    Args:
        text: Raw input.

    Returns:
        Amount in centavos rounded half-up, or None if the text is not a number.
    """
    cleaned = _CURRENCY_PREFIX.sub("", text.strip()).replace(" ", "")
    if not cleaned:
        return None

    if "," in cleaned:
        cleaned = cleaned.replace(".", "").replace(",", ".")
    elif not _DOT_DECIMAL.match(cleaned):
        cleaned = cleaned.replace(".", "")

    try:
        amount = Decimal(cleaned)
        if not amount.is_finite():
            return None
        # Raises when the amount has more digits than the context precision
        cents = (amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None

    return Money(int(cents))


def format_decimal(amount: Money, grouping: bool = False) -> str:
    """Format centavos with a comma decimal separator.

    Args:
        amount: Amount in centavos.
        grouping: Whether to insert "." thousands separators.

    Returns:
        Formatted string (e.g., "1200,50", "1.200,50" or "-15,25").
    """
    sign = "-" if amount < 0 else ""
    units, cents = divmod(abs(amount), 100)
    units_str = f"{units:,}".replace(",", ".") if grouping else str(units)
    return f"{sign}{units_str},{cents:02d}"


def format_currency(amount: Money) -> str:
    """Format money for on-screen display (e.g., "R$ 1.200,50")."""
    if amount < 0:
        return f"-R$ {format_decimal(Money(-amount), grouping=True)}"
    return f"R$ {format_decimal(amount, grouping=True)}"
