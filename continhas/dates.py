"""Date utilities for continhas.

Pure functions for month labels, slot arithmetic and reminder times.
"""

from datetime import date, datetime

MONTH_NAMES = (
    "Janeiro",
    "Fevereiro",
    "Março",
    "Abril",
    "Maio",
    "Junho",
    "Julho",
    "Agosto",
    "Setembro",
    "Outubro",
    "Novembro",
    "Dezembro",
)

# Reminders fire at 09:00 local time on the due day
REMINDER_HOUR = 9


def month_name(month: int) -> str:
    """Return the capitalised pt_BR month name, or "" for an invalid month."""
    if not 1 <= month <= 12:
        return ""
    return MONTH_NAMES[month - 1]


def previous_month(year: int, month: int) -> tuple[int, int]:
    """Return the (year, month) slot before the given one.

    January rolls back to December of the previous year.
    """
    if month == 1:
        return year - 1, 12
    return year, month - 1


def parse_month(value: str) -> tuple[int, int]:
    """Parse a YYYY-MM string into a (year, month) slot.

    Raises:
        ValueError: If the string is not a valid month.
    """
    dt = datetime.strptime(value, "%Y-%m")
    return dt.year, dt.month


def current_slot(today: date | None = None) -> tuple[int, int]:
    """Return the (year, month) slot for today."""
    today = today or date.today()
    return today.year, today.month


def reminder_datetime(year: int, month: int, day: int) -> datetime | None:
    """Return when a reminder for the given due date fires.

    Args:
        year: Calendar year.
        month: Month 1-12.
        day: Due day of the month.

    Returns:
        Datetime at REMINDER_HOUR on that date, or None if the date does not
        exist (e.g. 31 February).
    """
    try:
        return datetime(year, month, day, REMINDER_HOUR, 0)
    except ValueError:
        return None
