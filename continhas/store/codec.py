"""JSON encoding of the ledger and notification settings.

Documents keep field names and types so that decode(encode(x)) rebuilds an
equal structure, ids included. Amounts are stored in centavos.
"""

import json
from typing import Any

from continhas.domain.models import (
    Expense,
    ExpenseCategory,
    Money,
    MonthData,
    NotificationSettings,
    PaymentStatus,
    YearData,
)
from continhas.domain.validation import validate_due_day


class CodecError(ValueError):
    """Raised when a stored document cannot be decoded."""


def expense_to_dict(expense: Expense) -> dict[str, Any]:
    return {
        "id": expense.id,
        "name": expense.name,
        "value": expense.value,
        "category": expense.category.value,
        "status": expense.status.value,
        "due_day": expense.due_day,
    }


def month_to_dict(month: MonthData) -> dict[str, Any]:
    return {
        "id": month.id,
        "month": month.month,
        "year": month.year,
        "income": month.income,
        "expenses": [expense_to_dict(expense) for expense in month.expenses],
    }


def year_to_dict(year: YearData) -> dict[str, Any]:
    return {
        "id": year.id,
        "year": year.year,
        "months": [month_to_dict(month) for month in year.months],
    }


def expense_from_dict(data: dict[str, Any]) -> Expense:
    due_day = data.get("due_day")
    return Expense(
        id=str(data["id"]),
        name=str(data["name"]),
        value=Money(int(data["value"])),
        category=ExpenseCategory.parse(str(data["category"])),
        status=PaymentStatus.parse(str(data["status"])),
        due_day=int(due_day) if due_day is not None else None,
    )


def month_from_dict(data: dict[str, Any]) -> MonthData:
    return MonthData(
        id=str(data["id"]),
        month=int(data["month"]),
        year=int(data["year"]),
        income=Money(int(data.get("income", 0))),
        expenses=[expense_from_dict(item) for item in data.get("expenses", [])],
    )


def year_from_dict(data: dict[str, Any]) -> YearData:
    return YearData(
        id=str(data["id"]),
        year=int(data["year"]),
        months=[month_from_dict(item) for item in data["months"]],
    )


def encode_years(years: list[YearData]) -> bytes:
    """Encode the ledger as a UTF-8 JSON document."""
    return json.dumps([year_to_dict(year) for year in years], ensure_ascii=False).encode("utf-8")


def decode_years(blob: bytes) -> list[YearData]:
    """Decode a ledger document.

    Raises:
        CodecError: If the blob is not a valid ledger document.
    """
    try:
        payload = json.loads(blob.decode("utf-8"))
        if not isinstance(payload, list):
            raise CodecError("Ledger document must be a list of years")
        return [year_from_dict(item) for item in payload]
    except CodecError:
        raise
    except (UnicodeDecodeError, json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
        raise CodecError(f"Invalid ledger document: {e}") from e


def encode_settings(settings: NotificationSettings) -> bytes:
    """Encode notification settings as a UTF-8 JSON document."""
    return json.dumps({"is_enabled": settings.is_enabled, "due_day": settings.due_day}).encode("utf-8")


def decode_settings(blob: bytes) -> NotificationSettings:
    """Decode a settings document, defaulting absent fields.

    Raises:
        CodecError: If the blob is not a valid settings document.
    """
    try:
        payload = json.loads(blob.decode("utf-8"))
        if not isinstance(payload, dict):
            raise CodecError("Settings document must be an object")
        defaults = NotificationSettings()
        due_day = int(payload.get("due_day", defaults.due_day))
        error = validate_due_day(due_day)
        if error:
            raise CodecError(error)
        return NotificationSettings(
            is_enabled=bool(payload.get("is_enabled", defaults.is_enabled)),
            due_day=due_day,
        )
    except CodecError:
        raise
    except (UnicodeDecodeError, json.JSONDecodeError, TypeError, ValueError) as e:
        raise CodecError(f"Invalid settings document: {e}") from e
