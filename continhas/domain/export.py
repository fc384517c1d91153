"""Pure functions for the delimited ledger report.

Row layout:
- One header row.
- Years ascending, then months 1-12.
- A month with neither income nor expenses is skipped.
- A month with income but no expenses gives one row with the aggregate
  columns filled and the expense columns blank.
- A month with expenses gives one row per expense; only the first carries
  the aggregate columns (year, month, income, total, balance).

Numbers use a comma decimal separator and no thousands separator.
"""

import pandas as pd

from continhas.domain.aggregation import balance, total_expenses
from continhas.domain.models import CONTINHAS, AppProfile, Expense, Money, MonthData, YearData
from continhas.domain.validation import format_decimal

SEPARATOR = ";"

AGGREGATE_COLUMNS = ["Ano", "Mes", "Entrada", "Total Gastos", "Saldo"]
EXPENSE_COLUMNS = ["Conta", "Valor", "Categoria", "Status"]
DUE_DAY_COLUMN = "Vencimento"


def report_columns(profile: AppProfile = CONTINHAS) -> list[str]:
    """Return the header labels for the given app profile."""
    columns = AGGREGATE_COLUMNS + EXPENSE_COLUMNS
    if profile.per_expense_due_dates:
        columns = columns + [DUE_DAY_COLUMN]
    return columns


def format_due_day(due_day: int | None) -> str:
    """Format a due day cell (e.g., "Dia 10"), blank when absent."""
    if due_day is None:
        return ""
    return f"Dia {due_day}"


def _aggregate_cells(year: int, month: MonthData) -> list[str]:
    return [
        str(year),
        month.month_name,
        format_decimal(month.income),
        format_decimal(total_expenses(month)),
        format_decimal(balance(month)),
    ]


def _expense_cells(expense: Expense | None, profile: AppProfile) -> list[str]:
    width = len(EXPENSE_COLUMNS) + (1 if profile.per_expense_due_dates else 0)
    if expense is None:
        return [""] * width

    cells = [
        expense.name,
        format_decimal(expense.value),
        expense.category.display(profile),
        expense.status.label,
    ]
    if profile.per_expense_due_dates:
        cells.append(format_due_day(expense.due_day))
    return cells


def month_rows(year: int, month: MonthData, profile: AppProfile = CONTINHAS) -> list[list[str]]:
    """Build the report rows for one month.

    Args:
        year: Year number written in the first row.
        month: Month slot.
        profile: App profile deciding labels and the due-day column.

    Returns:
        List of rows (each a list of cells); empty for a month with no data.
    """
    if not month.expenses:
        if month.income <= Money(0):
            return []
        return [_aggregate_cells(year, month) + _expense_cells(None, profile)]

    blank_aggregates = [""] * len(AGGREGATE_COLUMNS)
    rows: list[list[str]] = []
    for index, expense in enumerate(month.expenses):
        leading = _aggregate_cells(year, month) if index == 0 else blank_aggregates
        rows.append(leading + _expense_cells(expense, profile))
    return rows


def report_rows(years: list[YearData], profile: AppProfile = CONTINHAS) -> list[list[str]]:
    """Build all data rows of the report, years and months ascending."""
    rows: list[list[str]] = []
    for year in sorted(years, key=lambda y: y.year):
        for month in sorted(year.months, key=lambda m: m.month):
            rows.extend(month_rows(year.year, month, profile))
    return rows


def report_frame(years: list[YearData], profile: AppProfile = CONTINHAS) -> pd.DataFrame:
    """Build the report as a string-typed DataFrame."""
    return pd.DataFrame(report_rows(years, profile), columns=report_columns(profile), dtype=str)


def generate_report(years: list[YearData], profile: AppProfile = CONTINHAS) -> str:
    """Render the ledger as ";"-separated text with a header row.

    Args:
        years: Full ledger snapshot.
        profile: App profile deciding labels and the due-day column.

    Returns:
        Report text, rows separated by newlines.
    """
    return report_frame(years, profile).to_csv(sep=SEPARATOR, index=False, lineterminator="\n")
