"""Pure functions for ledger aggregations.

This module contains the functional core for summary calculations:
- No I/O operations (no database, no console, no files)
- No side effects
- Recomputed on every read, nothing is cached

All monetary amounts are in centavos (Money type).
"""

from dataclasses import dataclass

from continhas.domain.models import CategoryTotal, ExpenseCategory, Money, MonthData, YearData


@dataclass(frozen=True)
class MonthSummary:
    """Immutable summary row for one month of a year."""

    month: int
    name: str
    income: Money
    total_expenses: Money
    balance: Money
    expense_count: int


def total_expenses(month: MonthData) -> Money:
    """Sum all expense values in the month.

    Args:
        month: Month slot.

    Returns:
        Total in centavos (0 for a month without expenses).
    """
    return Money(sum(expense.value for expense in month.expenses))


def balance(month: MonthData) -> Money:
    """Calculate income minus total expenses (can be negative)."""
    return Money(month.income - total_expenses(month))


def category_breakdown(month: MonthData) -> list[CategoryTotal]:
    """Group expenses by category and sort by total, largest first.

    Categories without expenses are omitted. Equal totals keep the order in
    which each category first appears in the expense list.

    Args:
        month: Month slot.

    Returns:
        List of CategoryTotal sorted descending by total.
    """
    totals: dict[ExpenseCategory, int] = {}
    for expense in month.expenses:
        totals[expense.category] = totals.get(expense.category, 0) + expense.value

    # sorted() is stable, so dict insertion order breaks ties
    ordered = sorted(totals.items(), key=lambda x: x[1], reverse=True)
    return [CategoryTotal(category=category, total=Money(total)) for category, total in ordered]


def year_totals(year: YearData) -> tuple[Money, Money]:
    """Sum income and expenses across the year's months.

    Returns:
        Tuple of (total_income, total_expenses).
    """
    income = Money(sum(month.income for month in year.months))
    expenses = Money(sum(total_expenses(month) for month in year.months))
    return income, expenses


def year_balance(year: YearData) -> Money:
    """Calculate the year's total income minus total expenses."""
    income, expenses = year_totals(year)
    return Money(income - expenses)


def category_share(total: Money, whole: Money) -> float:
    """Calculate a category's percentage of the month's expenses.

    Args:
        total: Category total in centavos.
        whole: Month total in centavos.

    Returns:
        Percentage 0-100, or 0.0 when the month has no expenses.
    """
    if whole <= 0:
        return 0.0
    return (total / whole) * 100


def month_summaries(year: YearData) -> list[MonthSummary]:
    """Build one summary row per month, January first."""
    return [
        MonthSummary(
            month=month.month,
            name=month.month_name,
            income=month.income,
            total_expenses=total_expenses(month),
            balance=balance(month),
            expense_count=len(month.expenses),
        )
        for month in sorted(year.months, key=lambda m: m.month)
    ]
