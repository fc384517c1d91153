"""Helpers shared by the CLI commands."""

import sqlite3
import sys

from rich.console import Console

from continhas.app import AppContext, build_context
from continhas.dates import current_slot, parse_month
from continhas.domain.models import Expense, Money, MonthData
from continhas.domain.validation import format_currency

console = Console()


def load_context() -> AppContext:
    """Build the application context, exiting on a database or config error."""
    try:
        context = build_context()
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}[/red]", style="bold")
        sys.exit(1)

    if not context.repository.persistent:
        console.print("[yellow]Could not read your saved data. Changes in this run will not be saved.[/yellow]")
    return context


def resolve_slot(month: str | None) -> tuple[int, int]:
    """Turn a --month option (YYYY-MM) into a slot, defaulting to today."""
    if not month:
        return current_slot()
    try:
        return parse_month(month)
    except ValueError:
        console.print(f"[red]Invalid month '{month}' (expected YYYY-MM)[/red]")
        sys.exit(1)


def require_month(context: AppContext, year: int, month: int) -> MonthData:
    """Return the month slot or exit with a hint when its year is missing."""
    month_data = context.repository.get_month(year, month)
    if month_data is None:
        console.print(f"[yellow]No data for {year}. Run 'continhas year {year}' to create it.[/yellow]")
        sys.exit(1)
    return month_data


def expense_at(month_data: MonthData, number: int) -> Expense:
    """Return the expense shown as ``number`` (1-based) or exit."""
    if not 1 <= number <= len(month_data.expenses):
        console.print(f"[red]Invalid selection {number} (1-{len(month_data.expenses)})[/red]")
        sys.exit(1)
    return month_data.expenses[number - 1]


def money_display(amount: Money, negative_style: str = "red", positive_style: str = "green") -> str:
    """Format money with rich color markup by sign."""
    style = negative_style if amount < 0 else positive_style
    return f"[{style}]{format_currency(amount)}[/{style}]"
