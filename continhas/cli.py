"""CLI entry point for continhas."""

import logging

import typer

from continhas.commands.admin import backup_command, config_command, init_command, reset_command
from continhas.commands.expenses import (
    add_command,
    copy_command,
    delete_command,
    edit_command,
    income_command,
    month_command,
    pay_command,
    year_command,
)
from continhas.commands.notify import notify_command, reminders_command
from continhas.commands.report import export_command, summary_command, years_command
from continhas.config import load_config_or_default
from continhas.log import configure_logging, resolve_level

app = typer.Typer(
    name="continhas",
    help="Continhas - monthly income and expense tracking",
    add_completion=False,
)

MONTH_HELP = "Month (YYYY-MM, default: current month)"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
) -> None:
    """Continhas - monthly income and expense tracking."""
    if verbose:
        configure_logging(logging.DEBUG)
        return

    try:
        level_name = load_config_or_default().get("log_level")
    except ValueError:
        # Unreadable config is reported by the command that loads it
        level_name = None
    configure_logging(resolve_level(level_name))


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
) -> None:
    """Initialize continhas database and configuration."""
    init_command(force)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: ~/.continhas/backups)"),
) -> None:
    """Backup your database and configuration files."""
    backup_command(output_dir)


@app.command(name="config")
def config(
    key: str = typer.Argument(None, help="Option to set (profile, export_dir, log_level)"),
    value: str = typer.Argument(None, help="New value"),
) -> None:
    """Show your configuration or set an option."""
    config_command(key, value)


@app.command(name="year")
def year(year: int) -> None:
    """Create a year with 12 empty months."""
    year_command(year)


@app.command(name="years")
def years() -> None:
    """List your tracked years."""
    years_command()


@app.command(name="month")
def month(
    month: str = typer.Option(None, "--month", "-m", help=MONTH_HELP),
    histogram: bool = typer.Option(True, help="Show histogram of your spending by category"),
) -> None:
    """Show a month's income, expenses and balance."""
    month_command(month, histogram)


@app.command(name="income")
def income(
    amount: str,
    month: str = typer.Option(None, "--month", "-m", help=MONTH_HELP),
) -> None:
    """Set your income for a month (e.g. 5000 or 5.000,00)."""
    income_command(amount, month)


@app.command(name="add")
def add(
    name: str,
    value: str,
    category: str = typer.Option("other", "--category", "-c", help="Expense category"),
    status: str = typer.Option("pending", "--status", "-s", help="paid, overdue or pending"),
    due_day: int = typer.Option(None, "--due", "-d", help="Due day of the month (1-31)"),
    month: str = typer.Option(None, "--month", "-m", help=MONTH_HELP),
) -> None:
    """Add an expense to a month."""
    add_command(name, value, category, status, due_day, month)


@app.command(name="edit")
def edit(
    number: int,
    name: str = typer.Option(None, "--name", help="New name"),
    value: str = typer.Option(None, "--value", help="New value"),
    category: str = typer.Option(None, "--category", "-c", help="New category"),
    status: str = typer.Option(None, "--status", "-s", help="New status"),
    due_day: int = typer.Option(None, "--due", "-d", help="New due day (1-31)"),
    clear_due_day: bool = typer.Option(False, "--no-due", help="Remove the due day"),
    month: str = typer.Option(None, "--month", "-m", help=MONTH_HELP),
) -> None:
    """Edit an expense by its number in the month view."""
    edit_command(number, name, value, category, status, due_day, clear_due_day, month)


@app.command(name="pay")
def pay(
    number: int,
    status: str = typer.Option("paid", "--status", "-s", help="paid, overdue or pending"),
    month: str = typer.Option(None, "--month", "-m", help=MONTH_HELP),
) -> None:
    """Mark an expense as paid (or another status)."""
    pay_command(number, status, month)


@app.command(name="delete")
def delete(
    numbers: list[int],
    month: str = typer.Option(None, "--month", "-m", help=MONTH_HELP),
) -> None:
    """Delete expenses by their numbers in the month view."""
    delete_command(numbers, month)


@app.command(name="copy")
def copy(
    month: str = typer.Option(None, "--month", "-m", help=MONTH_HELP),
    include_income: bool = typer.Option(False, "--with-income", help="Also copy the previous month's income"),
) -> None:
    """Copy the previous month's expenses into a month."""
    copy_command(month, include_income)


@app.command(name="summary")
def summary(
    year: int = typer.Option(None, "--year", "-y", help="Year (default: current year)"),
) -> None:
    """Show your monthly summary for a year."""
    summary_command(year)


@app.command(name="export")
def export(
    output_dir: str = typer.Option(None, "--output", "-o", help="Directory for the CSV file"),
) -> None:
    """Export all your data to a CSV file."""
    export_command(output_dir)


@app.command(name="notify")
def notify(
    enable: bool = typer.Option(None, "--enable/--disable", help="Turn reminders on or off"),
    due_day: int = typer.Option(None, "--day", help="Monthly reminder day (financeapp profile)"),
) -> None:
    """Show or change your reminder settings."""
    notify_command(enable, due_day)


@app.command(name="reminders")
def reminders(
    acknowledge: bool = typer.Option(False, "--ack", help="Mark due reminders as delivered"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all pending reminders"),
) -> None:
    """Show reminders that are due."""
    reminders_command(acknowledge, all)


@app.command(name="reset")
def reset(
    yes: bool = typer.Option(False, "--yes", help="Skip confirmation"),
) -> None:
    """Delete all your data."""
    reset_command(yes)


if __name__ == "__main__":
    app()
