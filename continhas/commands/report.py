"""Summary and export commands."""

import asyncio
import sys
from datetime import date
from pathlib import Path

from rich.table import Table

from continhas.commands.common import console, load_context, money_display
from continhas.domain.aggregation import month_summaries, year_balance, year_totals
from continhas.domain.validation import format_currency
from continhas.exporter import export_report_async


def summary_command(year: int | None = None) -> None:
    """Show income, expenses and balance for each month of a year."""
    context = load_context()
    year_num = year or date.today().year

    year_data = context.repository.get_year(year_num)
    if year_data is None:
        console.print(f"[yellow]No data for {year_num}[/yellow]")
        return

    table = Table(title=f"Resumo {year_num}")
    table.add_column("Mês", style="cyan")
    table.add_column("Entrada", justify="right")
    table.add_column("Gastos", justify="right")
    table.add_column("Saldo", justify="right")
    table.add_column("Contas", justify="right", style="dim")

    for summary in month_summaries(year_data):
        if not summary.expense_count and not summary.income:
            table.add_row(summary.name, "[dim]-[/dim]", "[dim]-[/dim]", "[dim]-[/dim]", "0")
            continue
        table.add_row(
            summary.name,
            f"[green]{format_currency(summary.income)}[/green]",
            f"[red]{format_currency(summary.total_expenses)}[/red]",
            money_display(summary.balance, negative_style="orange1", positive_style="blue"),
            str(summary.expense_count),
        )

    console.print(table)

    income, expenses = year_totals(year_data)
    console.print(f"\n  [bold]Total entrada:[/bold] [green]{format_currency(income)}[/green]")
    console.print(f"  [bold]Total gastos:[/bold]  [red]{format_currency(expenses)}[/red]")
    console.print(
        f"  [bold]Saldo do ano:[/bold]  "
        f"{money_display(year_balance(year_data), negative_style='orange1', positive_style='blue')}"
    )


def years_command() -> None:
    """List tracked years, newest first."""
    context = load_context()

    table = Table(title="Anos")
    table.add_column("Ano", style="cyan")
    table.add_column("Entrada", justify="right")
    table.add_column("Gastos", justify="right")

    for year_data in context.repository.years:
        income, expenses = year_totals(year_data)
        table.add_row(str(year_data.year), format_currency(income), format_currency(expenses))

    console.print(table)


def export_command(output_dir: str | None = None) -> None:
    """Export the whole ledger to a CSV file."""
    context = load_context()
    directory = Path(output_dir).expanduser() if output_dir else context.export_dir

    with console.status("Exporting..."):
        path = asyncio.run(export_report_async(context.repository.snapshot(), directory, context.profile))

    if path is None:
        console.print("[red]Export failed: no file was written[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Exported to: {path}")
