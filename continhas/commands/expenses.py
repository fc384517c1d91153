"""Month commands: view a month, set income, and manage its expenses."""

import sys
from dataclasses import replace

from rich.table import Table

from continhas.commands.common import (
    console,
    expense_at,
    load_context,
    money_display,
    require_month,
    resolve_slot,
)
from continhas.domain.aggregation import balance, category_breakdown, category_share, total_expenses
from continhas.domain.models import Expense, ExpenseCategory, PaymentStatus
from continhas.domain.validation import format_currency, parse_money, validate_expense


def _parse_category(value: str) -> ExpenseCategory:
    try:
        return ExpenseCategory.parse(value)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        console.print(f"[dim]Categories: {', '.join(c.value for c in ExpenseCategory)}[/dim]")
        sys.exit(1)


def _parse_status(value: str) -> PaymentStatus:
    try:
        return PaymentStatus.parse(value)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        console.print(f"[dim]Statuses: {', '.join(s.value for s in PaymentStatus)}[/dim]")
        sys.exit(1)


def year_command(year: int) -> None:
    """Create a year with 12 empty months if it does not exist."""
    context = load_context()

    if context.repository.get_year(year) is not None:
        console.print(f"[dim]{year} already exists[/dim]")
        return

    context.repository.ensure_year_exists(year)
    console.print(f"[green]✓[/green] Created {year} with 12 empty months")


def month_command(month: str | None = None, histogram: bool = True) -> None:
    """Show a month's summary, expenses and category breakdown."""
    context = load_context()
    year_num, month_num = resolve_slot(month)
    month_data = require_month(context, year_num, month_num)
    profile = context.profile

    console.print(f"[bold cyan]{month_data.full_title}[/bold cyan]\n")
    console.print(f"  [bold]Entrada:[/bold] {money_display(month_data.income)}")
    console.print(f"  [bold]Gastos:[/bold]  [red]{format_currency(total_expenses(month_data))}[/red]")
    console.print(
        f"  [bold]Saldo:[/bold]   {money_display(balance(month_data), negative_style='orange1', positive_style='blue')}\n"
    )

    if not month_data.expenses:
        console.print("[dim]Nenhuma conta cadastrada[/dim]")
        return

    table = Table(title=f"Contas ({len(month_data.expenses)})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Conta", style="white")
    table.add_column("Valor", justify="right")
    table.add_column("Categoria")
    table.add_column("Status", justify="center")
    if profile.per_expense_due_dates:
        table.add_column("Vencimento", style="cyan")

    for idx, expense in enumerate(month_data.expenses, 1):
        category = expense.category
        status = expense.status
        row = [
            str(idx),
            expense.name,
            format_currency(expense.value),
            f"[{category.color}]{category.display(profile)}[/{category.color}]",
            f"[{status.color}]{status.icon} {status.label}[/{status.color}]",
        ]
        if profile.per_expense_due_dates:
            row.append(f"Dia {expense.due_day}" if expense.due_day is not None else "[dim]-[/dim]")
        table.add_row(*row)

    console.print(table)

    console.print("\n[bold red]Gastos por categoria:[/bold red]\n")
    whole = total_expenses(month_data)
    breakdown = category_breakdown(month_data)
    max_amount = breakdown[0].total if breakdown else 0
    bar_width = 30

    for item in breakdown:
        share = category_share(item.total, whole)
        label = item.category.display(profile)
        amount_display = format_currency(item.total)
        if histogram and max_amount:
            bar = "█" * int((item.total / max_amount) * bar_width)
            console.print(f"  {label:15} {amount_display:>14} {share:5.1f}% [{item.category.color}]{bar}[/]")
        else:
            console.print(f"  {label}: {amount_display} ({share:.1f}%)")


def income_command(amount: str, month: str | None = None) -> None:
    """Set the income of a month."""
    context = load_context()
    year_num, month_num = resolve_slot(month)
    month_data = require_month(context, year_num, month_num)

    income = parse_money(amount)
    if income is None:
        console.print(f"[red]Invalid amount '{amount}'[/red]")
        sys.exit(1)

    context.repository.update_income(year_num, month_num, income)
    console.print(f"[green]✓[/green] Entrada de {month_data.full_title}: {format_currency(month_data.income)}")


def add_command(
    name: str,
    value: str,
    category: str,
    status: str = "pending",
    due_day: int | None = None,
    month: str | None = None,
) -> None:
    """Add an expense to a month."""
    context = load_context()
    year_num, month_num = resolve_slot(month)
    month_data = require_month(context, year_num, month_num)

    amount = parse_money(value)
    error = validate_expense(name, amount, due_day)
    if error or amount is None:
        console.print(f"[red]{error}[/red]")
        sys.exit(1)

    expense = Expense(
        name=name.strip(),
        value=amount,
        category=_parse_category(category),
        status=_parse_status(status),
        due_day=due_day,
    )
    context.repository.add_expense(year_num, month_num, expense)

    console.print(f"[green]✓[/green] Added to {month_data.full_title}:")
    console.print(f"  {expense.name} - {format_currency(expense.value)} ({expense.category.display(context.profile)})")


def edit_command(
    number: int,
    name: str | None = None,
    value: str | None = None,
    category: str | None = None,
    status: str | None = None,
    due_day: int | None = None,
    clear_due_day: bool = False,
    month: str | None = None,
) -> None:
    """Edit fields of an expense, keeping its identity and position."""
    context = load_context()
    year_num, month_num = resolve_slot(month)
    month_data = require_month(context, year_num, month_num)
    current = expense_at(month_data, number)

    new_name = name if name is not None else current.name
    new_value = parse_money(value) if value is not None else current.value
    new_due_day = None if clear_due_day else (due_day if due_day is not None else current.due_day)

    error = validate_expense(new_name, new_value, new_due_day)
    if error or new_value is None:
        console.print(f"[red]{error}[/red]")
        sys.exit(1)

    updated = replace(
        current,
        name=new_name.strip(),
        value=new_value,
        category=_parse_category(category) if category is not None else current.category,
        status=_parse_status(status) if status is not None else current.status,
        due_day=new_due_day,
    )
    context.repository.update_expense(year_num, month_num, updated)
    console.print(f"[green]✓[/green] Updated #{number}: {updated.name} - {format_currency(updated.value)}")


def pay_command(number: int, status: str = "paid", month: str | None = None) -> None:
    """Set the payment status of an expense (paid by default)."""
    context = load_context()
    year_num, month_num = resolve_slot(month)
    month_data = require_month(context, year_num, month_num)
    expense = expense_at(month_data, number)
    new_status = _parse_status(status)

    context.repository.set_status(year_num, month_num, expense.id, new_status)
    console.print(f"[green]✓[/green] {expense.name}: [{new_status.color}]{new_status.label}[/{new_status.color}]")


def delete_command(numbers: list[int], month: str | None = None) -> None:
    """Delete one or more expenses by their displayed numbers."""
    context = load_context()
    year_num, month_num = resolve_slot(month)
    require_month(context, year_num, month_num)

    removed = context.repository.delete_expenses_at(year_num, month_num, [number - 1 for number in numbers])
    if not removed:
        console.print("[yellow]Nothing deleted[/yellow]")
        return

    for expense in removed:
        console.print(f"[green]✓[/green] Deleted {expense.name} - {format_currency(expense.value)}")


def copy_command(month: str | None = None, include_income: bool = False) -> None:
    """Copy the previous month's expenses (as pending) into a month."""
    context = load_context()
    year_num, month_num = resolve_slot(month)
    month_data = require_month(context, year_num, month_num)

    copies = context.repository.copy_previous_month(year_num, month_num, include_income)
    if not copies:
        console.print("[yellow]Previous month has no expenses to copy[/yellow]")
        return

    console.print(f"[green]✓[/green] Copied {len(copies)} expense(s) into {month_data.full_title} as pending")
