"""Reminder settings and delivery commands."""

import sqlite3
import sys

from rich.table import Table

from continhas.commands.common import console, load_context
from continhas.domain.models import NotificationSettings
from continhas.domain.validation import validate_due_day


def notify_command(enable: bool | None = None, due_day: int | None = None) -> None:
    """Show or change reminder settings."""
    context = load_context()
    repository = context.repository
    current = repository.settings

    if enable is None and due_day is None:
        state = "[green]enabled[/green]" if current.is_enabled else "[dim]disabled[/dim]"
        console.print(f"Reminders: {state}")
        if not context.profile.per_expense_due_dates:
            console.print(f"Monthly reminder day: {current.due_day}")
        else:
            console.print("[dim]Each unpaid expense with a due day gets its own reminder[/dim]")
        return

    if due_day is not None:
        error = validate_due_day(due_day)
        if error:
            console.print(f"[red]{error}[/red]")
            sys.exit(1)

    settings = NotificationSettings(
        is_enabled=current.is_enabled if enable is None else enable,
        due_day=current.due_day if due_day is None else due_day,
    )
    repository.update_notification_settings(settings)

    if settings.is_enabled:
        console.print("[green]✓[/green] Reminders enabled")
    else:
        console.print("[green]✓[/green] Reminders disabled")


def reminders_command(acknowledge: bool = False, show_all: bool = False) -> None:
    """List due reminders, optionally marking them delivered."""
    context = load_context()
    scheduler = context.scheduler

    try:
        reminders = scheduler.pending() if show_all else scheduler.due()
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not reminders:
        console.print("[dim]No reminders[/dim]" if show_all else "[dim]Nothing due[/dim]")
        return

    table = Table(title="Lembretes")
    table.add_column("Quando", style="cyan")
    table.add_column("Título")
    table.add_column("Mensagem")
    table.add_column("Repete", justify="center")

    for reminder in reminders:
        table.add_row(
            reminder.fire_at.strftime("%Y-%m-%d %H:%M"),
            reminder.title,
            reminder.body,
            "↻" if reminder.repeats_monthly else "",
        )

    console.print(table)

    if acknowledge:
        due = scheduler.due()
        for reminder in due:
            scheduler.acknowledge(reminder)
        console.print(f"[green]✓[/green] Acknowledged {len(due)} reminder(s)")
