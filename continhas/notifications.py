"""Due-date reminders.

The ledger hands reminder work to a ``NotificationScheduler`` through a
``DueDatePolicy``:

- PerExpenseDuePolicy: one reminder per unpaid expense with a due day.
- GlobalDueDayPolicy: a single monthly reminder on the configured day.

``SqliteReminderScheduler`` keeps pending reminders in the ``reminders``
table; the ``reminders`` command lists and acknowledges the ones that are due.
Scheduling is best effort: storage errors are logged and dropped.
"""

import sqlite3
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Protocol

import structlog

from continhas.dates import reminder_datetime
from continhas.domain.models import AppProfile, Expense, Money, NotificationSettings, YearData
from continhas.domain.validation import format_currency
from continhas.store.schema import get_db_path

logger = structlog.get_logger()

MONTHLY_REMINDER_ID = "monthlyDueReminder"
EXPENSE_TITLE = "💰 Conta vence hoje!"
MONTHLY_TITLE = "💰 Lembrete de Contas"
MONTHLY_BODY = "Suas contas estão vencendo! Verifique seus pagamentos."


def reminder_identifier(expense_id: str) -> str:
    """Return the reminder identifier for an expense."""
    return f"expense_{expense_id}"


@dataclass(frozen=True)
class Reminder:
    """Immutable pending reminder."""

    identifier: str
    title: str
    body: str
    fire_at: datetime
    repeats_monthly: bool = False


class NotificationScheduler(Protocol):
    """Collaborator that delivers reminders."""

    def schedule(self, expense_id: str, name: str, amount: Money, year: int, month: int, day: int) -> None: ...

    def schedule_monthly(self, day: int) -> None: ...

    def cancel(self, expense_id: str) -> None: ...

    def cancel_all(self) -> None: ...


def next_monthly_fire(day: int, now: datetime) -> datetime:
    """Find the next 09:00 on ``day`` after ``now``.

    Months without that day (e.g. 31 in April) are skipped.
    """
    year, month = now.year, now.month
    # A day that exists at all appears within the next 12 months
    for _ in range(13):
        candidate = reminder_datetime(year, month, day)
        if candidate is not None and candidate > now:
            return candidate
        year, month = (year + 1, 1) if month == 12 else (year, month + 1)
    raise ValueError(f"Day {day} never occurs")


class SqliteReminderScheduler:
    """Scheduler storing pending reminders in the continhas database."""

    def __init__(self, db_path: Path | None = None, clock: Callable[[], datetime] = datetime.now) -> None:
        self.db_path = db_path if db_path is not None else get_db_path()
        self.clock = clock

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _execute(self, sql: str, params: tuple = ()) -> None:
        try:
            with self._connect() as conn:
                conn.execute(sql, params)
                conn.commit()
        except sqlite3.Error as e:
            logger.error("reminder_store_failed", error=str(e))

    def _store(self, reminder: Reminder) -> None:
        self._execute(
            """
            INSERT OR REPLACE INTO reminders (identifier, title, body, fire_at, repeats_monthly)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                reminder.identifier,
                reminder.title,
                reminder.body,
                reminder.fire_at.isoformat(timespec="minutes"),
                int(reminder.repeats_monthly),
            ),
        )

    def schedule(self, expense_id: str, name: str, amount: Money, year: int, month: int, day: int) -> None:
        """Schedule a one-off reminder on the due date; past dates are ignored."""
        self.cancel(expense_id)

        fire_at = reminder_datetime(year, month, day)
        if fire_at is None or fire_at <= self.clock():
            logger.debug("reminder_skipped", expense_id=expense_id, year=year, month=month, day=day)
            return

        self._store(
            Reminder(
                identifier=reminder_identifier(expense_id),
                title=EXPENSE_TITLE,
                body=f"{name} - {format_currency(amount)}",
                fire_at=fire_at,
            )
        )
        logger.info("reminder_scheduled", expense_id=expense_id, fire_at=fire_at.isoformat())

    def schedule_monthly(self, day: int) -> None:
        """Replace every reminder with one repeating on ``day`` each month."""
        self.cancel_all()
        fire_at = next_monthly_fire(day, self.clock())
        self._store(
            Reminder(
                identifier=MONTHLY_REMINDER_ID,
                title=MONTHLY_TITLE,
                body=MONTHLY_BODY,
                fire_at=fire_at,
                repeats_monthly=True,
            )
        )
        logger.info("monthly_reminder_scheduled", day=day, fire_at=fire_at.isoformat())

    def cancel(self, expense_id: str) -> None:
        self._execute("DELETE FROM reminders WHERE identifier = ?", (reminder_identifier(expense_id),))

    def cancel_all(self) -> None:
        self._execute("DELETE FROM reminders")

    def pending(self) -> list[Reminder]:
        """Return all pending reminders ordered by fire time.

        Raises:
            sqlite3.Error: If database operation fails.
        """
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM reminders ORDER BY fire_at, identifier")
            return [
                Reminder(
                    identifier=row["identifier"],
                    title=row["title"],
                    body=row["body"],
                    fire_at=datetime.fromisoformat(row["fire_at"]),
                    repeats_monthly=bool(row["repeats_monthly"]),
                )
                for row in cursor.fetchall()
            ]

    def due(self, now: datetime | None = None) -> list[Reminder]:
        """Return reminders whose fire time has passed."""
        now = now or self.clock()
        return [reminder for reminder in self.pending() if reminder.fire_at <= now]

    def acknowledge(self, reminder: Reminder, now: datetime | None = None) -> None:
        """Mark a fired reminder as delivered.

        One-off reminders are removed; the monthly reminder moves on to its
        next occurrence.
        """
        if not reminder.repeats_monthly:
            self._execute("DELETE FROM reminders WHERE identifier = ?", (reminder.identifier,))
            return

        now = now or self.clock()
        next_fire = next_monthly_fire(reminder.fire_at.day, max(now, reminder.fire_at))
        self._store(
            Reminder(
                identifier=reminder.identifier,
                title=reminder.title,
                body=reminder.body,
                fire_at=next_fire,
                repeats_monthly=True,
            )
        )


class DueDatePolicy(Protocol):
    """Decides which reminders follow from ledger and settings changes."""

    def expense_changed(
        self,
        scheduler: NotificationScheduler,
        settings: NotificationSettings,
        expense: Expense,
        year: int,
        month: int,
    ) -> None: ...

    def settings_changed(
        self,
        scheduler: NotificationScheduler,
        settings: NotificationSettings,
        years: list[YearData],
    ) -> None: ...


def is_reminder_eligible(expense: Expense, settings: NotificationSettings) -> bool:
    """Check whether an expense should have its own reminder."""
    return settings.is_enabled and expense.due_day is not None and not expense.is_paid


class PerExpenseDuePolicy:
    """Remind on each unpaid expense's own due day."""

    def expense_changed(
        self,
        scheduler: NotificationScheduler,
        settings: NotificationSettings,
        expense: Expense,
        year: int,
        month: int,
    ) -> None:
        if not is_reminder_eligible(expense, settings) or expense.due_day is None:
            return
        scheduler.schedule(expense.id, expense.name, expense.value, year, month, expense.due_day)

    def settings_changed(
        self,
        scheduler: NotificationScheduler,
        settings: NotificationSettings,
        years: list[YearData],
    ) -> None:
        if not settings.is_enabled:
            scheduler.cancel_all()
            return

        for year in years:
            for month in year.months:
                for expense in month.expenses:
                    scheduler.cancel(expense.id)
                    self.expense_changed(scheduler, settings, expense, year.year, month.month)


class GlobalDueDayPolicy:
    """Remind once a month on the configured day, whatever the expenses."""

    def expense_changed(
        self,
        scheduler: NotificationScheduler,
        settings: NotificationSettings,
        expense: Expense,
        year: int,
        month: int,
    ) -> None:
        return None

    def settings_changed(
        self,
        scheduler: NotificationScheduler,
        settings: NotificationSettings,
        years: list[YearData],
    ) -> None:
        if settings.is_enabled:
            scheduler.schedule_monthly(settings.due_day)
        else:
            scheduler.cancel_all()


def policy_for(profile: AppProfile) -> DueDatePolicy:
    """Pick the due-date policy matching an app profile."""
    if profile.per_expense_due_dates:
        return PerExpenseDuePolicy()
    return GlobalDueDayPolicy()
