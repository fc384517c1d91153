"""Ledger repository: the in-memory years/months/expenses collection.

The repository is built once at startup and passed to whoever needs it.
Every mutation ends by saving the whole ledger through the persistence
gateway and telling the due-date policy what changed.

Lookups that miss (unknown year, month or expense id) are silent no-ops:
nothing is raised, and the return value says whether anything happened.

When the stored ledger could not be read at startup the repository works in
memory only and never writes the ledger, so stored data is not overwritten.
"""

from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date

import structlog

from continhas.dates import previous_month
from continhas.domain.models import (
    Expense,
    Money,
    MonthData,
    NotificationSettings,
    PaymentStatus,
    YearData,
)
from continhas.notifications import DueDatePolicy, NotificationScheduler
from continhas.store.gateway import PersistenceGateway

logger = structlog.get_logger()


class LedgerRepository:
    """Own the ledger and keep it consistent with storage and reminders.

    Invariants: at most one YearData per year, exactly 12 months per year,
    expense ids unique within a month.
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        scheduler: NotificationScheduler,
        policy: DueDatePolicy,
        years: list[YearData] | None = None,
        settings: NotificationSettings | None = None,
        today: Callable[[], date] = date.today,
        persistent: bool = True,
    ) -> None:
        self.gateway = gateway
        self.persistent = persistent
        self.scheduler = scheduler
        self.policy = policy
        self.settings = settings or NotificationSettings()
        self.today = today
        self._years: list[YearData] = []
        for year in years or []:
            if self.get_year(year.year) is not None:
                logger.warning("duplicate_year_dropped", year=year.year)
                continue
            self._years.append(year)

    @classmethod
    def load(
        cls,
        gateway: PersistenceGateway,
        scheduler: NotificationScheduler,
        policy: DueDatePolicy,
        today: Callable[[], date] = date.today,
    ) -> "LedgerRepository":
        """Load the ledger and settings, then make sure the current year exists.

        If the store cannot be read, the repository starts empty and is not
        persistent.
        """
        years = gateway.load_years()
        if years is None:
            logger.warning("ledger_not_persistent", reason="store unreadable")
        repository = cls(
            gateway,
            scheduler,
            policy,
            years=years,
            settings=gateway.load_settings(),
            today=today,
            persistent=years is not None,
        )
        repository.ensure_current_year()
        return repository

    # Reads

    @property
    def years(self) -> list[YearData]:
        """Years sorted newest first, for display."""
        return sorted(self._years, key=lambda y: y.year, reverse=True)

    def snapshot(self) -> list[YearData]:
        """Return the years in storage order."""
        return list(self._years)

    def get_year(self, year: int) -> YearData | None:
        for year_data in self._years:
            if year_data.year == year:
                return year_data
        return None

    def get_month(self, year: int, month: int) -> MonthData | None:
        """Return the (year, month) slot, or None if the year is absent."""
        year_data = self.get_year(year)
        if year_data is None:
            return None
        return year_data.get_month(month)

    @property
    def current_month(self) -> MonthData | None:
        today = self.today()
        return self.get_month(today.year, today.month)

    # Year management

    def ensure_year_exists(self, year: int) -> YearData:
        """Create the year with 12 empty months if it is missing.

        Idempotent: an existing year is returned untouched and nothing is saved.
        """
        existing = self.get_year(year)
        if existing is not None:
            return existing

        year_data = YearData.create(year)
        self._years.append(year_data)
        logger.info("year_created", year=year)
        self._save()
        return year_data

    def ensure_current_year(self) -> YearData:
        return self.ensure_year_exists(self.today().year)

    # Income

    def update_income(self, year: int, month: int, income: Money) -> bool:
        """Set a month's income, clamped to zero or more.

        Returns:
            True if the slot exists and was updated.
        """
        month_data = self.get_month(year, month)
        if month_data is None:
            return False

        month_data.income = Money(max(income, 0))
        self._save()
        return True

    # Expenses

    def add_expense(self, year: int, month: int, expense: Expense) -> bool:
        """Append an expense to a month.

        Returns:
            True if the slot exists and the expense was added.
        """
        month_data = self.get_month(year, month)
        if month_data is None:
            return False

        if month_data.find_expense(expense.id) is not None:
            logger.warning("duplicate_expense_id", expense_id=expense.id, year=year, month=month)
            return False

        month_data.expenses.append(expense)
        self._save()
        self.policy.expense_changed(self.scheduler, self.settings, expense, year, month)
        return True

    def update_expense(self, year: int, month: int, expense: Expense) -> bool:
        """Replace the expense with the same id, keeping its position.

        Returns:
            True if the month and the expense id were found.
        """
        month_data = self.get_month(year, month)
        if month_data is None:
            return False

        index = month_data.find_expense(expense.id)
        if index is None:
            return False

        month_data.expenses[index] = expense
        self._save()

        self.scheduler.cancel(expense.id)
        self.policy.expense_changed(self.scheduler, self.settings, expense, year, month)
        return True

    def set_status(self, year: int, month: int, expense_id: str, status: PaymentStatus) -> bool:
        """Change the payment status of one expense."""
        month_data = self.get_month(year, month)
        if month_data is None:
            return False

        index = month_data.find_expense(expense_id)
        if index is None:
            return False

        return self.update_expense(year, month, replace(month_data.expenses[index], status=status))

    def delete_expenses(self, year: int, month: int, expense_ids: Iterable[str]) -> list[Expense]:
        """Remove the expenses with the given ids.

        Ids are resolved to positions right before removal; unknown ids are
        ignored.

        Returns:
            The removed expenses in their former list order (empty on a miss).
        """
        month_data = self.get_month(year, month)
        if month_data is None:
            return []

        wanted = set(expense_ids)
        removed = [expense for expense in month_data.expenses if expense.id in wanted]
        if not removed:
            return []

        month_data.expenses = [expense for expense in month_data.expenses if expense.id not in wanted]
        for expense in removed:
            self.scheduler.cancel(expense.id)
        self._save()
        return removed

    def delete_expenses_at(self, year: int, month: int, positions: Iterable[int]) -> list[Expense]:
        """Remove the expenses at the given list positions.

        Positions are turned into ids before anything is removed, so the batch
        is not affected by the list shifting. Out of range positions are ignored.
        """
        month_data = self.get_month(year, month)
        if month_data is None:
            return []

        count = len(month_data.expenses)
        ids = [month_data.expenses[position].id for position in set(positions) if 0 <= position < count]
        return self.delete_expenses(year, month, ids)

    def copy_previous_month(self, year: int, month: int, include_income: bool = False) -> list[Expense]:
        """Copy the previous month's expenses into this month.

        Copies get fresh ids and pending status. With ``include_income`` the
        previous income is copied too when it is positive.

        Returns:
            The expenses added (empty when either slot is missing or the
            previous month has none).
        """
        target = self.get_month(year, month)
        source = self.get_month(*previous_month(year, month))
        if target is None or source is None or not source.expenses:
            return []

        copies = [
            Expense(
                name=expense.name,
                value=expense.value,
                category=expense.category,
                status=PaymentStatus.PENDING,
                due_day=expense.due_day,
            )
            for expense in source.expenses
        ]
        for expense in copies:
            self.add_expense(year, month, expense)

        if include_income and source.income > 0:
            self.update_income(year, month, source.income)

        logger.info("month_copied", year=year, month=month, expenses=len(copies))
        return copies

    # Bulk

    def delete_all(self) -> YearData:
        """Drop every year, cancel all reminders and recreate the current year."""
        self._years = []
        if self.persistent:
            self.gateway.delete_all_data()
        self.scheduler.cancel_all()
        logger.info("ledger_cleared")
        return self.ensure_current_year()

    # Settings

    def update_notification_settings(self, settings: NotificationSettings) -> None:
        """Store new reminder settings and reschedule accordingly."""
        self.settings = settings
        self.gateway.save_settings(settings)
        self.policy.settings_changed(self.scheduler, settings, self._years)

    def _save(self) -> None:
        if not self.persistent:
            logger.warning("ledger_save_skipped", reason="not persistent")
            return
        self.gateway.save_years(self._years)
