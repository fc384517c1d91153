"""Domain types and entities for continhas.

- Money: Amount in centavos (minor units)
- ExpenseCategory / PaymentStatus: closed enumerations with display tags
- Expense, MonthData, YearData: the ledger entities
- NotificationSettings: reminder configuration handed to the scheduler
- AppProfile: the two app variants (per-expense vs. global due dates)
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import NewType

from continhas.dates import month_name

# Money amounts are stored as centavos (minor units) to avoid floating point errors
Money = NewType("Money", int)


def new_id() -> str:
    """Generate an opaque entity identifier."""
    return str(uuid.uuid4())


class ExpenseCategory(str, Enum):
    """Expense categories shared by both app variants."""

    LEISURE = "leisure"
    TRANSPORT = "transport"
    EDUCATION = "education"
    INVESTMENT = "investment"
    FOOD = "food"
    HEALTH = "health"
    HOUSING = "housing"
    BUSINESS = "business"
    GOVERNMENT = "government"
    OTHER = "other"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]

    @property
    def color(self) -> str:
        return _CATEGORY_COLORS[self]

    @property
    def icon(self) -> str:
        return _CATEGORY_ICONS[self]

    def display(self, profile: "AppProfile | None" = None) -> str:
        """Label for this category under the given app profile."""
        if self is ExpenseCategory.BUSINESS and profile is not None:
            return profile.business_label
        return self.label

    @classmethod
    def parse(cls, value: str) -> "ExpenseCategory":
        """Resolve a key or a display label (any variant) to a category.

        Raises:
            ValueError: If the value names no category.
        """
        normalized = value.strip().lower()
        for category in cls:
            if normalized == category.value or normalized == category.label.lower():
                return category
        if normalized == "empresa":
            return cls.BUSINESS
        raise ValueError(f"Unknown category: {value}")


_CATEGORY_LABELS = {
    ExpenseCategory.LEISURE: "Lazer",
    ExpenseCategory.TRANSPORT: "Transporte",
    ExpenseCategory.EDUCATION: "Educação",
    ExpenseCategory.INVESTMENT: "Investimento",
    ExpenseCategory.FOOD: "Alimentação",
    ExpenseCategory.HEALTH: "Saúde",
    ExpenseCategory.HOUSING: "Moradia",
    ExpenseCategory.BUSINESS: "Empresas",
    ExpenseCategory.GOVERNMENT: "Governo",
    ExpenseCategory.OTHER: "Outros",
}

_CATEGORY_COLORS = {
    ExpenseCategory.LEISURE: "purple",
    ExpenseCategory.TRANSPORT: "blue",
    ExpenseCategory.EDUCATION: "orange1",
    ExpenseCategory.INVESTMENT: "green",
    ExpenseCategory.FOOD: "red",
    ExpenseCategory.HEALTH: "pink1",
    ExpenseCategory.HOUSING: "tan",
    ExpenseCategory.BUSINESS: "slate_blue1",
    ExpenseCategory.GOVERNMENT: "yellow",
    ExpenseCategory.OTHER: "grey50",
}

_CATEGORY_ICONS = {
    ExpenseCategory.LEISURE: "gamecontroller",
    ExpenseCategory.TRANSPORT: "car",
    ExpenseCategory.EDUCATION: "book",
    ExpenseCategory.INVESTMENT: "chart.line.uptrend.xyaxis",
    ExpenseCategory.FOOD: "fork.knife",
    ExpenseCategory.HEALTH: "heart",
    ExpenseCategory.HOUSING: "house",
    ExpenseCategory.BUSINESS: "briefcase",
    ExpenseCategory.GOVERNMENT: "flag",
    ExpenseCategory.OTHER: "ellipsis.circle",
}


class PaymentStatus(str, Enum):
    """Payment status of an expense."""

    PAID = "paid"
    OVERDUE = "overdue"
    PENDING = "pending"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @property
    def color(self) -> str:
        return _STATUS_COLORS[self]

    @property
    def icon(self) -> str:
        return _STATUS_ICONS[self]

    @classmethod
    def parse(cls, value: str) -> "PaymentStatus":
        """Resolve a key or a display label to a status.

        Raises:
            ValueError: If the value names no status.
        """
        normalized = value.strip().lower()
        for status in cls:
            if normalized == status.value or normalized == status.label.lower():
                return status
        raise ValueError(f"Unknown status: {value}")


_STATUS_LABELS = {
    PaymentStatus.PAID: "Pago",
    PaymentStatus.OVERDUE: "Atrasado",
    PaymentStatus.PENDING: "Pendente",
}

_STATUS_COLORS = {
    PaymentStatus.PAID: "green",
    PaymentStatus.OVERDUE: "red",
    PaymentStatus.PENDING: "grey50",
}

_STATUS_ICONS = {
    PaymentStatus.PAID: "✓",
    PaymentStatus.OVERDUE: "!",
    PaymentStatus.PENDING: "○",
}


@dataclass(frozen=True, eq=False)
class Expense:
    """A bill or expense owned by one month.

    Identity is the id alone: two instances with the same id are the same
    expense, whatever their other fields say.
    """

    name: str
    value: Money
    category: ExpenseCategory
    status: PaymentStatus = PaymentStatus.PENDING
    due_day: int | None = None
    id: str = field(default_factory=new_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Expense):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def is_paid(self) -> bool:
        return self.status is PaymentStatus.PAID


@dataclass
class MonthData:
    """Income and expenses for one (year, month) slot."""

    month: int
    year: int
    income: Money = Money(0)
    expenses: list[Expense] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    @property
    def month_name(self) -> str:
        return month_name(self.month)

    @property
    def full_title(self) -> str:
        return f"{self.month_name} {self.year}"

    def find_expense(self, expense_id: str) -> int | None:
        """Return the list position of an expense id, or None."""
        for index, expense in enumerate(self.expenses):
            if expense.id == expense_id:
                return index
        return None


@dataclass
class YearData:
    """Twelve months of a calendar year."""

    year: int
    months: list[MonthData] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    @classmethod
    def create(cls, year: int) -> "YearData":
        """Create a year with all 12 months empty."""
        return cls(year=year, months=[MonthData(month=month, year=year) for month in range(1, 13)])

    def get_month(self, month: int) -> MonthData | None:
        for month_data in self.months:
            if month_data.month == month:
                return month_data
        return None


@dataclass(frozen=True)
class CategoryTotal:
    """Summed expense value of one category."""

    category: ExpenseCategory
    total: Money


@dataclass(frozen=True)
class NotificationSettings:
    """Reminder configuration.

    ``due_day`` is only read by the global (one reminder per month) policy.
    """

    is_enabled: bool = False
    due_day: int = 5


@dataclass(frozen=True)
class AppProfile:
    """One of the two app variants sharing the ledger model."""

    name: str
    business_label: str
    per_expense_due_dates: bool


CONTINHAS = AppProfile(name="continhas", business_label="Empresas", per_expense_due_dates=True)
FINANCE_APP = AppProfile(name="financeapp", business_label="Empresa", per_expense_due_dates=False)

PROFILES = {profile.name: profile for profile in (CONTINHAS, FINANCE_APP)}


def get_profile(name: str) -> AppProfile:
    """Look up an app profile by name.

    Raises:
        ValueError: If no profile has that name.
    """
    try:
        return PROFILES[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown profile '{name}' (expected one of: {', '.join(PROFILES)})") from None
