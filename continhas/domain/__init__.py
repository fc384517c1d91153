"""Domain models and pure functions for continhas.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Ledger rules separated from persistence, reminders and the shell
"""

from continhas.domain.models import (
    AppProfile,
    CategoryTotal,
    Expense,
    ExpenseCategory,
    Money,
    MonthData,
    NotificationSettings,
    PaymentStatus,
    YearData,
)

__all__ = [
    "AppProfile",
    "CategoryTotal",
    "Expense",
    "ExpenseCategory",
    "Money",
    "MonthData",
    "NotificationSettings",
    "PaymentStatus",
    "YearData",
]
