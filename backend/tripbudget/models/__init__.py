"""Models package - Import all models for SQLAlchemy registration."""
from tripbudget.models.user import User, UserRole
from tripbudget.models.area import AreaBudget
from tripbudget.models.budget import (
    Budget, BudgetStatus, CorporateCard, Currency, DailyExpense,
    ExpenseCategory, ExpenseItem
)
from tripbudget.models.exchange_rate import ExchangeRateConfig

__all__ = [
    "User",
    "UserRole",
    "AreaBudget",
    "Budget",
    "BudgetStatus",
    "CorporateCard",
    "Currency",
    "DailyExpense",
    "ExpenseCategory",
    "ExpenseItem",
    "ExchangeRateConfig",
]
