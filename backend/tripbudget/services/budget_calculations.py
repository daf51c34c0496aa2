"""
Budget total aggregation.

Totals are plain left-to-right float sums in the budget's own currency with
no intermediate rounding. Amounts are validated non-negative by the schemas
before they get here, so these functions never raise for a well-formed budget.
"""
from tripbudget.schemas.budget import BudgetBase


def calculate_daily_total(budget: BudgetBase) -> float:
    """Sum of every expense item across all days."""
    total = 0.0
    for day in budget.daily_expenses:
        day_total = 0.0
        for item in day.expenses:
            day_total += item.amount
        total += day_total
    return total


def calculate_general_total(budget: BudgetBase) -> float:
    """Accommodation plus flights."""
    return budget.general_expense.accommodation + budget.general_expense.flights


def calculate_corporate_cards_total(budget: BudgetBase) -> float:
    """Sum of requested corporate card amounts; no cards counts as zero."""
    total = 0.0
    for card in budget.corporate_cards or []:
        total += card.amount
    return total


def calculate_budget_total(budget: BudgetBase) -> float:
    """
    Total cost of a budget in its declared currency.

    total = daily items + (accommodation + flights) + corporate cards
    """
    return (
        calculate_daily_total(budget)
        + calculate_general_total(budget)
        + calculate_corporate_cards_total(budget)
    )
