"""
Dashboard service aggregating approved spending per area.
"""
from sqlalchemy.orm import Session
from typing import Dict
from tripbudget.models.budget import Budget, BudgetStatus
from tripbudget.services import area_service
from tripbudget.services.budget_service import calculate_totals
from tripbudget.services.currency import format_currency


def build_dashboard(db: Session) -> dict:
    """
    Totals across all budgets.

    Spent amounts are recomputed from approved budgets, each converted with
    its own exchange-rate snapshot.
    """
    budgets = db.query(Budget).all()
    approved = [b for b in budgets if b.status == BudgetStatus.APPROVED]

    spent_by_area: Dict[str, float] = {}
    total_spent_usd = 0.0
    for budget in approved:
        total_usd = calculate_totals(budget)["total_usd"]
        spent_by_area[budget.area] = spent_by_area.get(budget.area, 0.0) + total_usd
        total_spent_usd += total_usd

    areas = []
    for area in area_service.list_areas(db):
        spent = spent_by_area.get(area.area, 0.0)
        areas.append({
            "area": area.area,
            "total_budget": area.total_budget,
            "used_budget": area.used_budget,
            "spent_usd": spent,
            "remaining_usd": area.total_budget - spent,
        })

    return {
        "total_budgets": len(budgets),
        "approved_budgets": len(approved),
        "total_spent_usd": total_spent_usd,
        "formatted_total_spent_usd": format_currency(total_spent_usd, "USD"),
        "active_areas": len(areas),
        "areas": areas,
    }
