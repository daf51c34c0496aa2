"""
Pydantic schemas for the approval dashboard.
"""
from pydantic import BaseModel
from typing import List


class AreaStats(BaseModel):
    """Spending of one area, all amounts in USD."""
    area: str
    total_budget: float
    used_budget: float
    spent_usd: float  # Recomputed from approved budgets
    remaining_usd: float


class DashboardSummary(BaseModel):
    """Schema for dashboard totals."""
    total_budgets: int
    approved_budgets: int
    total_spent_usd: float
    formatted_total_spent_usd: str
    active_areas: int
    areas: List[AreaStats] = []
