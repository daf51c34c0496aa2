"""
Area budget model for organizational spending limits.
"""
from sqlalchemy import Column, String, Float
from tripbudget.db.base import BaseModel


class AreaBudget(BaseModel):
    """Budget allotted to an area, tracked in USD."""
    __tablename__ = "area_budgets"

    area = Column(String(100), unique=True, nullable=False, index=True)
    total_budget = Column(Float, nullable=False, default=0.0)  # Allotted, USD
    used_budget = Column(Float, nullable=False, default=0.0)  # Sum of approved budgets, USD

    @property
    def remaining_budget(self) -> float:
        return self.total_budget - self.used_budget
