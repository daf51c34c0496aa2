"""
Pydantic schemas for AreaBudget entity.
"""
from pydantic import BaseModel, Field, field_validator
from datetime import datetime


class AreaBudgetCreate(BaseModel):
    """Schema for creating or replacing an area's allotment."""
    area: str
    total_budget: float = Field(gt=0)  # USD

    @field_validator("area")
    @classmethod
    def strip_area(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("area must not be blank")
        return v


class AreaBudgetUpdate(BaseModel):
    """Schema for updating an area's allotment."""
    total_budget: float = Field(gt=0)  # USD


class AreaBudgetResponse(BaseModel):
    """Schema for area budget response."""
    id: int
    area: str
    total_budget: float
    used_budget: float
    remaining_budget: float
    updated_at: datetime

    model_config = {"from_attributes": True}
