"""
Pydantic schemas for Budget entity and its nested expense records.
"""
from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from typing import Dict, List, Optional
from datetime import date, datetime, timedelta
from tripbudget.models.budget import BudgetStatus, Currency, ExpenseCategory

# Longest trip a single budget may cover, in calendar days
MAX_TRIP_DAYS = 366


class ExpenseItem(BaseModel):
    """Schema for a single itemized expense."""
    category: ExpenseCategory
    description: str = ""
    amount: float = Field(ge=0)

    model_config = {"from_attributes": True}


class DailyExpense(BaseModel):
    """Schema for one day of itemized expenses."""
    date: date
    expenses: List[ExpenseItem] = []

    model_config = {"from_attributes": True}


class GeneralExpense(BaseModel):
    """Schema for trip-wide expenses, one per budget."""
    accommodation: float = Field(default=0, ge=0)
    flights: float = Field(default=0, ge=0)


class CorporateCard(BaseModel):
    """Schema for a corporate card request."""
    holder_name: str = Field(min_length=1)
    amount: float = Field(ge=0)

    model_config = {"from_attributes": True}


class BudgetBase(BaseModel):
    """Fields shared by budget input and output."""
    area: str
    start_date: date
    end_date: date
    destination: str
    travelers: List[str]
    currency: Currency = Currency.USD
    daily_expenses: List[DailyExpense] = []
    general_expense: GeneralExpense
    corporate_cards: Optional[List[CorporateCard]] = None


class BudgetCreate(BudgetBase):
    """Schema for budget creation.

    When daily_expenses is empty, one empty day per date in the trip range is
    generated on save. When provided, it must cover exactly that range.
    """
    email: Optional[EmailStr] = None  # Defaults to the requester's own email
    general_expense: GeneralExpense = GeneralExpense()

    @field_validator("area", "destination")
    @classmethod
    def require_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("travelers")
    @classmethod
    def drop_blank_travelers(cls, v: List[str]) -> List[str]:
        travelers = [name.strip() for name in v if name.strip()]
        if not travelers:
            raise ValueError("at least one traveler is required")
        return travelers

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        if (self.end_date - self.start_date).days + 1 > MAX_TRIP_DAYS:
            raise ValueError(f"a trip may not span more than {MAX_TRIP_DAYS} days")
        if self.daily_expenses:
            expected = trip_dates(self.start_date, self.end_date)
            actual = [day.date for day in self.daily_expenses]
            if actual != expected:
                raise ValueError(
                    "daily_expenses must contain exactly one entry per day "
                    f"from {self.start_date} to {self.end_date}"
                )
        return self


class BudgetResponse(BudgetBase):
    """Schema for a stored budget."""
    id: int
    email: str
    exchange_rates: Optional[Dict[str, float]] = None
    status: BudgetStatus
    created_at: datetime
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class BudgetListItem(BaseModel):
    """Schema for a budget row in listings."""
    id: int
    area: str
    email: str
    destination: str
    start_date: date
    end_date: date
    currency: Currency
    status: BudgetStatus
    created_at: datetime
    total: float
    total_usd: float
    formatted_total: str
    formatted_total_usd: str


class BudgetTotals(BaseModel):
    """Schema for a budget's cost breakdown."""
    budget_id: int
    currency: Currency
    daily_total: float
    general_total: float
    corporate_cards_total: float
    total: float
    usd_rate: float  # Units of currency per 1 USD used for total_usd
    rate_source: str  # "base", "snapshot" or "static"
    total_usd: float
    formatted_total: str
    formatted_total_usd: str


def trip_dates(start_date: date, end_date: date) -> List[date]:
    """Every calendar day of the inclusive range [start_date, end_date]."""
    days = (end_date - start_date).days
    return [start_date + timedelta(days=offset) for offset in range(days + 1)]
