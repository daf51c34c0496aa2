"""
Budget models for trip expense requests.
"""
from sqlalchemy import (
    Column, String, Date, DateTime, Float, ForeignKey, Integer, Text, JSON,
    Enum as SQLEnum
)
from sqlalchemy.orm import relationship
from tripbudget.db.base import BaseModel
import enum


class Currency(str, enum.Enum):
    """Supported budget currencies."""
    USD = "USD"
    ARS = "ARS"
    COP = "COP"
    BRL = "BRL"
    EUR = "EUR"


class BudgetStatus(str, enum.Enum):
    """Budget lifecycle status. Approved and Rejected are terminal."""
    NEW = "New"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class ExpenseCategory(str, enum.Enum):
    """Daily expense item category."""
    LODGING = "lodging"
    TRANSPORT = "transport"
    FOOD = "food"
    OTHER = "other"


class Budget(BaseModel):
    """A single trip's expense request."""
    __tablename__ = "budgets"

    area = Column(String(100), nullable=False, index=True)
    email = Column(String(100), nullable=False, index=True)  # Requester email
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    destination = Column(String(100), nullable=False)
    travelers = Column(JSON, nullable=False)  # Ordered list of traveler names
    currency = Column(String(3), nullable=False, default=Currency.USD.value)
    accommodation = Column(Float, nullable=False, default=0.0)
    flights = Column(Float, nullable=False, default=0.0)
    exchange_rates = Column(JSON, nullable=True)  # Snapshot captured at creation (currency -> units per USD)
    status = Column(SQLEnum(BudgetStatus), default=BudgetStatus.NEW, nullable=False, index=True)
    approved_by = Column(String(100), nullable=True)
    approved_at = Column(DateTime, nullable=True)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    # Relationships
    created_by = relationship("User", back_populates="budgets")
    daily_expenses = relationship(
        "DailyExpense", back_populates="budget", cascade="all, delete-orphan",
        order_by="DailyExpense.position"
    )
    corporate_cards = relationship(
        "CorporateCard", back_populates="budget", cascade="all, delete-orphan",
        order_by="CorporateCard.position"
    )

    @property
    def general_expense(self) -> dict:
        """Accommodation and flights, exposed in the shape of the API schema."""
        return {"accommodation": self.accommodation, "flights": self.flights}


class DailyExpense(BaseModel):
    """One calendar day of a budget with its itemized expenses."""
    __tablename__ = "daily_expenses"

    budget_id = Column(Integer, ForeignKey("budgets.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)  # Day index within the trip
    date = Column(Date, nullable=False)

    # Relationships
    budget = relationship("Budget", back_populates="daily_expenses")
    expenses = relationship(
        "ExpenseItem", back_populates="daily_expense", cascade="all, delete-orphan",
        order_by="ExpenseItem.position"
    )


class ExpenseItem(BaseModel):
    """A single itemized expense within a day."""
    __tablename__ = "expense_items"

    daily_expense_id = Column(Integer, ForeignKey("daily_expenses.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)  # Order within the day
    category = Column(SQLEnum(ExpenseCategory), nullable=False)
    description = Column(Text, nullable=False, default="")
    amount = Column(Float, nullable=False, default=0.0)

    # Relationships
    daily_expense = relationship("DailyExpense", back_populates="expenses")


class CorporateCard(BaseModel):
    """A corporate payment card requested alongside a budget."""
    __tablename__ = "corporate_cards"

    budget_id = Column(Integer, ForeignKey("budgets.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    holder_name = Column(String(200), nullable=False)
    amount = Column(Float, nullable=False, default=0.0)

    # Relationships
    budget = relationship("Budget", back_populates="corporate_cards")
