"""
User model for authentication and role-based access.
"""
from sqlalchemy import Column, String, Boolean, Enum as SQLEnum
from sqlalchemy.orm import relationship
from tripbudget.db.base import BaseModel
import enum


class UserRole(str, enum.Enum):
    """User role enumeration."""
    REQUESTER = "Requester"
    APPROVER = "Approver"
    ADMIN = "Administrator"


class User(BaseModel):
    """User model identified by a unique email."""
    __tablename__ = "users"

    email = Column(String(100), unique=True, nullable=False, index=True)
    full_name = Column(String(200), nullable=True)
    hashed_password = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    role = Column(SQLEnum(UserRole), default=UserRole.REQUESTER, nullable=False)

    # Relationships
    budgets = relationship("Budget", back_populates="created_by")
