"""
User service for signup role assignment and role management.
"""
from sqlalchemy.orm import Session
from typing import List, Optional
from tripbudget.core.config import settings
from tripbudget.core.security import hash_password
from tripbudget.models.user import User, UserRole
from tripbudget.schemas.user import UserCreate
import logging

logger = logging.getLogger(__name__)


class DomainNotAllowedError(ValueError):
    """Raised when a signup email is outside the allowed domain."""


def is_allowed_email(email: str) -> bool:
    domain = settings.ALLOWED_EMAIL_DOMAIN
    if not domain:
        return True
    return email.lower().endswith(domain.lower())


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def register_user(db: Session, user_data: UserCreate) -> User:
    """
    Create a user. The first user to sign up becomes Administrator,
    everybody after that starts as Requester.

    Raises:
        DomainNotAllowedError: If the email is outside ALLOWED_EMAIL_DOMAIN
        ValueError: If the email is already registered
    """
    email = str(user_data.email)
    if not is_allowed_email(email):
        logger.warning(f"Signup rejected for unauthorized domain: {email}")
        raise DomainNotAllowedError(
            f"Only {settings.ALLOWED_EMAIL_DOMAIN} accounts may sign up"
        )

    if get_user_by_email(db, email):
        raise ValueError("Email already exists")

    has_admin = db.query(User).filter(User.role == UserRole.ADMIN).first() is not None
    role = UserRole.REQUESTER if has_admin else UserRole.ADMIN

    user = User(
        email=email,
        full_name=user_data.full_name,
        hashed_password=hash_password(user_data.password),
        role=role
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info(f"User {email} created with role: {role.value}")
    return user


def list_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.created_at, User.id).all()


def change_role(db: Session, user: User, role: UserRole) -> User:
    user.role = role
    db.commit()
    db.refresh(user)
    logger.info(f"User {user.email} role changed to {role.value}")
    return user
