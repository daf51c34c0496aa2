"""
Shared route dependencies for authentication and role checks.
"""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from tripbudget.core.security import read_access_token
from tripbudget.db.session import get_db
from tripbudget.models.user import User, UserRole

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the bearer token to an active user."""
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise unauthorized

    payload = read_access_token(credentials.credentials)
    if not payload:
        raise unauthorized

    user = db.query(User).filter(User.id == payload["user_id"]).first()
    if not user:
        raise unauthorized

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive"
        )
    return user


def require_roles(*roles: UserRole):
    """Dependency factory allowing only users holding one of `roles`."""

    def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient role for this action"
            )
        return current_user

    return checker


require_admin = require_roles(UserRole.ADMIN)
require_reviewer = require_roles(UserRole.APPROVER, UserRole.ADMIN)
