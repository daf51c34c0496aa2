"""
Authentication routes for signup, login, and logout.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from tripbudget.db.session import get_db
from tripbudget.schemas.user import UserCreate, UserLogin, Token, UserResponse
from tripbudget.core.security import issue_access_token, read_access_token, verify_password
from tripbudget.services.user_service import (
    DomainNotAllowedError, get_user_by_email, register_user
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user. The first user becomes Administrator."""
    try:
        return register_user(db, user_data)
    except DomainNotAllowedError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e)
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


@router.post("/login", response_model=Token)
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login and get JWT token."""
    user = get_user_by_email(db, str(credentials.email))

    if not user or not verify_password(credentials.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password"
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive"
        )

    access_token = issue_access_token(user)

    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/logout")
async def logout(token: str):
    """Logout (the client discards the token)."""
    decoded = read_access_token(token)
    if not decoded:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token"
        )
    return {"message": "Logged out successfully"}
