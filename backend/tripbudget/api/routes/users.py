"""
User management routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from tripbudget.db.session import get_db
from tripbudget.schemas.user import RoleUpdate, UserResponse
from tripbudget.models.user import User
from tripbudget.api.dependencies import get_current_user, require_admin
from tripbudget.services.user_service import change_role, list_users

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user


@router.get("", response_model=List[UserResponse])
async def get_users(
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """List all users with their roles."""
    return list_users(db)


@router.put("/{user_id}/role", response_model=UserResponse)
async def update_user_role(
    user_id: int,
    role_data: RoleUpdate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Change a user's role."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return change_role(db, user, role_data.role)
