"""
Area budget routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from tripbudget.db.session import get_db
from tripbudget.models.user import User
from tripbudget.schemas.area import AreaBudgetCreate, AreaBudgetResponse, AreaBudgetUpdate
from tripbudget.api.dependencies import get_current_user, require_admin
from tripbudget.services import area_service

router = APIRouter(prefix="/areas", tags=["areas"])


@router.get("", response_model=List[AreaBudgetResponse])
async def list_areas(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List configured areas with allotted, used and remaining USD."""
    return area_service.list_areas(db)


@router.post("", response_model=AreaBudgetResponse, status_code=status.HTTP_201_CREATED)
async def set_area_budget(
    area_data: AreaBudgetCreate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Add an area, or replace the allotment of an existing one."""
    return area_service.set_area_budget(db, area_data.area, area_data.total_budget)


@router.put("/{area}", response_model=AreaBudgetResponse)
async def update_area_budget(
    area: str,
    area_data: AreaBudgetUpdate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Update an existing area's allotment."""
    if area_service.get_area(db, area) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Area not found"
        )
    return area_service.set_area_budget(db, area, area_data.total_budget)
