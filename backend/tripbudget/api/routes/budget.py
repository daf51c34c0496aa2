"""
Budget management routes.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from tripbudget.db.session import get_db
from tripbudget.models.user import User
from tripbudget.models.budget import Budget, BudgetStatus
from tripbudget.schemas.budget import BudgetCreate, BudgetListItem, BudgetResponse, BudgetTotals
from tripbudget.api.dependencies import get_current_user, require_reviewer
from tripbudget.services import budget_service
from tripbudget.services.budget_service import BudgetStateError

router = APIRouter(prefix="/budgets", tags=["budgets"])


def check_budget_access(budget_id: int, user: User, db: Session) -> Budget:
    """Check if user may see the budget."""
    budget = budget_service.get_budget(db, budget_id)
    if not budget:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Budget not found"
        )

    if not budget_service.can_view(user, budget):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied to this budget"
        )

    return budget


@router.post("", response_model=BudgetResponse, status_code=status.HTTP_201_CREATED)
async def create_budget(
    budget_data: BudgetCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Submit a new budget for approval."""
    try:
        return budget_service.create_budget(db, budget_data, current_user)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


@router.get("", response_model=List[BudgetListItem])
async def list_budgets(
    status_filter: Optional[BudgetStatus] = Query(None, alias="status"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List budgets visible to the current user with their totals."""
    budgets = budget_service.list_budgets(db, current_user, status_filter)
    return [budget_service.to_list_item(budget) for budget in budgets]


@router.get("/{budget_id}", response_model=BudgetResponse)
async def get_budget(
    budget_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get budget details."""
    return check_budget_access(budget_id, current_user, db)


@router.get("/{budget_id}/totals", response_model=BudgetTotals)
async def get_budget_totals(
    budget_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the budget's cost breakdown in its currency and in USD."""
    budget = check_budget_access(budget_id, current_user, db)
    return budget_service.calculate_totals(budget)


@router.post("/{budget_id}/approve", response_model=BudgetResponse)
async def approve_budget(
    budget_id: int,
    current_user: User = Depends(require_reviewer),
    db: Session = Depends(get_db)
):
    """Approve a pending budget and charge it to its area."""
    budget = check_budget_access(budget_id, current_user, db)
    try:
        return budget_service.approve_budget(db, budget, current_user)
    except BudgetStateError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )


@router.post("/{budget_id}/reject", response_model=BudgetResponse)
async def reject_budget(
    budget_id: int,
    current_user: User = Depends(require_reviewer),
    db: Session = Depends(get_db)
):
    """Reject a pending budget."""
    budget = check_budget_access(budget_id, current_user, db)
    try:
        return budget_service.reject_budget(db, budget, current_user)
    except BudgetStateError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )
