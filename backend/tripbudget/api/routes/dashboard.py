"""
Dashboard routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from tripbudget.db.session import get_db
from tripbudget.models.user import User
from tripbudget.schemas.dashboard import DashboardSummary
from tripbudget.api.dependencies import require_reviewer
from tripbudget.services.dashboard_service import build_dashboard

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardSummary)
async def get_dashboard(
    current_user: User = Depends(require_reviewer),
    db: Session = Depends(get_db)
):
    """Get approved spending totals overall and per area."""
    return build_dashboard(db)
