"""
Area budget service for allotments and used-budget tracking.
"""
from sqlalchemy.orm import Session
from typing import List, Optional
from tripbudget.models.area import AreaBudget
import logging

logger = logging.getLogger(__name__)


def get_area(db: Session, area: str, for_update: bool = False) -> Optional[AreaBudget]:
    query = db.query(AreaBudget).filter(AreaBudget.area == area)
    if for_update:
        query = query.with_for_update().populate_existing()
    return query.first()


def list_areas(db: Session) -> List[AreaBudget]:
    return db.query(AreaBudget).order_by(AreaBudget.area).all()


def set_area_budget(db: Session, area: str, total_budget: float) -> AreaBudget:
    """Set an area's allotment, creating the area with nothing used if it is new."""
    area_budget = get_area(db, area)
    if area_budget:
        area_budget.total_budget = total_budget
    else:
        area_budget = AreaBudget(area=area, total_budget=total_budget, used_budget=0.0)
        db.add(area_budget)

    db.commit()
    db.refresh(area_budget)
    logger.info(f"Area {area} allotted {total_budget} USD")
    return area_budget


def add_to_used_budget(db: Session, area: str, amount_usd: float) -> AreaBudget:
    """
    Add an approved amount to an area's used budget.

    Does not commit; the caller commits together with the approval. An area
    missing at this point is recreated with a zero allotment. The row stays
    locked until that commit so concurrent approvals add up.
    """
    area_budget = get_area(db, area, for_update=True)
    if area_budget:
        area_budget.used_budget += amount_usd
    else:
        logger.warning(f"Area {area} not found while approving, creating it with no allotment")
        area_budget = AreaBudget(area=area, total_budget=0.0, used_budget=amount_usd)
        db.add(area_budget)
    return area_budget
