"""
Budget service for creating, reviewing and totaling trip budgets.
"""
from sqlalchemy import or_
from sqlalchemy.orm import Session
from datetime import datetime, timezone
from typing import List, Optional
from tripbudget.models.budget import (
    Budget, BudgetStatus, CorporateCard, DailyExpense, ExpenseItem
)
from tripbudget.models.user import User, UserRole
from tripbudget.schemas.budget import BudgetCreate, BudgetResponse, trip_dates
from tripbudget.services import area_service
from tripbudget.services.budget_calculations import (
    calculate_budget_total, calculate_corporate_cards_total,
    calculate_daily_total, calculate_general_total
)
from tripbudget.services.currency import convert_to_usd, format_currency, resolve_usd_rate
from tripbudget.services.fx_service import capture_exchange_rates
import logging

logger = logging.getLogger(__name__)

REVIEWER_ROLES = (UserRole.APPROVER, UserRole.ADMIN)


class BudgetStateError(ValueError):
    """Raised when a budget is asked to leave a terminal status."""


def create_budget(db: Session, data: BudgetCreate, requester: User) -> Budget:
    """
    Persist a new budget in status New.

    The area must already be configured. The exchange-rate snapshot is
    captured here and never changed afterwards.

    Raises:
        ValueError: If the area is unknown
    """
    if area_service.get_area(db, data.area) is None:
        raise ValueError(f"Unknown area: {data.area}")

    budget = Budget(
        area=data.area,
        email=str(data.email) if data.email else requester.email,
        start_date=data.start_date,
        end_date=data.end_date,
        destination=data.destination,
        travelers=list(data.travelers),
        currency=data.currency.value,
        accommodation=data.general_expense.accommodation,
        flights=data.general_expense.flights,
        exchange_rates=capture_exchange_rates(db),
        status=BudgetStatus.NEW,
        created_by_id=requester.id
    )

    if data.daily_expenses:
        for day_index, day in enumerate(data.daily_expenses):
            daily = DailyExpense(position=day_index, date=day.date)
            for position, item in enumerate(day.expenses):
                daily.expenses.append(ExpenseItem(
                    position=position,
                    category=item.category,
                    description=item.description,
                    amount=item.amount
                ))
            budget.daily_expenses.append(daily)
    else:
        for day_index, day in enumerate(trip_dates(data.start_date, data.end_date)):
            budget.daily_expenses.append(DailyExpense(position=day_index, date=day))

    for position, card in enumerate(data.corporate_cards or []):
        budget.corporate_cards.append(CorporateCard(
            position=position,
            holder_name=card.holder_name,
            amount=card.amount
        ))

    db.add(budget)
    db.commit()
    db.refresh(budget)

    logger.info(
        f"Budget {budget.id} created for area {budget.area} by {requester.email}"
        f" ({'snapshot' if budget.exchange_rates else 'static'} rates)"
    )
    return budget


def get_budget(db: Session, budget_id: int) -> Optional[Budget]:
    return db.query(Budget).filter(Budget.id == budget_id).first()


def can_view(user: User, budget: Budget) -> bool:
    """Reviewers see every budget; requesters only their own."""
    if user.role in REVIEWER_ROLES:
        return True
    return budget.created_by_id == user.id or budget.email == user.email


def list_budgets(db: Session, user: User, status: Optional[BudgetStatus] = None) -> List[Budget]:
    """
    Budgets visible to a user, newest first.

    Approvers default to the pending queue (status New) when no status is given.
    """
    query = db.query(Budget)
    if user.role == UserRole.REQUESTER:
        query = query.filter(or_(Budget.created_by_id == user.id, Budget.email == user.email))
    elif user.role == UserRole.APPROVER and status is None:
        status = BudgetStatus.NEW

    if status is not None:
        query = query.filter(Budget.status == status)

    return query.order_by(Budget.created_at.desc(), Budget.id.desc()).all()


def to_record(budget: Budget) -> BudgetResponse:
    """Plain in-memory copy of a stored budget for the calculation functions."""
    return BudgetResponse.model_validate(budget)


def calculate_totals(budget: Budget) -> dict:
    """Cost breakdown in the budget's currency and in USD."""
    record = to_record(budget)
    total = calculate_budget_total(record)
    usd_rate = resolve_usd_rate(record.currency, record)
    total_usd = convert_to_usd(total, record.currency, record)

    return {
        "budget_id": record.id,
        "currency": record.currency,
        "daily_total": calculate_daily_total(record),
        "general_total": calculate_general_total(record),
        "corporate_cards_total": calculate_corporate_cards_total(record),
        "total": total,
        "usd_rate": usd_rate.rate,
        "rate_source": usd_rate.source,
        "total_usd": total_usd,
        "formatted_total": format_currency(total, record.currency),
        "formatted_total_usd": format_currency(total_usd, "USD"),
    }


def to_list_item(budget: Budget) -> dict:
    totals = calculate_totals(budget)
    return {
        "id": budget.id,
        "area": budget.area,
        "email": budget.email,
        "destination": budget.destination,
        "start_date": budget.start_date,
        "end_date": budget.end_date,
        "currency": budget.currency,
        "status": budget.status,
        "created_at": budget.created_at,
        "total": totals["total"],
        "total_usd": totals["total_usd"],
        "formatted_total": totals["formatted_total"],
        "formatted_total_usd": totals["formatted_total_usd"],
    }


def _lock_new(db: Session, budget: Budget):
    """Reload the budget under a row lock and check it is still New.

    Two reviewers acting at once serialize here; the second sees the first's
    status and gets a BudgetStateError.
    """
    db.refresh(budget, with_for_update=True)
    if budget.status != BudgetStatus.NEW:
        raise BudgetStateError(
            f"Budget {budget.id} is already {budget.status.value} and cannot change status"
        )


def approve_budget(db: Session, budget: Budget, approver: User) -> Budget:
    """
    Approve a New budget and charge its USD total to the area.

    The USD figure uses the budget's own snapshot, so it matches what the
    requester saw at submission time.

    Raises:
        BudgetStateError: If the budget is not New
    """
    _lock_new(db, budget)

    totals = calculate_totals(budget)
    budget.status = BudgetStatus.APPROVED
    budget.approved_by = approver.email
    budget.approved_at = datetime.now(timezone.utc)
    area_service.add_to_used_budget(db, budget.area, totals["total_usd"])

    db.commit()
    db.refresh(budget)

    logger.info(
        f"Budget {budget.id} approved by {approver.email}: "
        f"{totals['formatted_total']} {budget.currency} = {totals['formatted_total_usd']} USD charged to {budget.area}"
    )
    return budget


def reject_budget(db: Session, budget: Budget, reviewer: User) -> Budget:
    """
    Reject a New budget. Area totals are untouched.

    Raises:
        BudgetStateError: If the budget is not New
    """
    _lock_new(db, budget)

    budget.status = BudgetStatus.REJECTED
    db.commit()
    db.refresh(budget)

    logger.info(f"Budget {budget.id} rejected by {reviewer.email}")
    return budget
