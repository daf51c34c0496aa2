"""
Exchange rate configuration and lookup routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from datetime import datetime, timezone
from typing import List
from tripbudget.db.session import get_db
from tripbudget.models.user import User
from tripbudget.models.budget import Currency
from tripbudget.schemas.exchange_rate import (
    ExchangeRateConfigResponse, ExchangeRateConfigUpdate, LatestExchangeRates
)
from tripbudget.api.dependencies import get_current_user, require_admin
from tripbudget.services.fx_service import effective_rates, get_rate_configs, set_rate_source

router = APIRouter(prefix="/exchange-rates", tags=["exchange-rates"])


@router.get("/config", response_model=List[ExchangeRateConfigResponse])
async def list_rate_sources(
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """List the configured rate source URL per currency."""
    return get_rate_configs(db)


@router.put("/config/{currency}", response_model=ExchangeRateConfigResponse)
async def update_rate_source(
    currency: Currency,
    config_data: ExchangeRateConfigUpdate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Set the rate source URL for a currency.

    The URL must return JSON like {"rate": 1000.5}: units of the currency per 1 USD.
    """
    try:
        return set_rate_source(db, currency.value, config_data.api_url)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


@router.get("/latest", response_model=LatestExchangeRates)
async def get_latest_rates(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the rates a budget created now would use, live where available."""
    return {
        "fetched_at": datetime.now(timezone.utc),
        "rates": effective_rates(db),
    }
