"""
Pydantic schemas for exchange rate configuration and lookups.
"""
from pydantic import BaseModel
from datetime import datetime
from typing import List
from tripbudget.models.budget import Currency


class ExchangeRateConfigUpdate(BaseModel):
    """Schema for setting a currency's rate source URL."""
    api_url: str


class ExchangeRateConfigResponse(BaseModel):
    """Schema for exchange rate configuration response."""
    id: int
    currency_code: Currency
    api_url: str
    updated_at: datetime

    model_config = {"from_attributes": True}


class ExchangeRateEntry(BaseModel):
    """Schema for one effective rate."""
    currency: Currency
    rate: float  # Units of currency per 1 USD
    source: str  # "live" or "static"


class LatestExchangeRates(BaseModel):
    """Schema for the effective rate table at a point in time."""
    fetched_at: datetime
    rates: List[ExchangeRateEntry]
