"""
Exchange rate source configuration model.
"""
from sqlalchemy import Column, String
from tripbudget.db.base import BaseModel


class ExchangeRateConfig(BaseModel):
    """URL of a live rate source for one currency.

    The endpoint must answer with JSON like {"rate": 1000.5}, where rate is
    the number of currency units per 1 USD.
    """
    __tablename__ = "exchange_rate_configs"

    currency_code = Column(String(3), unique=True, nullable=False, index=True)
    api_url = Column(String(500), nullable=False)
