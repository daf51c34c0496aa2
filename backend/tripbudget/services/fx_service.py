"""
Foreign exchange service for live rate lookups and budget snapshots.
"""
from sqlalchemy.orm import Session
from typing import Dict, List, Optional
from tripbudget.models.exchange_rate import ExchangeRateConfig
from tripbudget.models.budget import Currency
from tripbudget.services.currency import BASE_CURRENCY, STATIC_EXCHANGE_RATES
import httpx
import logging
import math
from tripbudget.core.config import settings

logger = logging.getLogger(__name__)


def fetch_rate(api_url: str) -> float:
    """
    Fetch a rate from a configured source.

    The source must answer with JSON like {"rate": 1000.5}, where rate is the
    number of currency units per 1 USD.

    Raises:
        ValueError: On HTTP or network failure, malformed payload, or a rate
            that is not a finite positive number
    """
    try:
        response = httpx.get(api_url, timeout=settings.FX_HTTP_TIMEOUT)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        logger.error(f"HTTP error from rate source {api_url}: {e.response.status_code}")
        raise ValueError(f"Rate source HTTP error: {e.response.status_code}")
    except httpx.HTTPError as e:
        logger.error(f"Network error from rate source {api_url}: {e}")
        raise ValueError(f"Rate source network error: {str(e)}")
    except ValueError:
        # Body was not JSON
        logger.error(f"Rate source {api_url} returned a non-JSON body")
        raise ValueError("Rate source returned invalid JSON")

    if settings.DEBUG:
        logger.debug(f"Rate source response: {data}")

    raw_rate = data.get("rate") if isinstance(data, dict) else None
    # float(True) would silently be 1.0
    if isinstance(raw_rate, bool):
        raise ValueError(f"Rate source returned no usable 'rate': {raw_rate!r}")
    try:
        rate = float(raw_rate)
    except (TypeError, ValueError):
        raise ValueError(f"Rate source returned no usable 'rate': {raw_rate!r}")

    # NaN compares False against everything, so check finiteness first
    if not math.isfinite(rate) or rate <= 0:
        raise ValueError(f"Invalid exchange rate: {rate}")
    return rate


def get_rate_configs(db: Session) -> List[ExchangeRateConfig]:
    """All configured rate sources, ordered by currency code."""
    return db.query(ExchangeRateConfig).order_by(ExchangeRateConfig.currency_code).all()


def fetch_live_rates(db: Session) -> Dict[str, float]:
    """
    Fetch every configured non-USD currency.

    A failing source is logged and skipped; that currency then falls back to
    the static table wherever it is converted.
    """
    rates: Dict[str, float] = {}
    for config in get_rate_configs(db):
        currency = config.currency_code.upper()
        if currency == BASE_CURRENCY:
            continue
        try:
            rates[currency] = fetch_rate(config.api_url)
        except ValueError as e:
            logger.warning(f"Skipping live rate for {currency}: {e}")
            continue
        logger.info(f"Fetched live rate {currency} = {rates[currency]} per USD")
    return rates


def capture_exchange_rates(db: Session) -> Optional[Dict[str, float]]:
    """Snapshot of live rates to store with a new budget, or None when none are available."""
    rates = fetch_live_rates(db)
    return rates or None


def effective_rates(db: Session) -> List[dict]:
    """Rate per supported currency with its source, live taking precedence over static."""
    live = fetch_live_rates(db)
    entries = []
    for currency in Currency:
        code = currency.value
        if code in live:
            entries.append({"currency": code, "rate": live[code], "source": "live"})
        else:
            entries.append({"currency": code, "rate": STATIC_EXCHANGE_RATES[code], "source": "static"})
    return entries


def set_rate_source(db: Session, currency: str, api_url: str) -> ExchangeRateConfig:
    """Create or replace the rate source URL for a currency."""
    currency_upper = currency.upper()
    api_url = api_url.strip()
    if not api_url:
        raise ValueError("The URL must not be empty")

    config = db.query(ExchangeRateConfig).filter(
        ExchangeRateConfig.currency_code == currency_upper
    ).first()
    if config:
        config.api_url = api_url
    else:
        config = ExchangeRateConfig(currency_code=currency_upper, api_url=api_url)
        db.add(config)

    db.commit()
    db.refresh(config)
    logger.info(f"Rate source for {currency_upper} set to {api_url}")
    return config
