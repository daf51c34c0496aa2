"""
Currency normalization to USD and display formatting.

Rates are expressed as units of a currency per 1 USD, so converting to USD
divides by the rate. A budget's own exchange-rate snapshot, captured when it
was created, takes precedence over the static table so that approving or
reporting on a budget later always yields the same USD figure.
"""
from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional
import logging

logger = logging.getLogger(__name__)

BASE_CURRENCY = "USD"

# Last-resort defaults when no live rate was captured
STATIC_EXCHANGE_RATES: Mapping[str, float] = MappingProxyType({
    "USD": 1.0,
    "ARS": 1000.0,
    "COP": 4000.0,
    "BRL": 5.0,
    "EUR": 0.92,
})

CURRENCY_SYMBOLS: Mapping[str, str] = MappingProxyType({
    "USD": "$",
    "ARS": "$",
    "COP": "$",
    "BRL": "R$",
    "EUR": "€",
})


class UnknownCurrencyError(LookupError):
    """Raised when a currency has no known rate or symbol.

    This is a configuration defect; callers must not substitute a default.
    """

    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(f"No exchange rate or symbol configured for currency '{currency}'")


class UsdRate(NamedTuple):
    rate: float  # Units of currency per 1 USD
    source: str  # "base", "snapshot" or "static"


def _code(currency) -> str:
    # Accepts plain strings as well as Currency enum members
    return str(getattr(currency, "value", currency)).upper()


def resolve_usd_rate(currency, budget=None) -> UsdRate:
    """
    Find the rate used to convert `currency` to USD.

    Args:
        currency: Currency code or Currency member
        budget: Optional budget whose `exchange_rates` snapshot is preferred

    Raises:
        UnknownCurrencyError: If neither the snapshot nor the static table has a rate
    """
    code = _code(currency)
    if code == BASE_CURRENCY:
        return UsdRate(1.0, "base")

    snapshot = getattr(budget, "exchange_rates", None) if budget is not None else None
    if snapshot:
        rate = snapshot.get(code)
        # A zero rate is treated as missing
        if rate:
            return UsdRate(float(rate), "snapshot")

    if code in STATIC_EXCHANGE_RATES:
        return UsdRate(STATIC_EXCHANGE_RATES[code], "static")

    logger.error(f"No exchange rate available for {code}")
    raise UnknownCurrencyError(code)


def convert_to_usd(amount: float, currency, budget=None) -> float:
    """
    Convert an amount to USD.

    USD amounts are returned unchanged. Otherwise the budget's snapshot rate
    is used when present, falling back to STATIC_EXCHANGE_RATES.
    """
    if _code(currency) == BASE_CURRENCY:
        return amount
    return amount / resolve_usd_rate(currency, budget).rate


def format_currency(amount: float, currency) -> str:
    """Render an amount with its currency symbol, grouped, two decimals."""
    code = _code(currency)
    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        raise UnknownCurrencyError(code)
    return f"{symbol}{amount:,.2f}"
