"""
Tests for live exchange rate fetching and budget snapshots.
"""
import httpx
import pytest
from tripbudget.models.exchange_rate import ExchangeRateConfig
from tripbudget.services import fx_service


def fake_get(responses):
    """Build an httpx.get replacement answering from a url -> rate/exception map."""

    def _get(url, timeout=None):
        result = responses[url]
        if isinstance(result, Exception):
            raise result
        if isinstance(result, httpx.Response):
            return result
        return httpx.Response(200, json={"rate": result}, request=httpx.Request("GET", url))

    return _get


def test_fetch_rate_reads_rate_field(monkeypatch):
    monkeypatch.setattr(fx_service.httpx, "get", fake_get({"https://rates/ars": 1000.5}))
    assert fx_service.fetch_rate("https://rates/ars") == 1000.5


def test_fetch_rate_http_error(monkeypatch):
    url = "https://rates/down"
    response = httpx.Response(503, request=httpx.Request("GET", url))
    monkeypatch.setattr(fx_service.httpx, "get", fake_get({url: response}))
    with pytest.raises(ValueError, match="503"):
        fx_service.fetch_rate(url)


def test_fetch_rate_network_error(monkeypatch):
    url = "https://rates/unreachable"
    monkeypatch.setattr(fx_service.httpx, "get", fake_get({url: httpx.ConnectError("refused")}))
    with pytest.raises(ValueError, match="network"):
        fx_service.fetch_rate(url)


def test_fetch_rate_rejects_non_json(monkeypatch):
    url = "https://rates/html"
    response = httpx.Response(200, text="<html></html>", request=httpx.Request("GET", url))
    monkeypatch.setattr(fx_service.httpx, "get", fake_get({url: response}))
    with pytest.raises(ValueError, match="invalid JSON"):
        fx_service.fetch_rate(url)


@pytest.mark.parametrize("payload", [{"value": 10}, {"rate": "abc"}, {"rate": None}, [1, 2]])
def test_fetch_rate_rejects_missing_rate(monkeypatch, payload):
    url = "https://rates/bad"
    response = httpx.Response(200, json=payload, request=httpx.Request("GET", url))
    monkeypatch.setattr(fx_service.httpx, "get", fake_get({url: response}))
    with pytest.raises(ValueError):
        fx_service.fetch_rate(url)


@pytest.mark.parametrize("rate", [0, -5])
def test_fetch_rate_rejects_non_positive(monkeypatch, rate):
    monkeypatch.setattr(fx_service.httpx, "get", fake_get({"https://rates/x": rate}))
    with pytest.raises(ValueError, match="Invalid exchange rate"):
        fx_service.fetch_rate("https://rates/x")


@pytest.mark.parametrize("body", [
    b'{"rate": NaN}',
    b'{"rate": Infinity}',
    b'{"rate": -Infinity}',
    b'{"rate": "NaN"}',
    b'{"rate": "Infinity"}',
    b'{"rate": true}',
    b'{"rate": false}',
])
def test_fetch_rate_rejects_non_finite_and_booleans(monkeypatch, body):
    url = "https://rates/odd"
    response = httpx.Response(
        200,
        content=body,
        headers={"Content-Type": "application/json"},
        request=httpx.Request("GET", url),
    )
    monkeypatch.setattr(fx_service.httpx, "get", fake_get({url: response}))
    with pytest.raises(ValueError):
        fx_service.fetch_rate(url)


def test_capture_skips_non_finite_rate(db_session, monkeypatch):
    url = "https://rates/ars"
    db_session.add(ExchangeRateConfig(currency_code="ARS", api_url=url))
    db_session.commit()
    response = httpx.Response(
        200,
        content=b'{"rate": NaN}',
        headers={"Content-Type": "application/json"},
        request=httpx.Request("GET", url),
    )
    monkeypatch.setattr(fx_service.httpx, "get", fake_get({url: response}))

    assert fx_service.capture_exchange_rates(db_session) is None


def test_capture_without_configs_has_no_snapshot(db_session):
    assert fx_service.capture_exchange_rates(db_session) is None


def test_capture_skips_failing_sources(db_session, monkeypatch):
    db_session.add_all([
        ExchangeRateConfig(currency_code="ARS", api_url="https://rates/ars"),
        ExchangeRateConfig(currency_code="BRL", api_url="https://rates/brl"),
        ExchangeRateConfig(currency_code="USD", api_url="https://rates/usd"),
    ])
    db_session.commit()
    monkeypatch.setattr(fx_service.httpx, "get", fake_get({
        "https://rates/ars": 950.0,
        "https://rates/brl": httpx.ConnectError("refused"),
    }))

    assert fx_service.capture_exchange_rates(db_session) == {"ARS": 950.0}


def test_effective_rates_mark_sources(db_session, monkeypatch):
    db_session.add(ExchangeRateConfig(currency_code="EUR", api_url="https://rates/eur"))
    db_session.commit()
    monkeypatch.setattr(fx_service.httpx, "get", fake_get({"https://rates/eur": 0.95}))

    rates = {entry["currency"]: entry for entry in fx_service.effective_rates(db_session)}
    assert rates["EUR"] == {"currency": "EUR", "rate": 0.95, "source": "live"}
    assert rates["ARS"] == {"currency": "ARS", "rate": 1000.0, "source": "static"}
    assert set(rates) == {"USD", "ARS", "COP", "BRL", "EUR"}


def test_set_rate_source_upserts(db_session):
    first = fx_service.set_rate_source(db_session, "ars", "https://rates/a")
    second = fx_service.set_rate_source(db_session, "ARS", " https://rates/b ")
    assert first.id == second.id
    assert second.currency_code == "ARS"
    assert second.api_url == "https://rates/b"


def test_set_rate_source_rejects_empty_url(db_session):
    with pytest.raises(ValueError):
        fx_service.set_rate_source(db_session, "ARS", "   ")
