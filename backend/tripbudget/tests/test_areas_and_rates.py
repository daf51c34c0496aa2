"""
Tests for area management, exchange rate configuration and the dashboard.
"""
import httpx
from tripbudget.services import fx_service


def test_area_lifecycle(client, admin_headers):
    response = client.post("/api/areas", json={"area": "  Sales ", "total_budget": 1000}, headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["area"] == "Sales"
    assert response.json()["used_budget"] == 0

    # Posting an existing area replaces its allotment
    response = client.post("/api/areas", json={"area": "Sales", "total_budget": 1500}, headers=admin_headers)
    assert response.json()["total_budget"] == 1500

    response = client.put("/api/areas/Sales", json={"total_budget": 2000}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["remaining_budget"] == 2000

    areas = client.get("/api/areas", headers=admin_headers).json()
    assert [(a["area"], a["total_budget"]) for a in areas] == [("Sales", 2000)]


def test_area_validation(client, admin_headers):
    assert client.post("/api/areas", json={"area": "IT", "total_budget": 0}, headers=admin_headers).status_code == 422
    assert client.post("/api/areas", json={"area": " ", "total_budget": 10}, headers=admin_headers).status_code == 422
    assert client.put("/api/areas/Nope", json={"total_budget": 10}, headers=admin_headers).status_code == 404


def test_only_admin_configures_areas(client, requester_headers, marketing_area):
    response = client.post("/api/areas", json={"area": "IT", "total_budget": 10}, headers=requester_headers)
    assert response.status_code == 403
    # Requesters still need the list to pick an area
    assert client.get("/api/areas", headers=requester_headers).status_code == 200


def test_rate_source_configuration(client, admin_headers):
    response = client.put(
        "/api/exchange-rates/config/COP", json={"api_url": "https://rates.miempresa.com/cop"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["currency_code"] == "COP"

    configs = client.get("/api/exchange-rates/config", headers=admin_headers).json()
    assert [(c["currency_code"], c["api_url"]) for c in configs] == [("COP", "https://rates.miempresa.com/cop")]


def test_rate_source_validation(client, admin_headers, requester_headers):
    assert client.put(
        "/api/exchange-rates/config/ARS", json={"api_url": "  "}, headers=admin_headers
    ).status_code == 400
    assert client.put(
        "/api/exchange-rates/config/GBP", json={"api_url": "https://x"}, headers=admin_headers
    ).status_code == 422
    assert client.put(
        "/api/exchange-rates/config/ARS", json={"api_url": "https://x"}, headers=requester_headers
    ).status_code == 403


def test_latest_rates(client, admin_headers, monkeypatch):
    client.put("/api/exchange-rates/config/BRL", json={"api_url": "https://rates/brl"}, headers=admin_headers)
    client.put("/api/exchange-rates/config/EUR", json={"api_url": "https://rates/eur"}, headers=admin_headers)

    def fake_get(url, timeout=None):
        if url.endswith("eur"):
            raise httpx.ConnectTimeout("timed out")
        return httpx.Response(200, json={"rate": 5.4}, request=httpx.Request("GET", url))

    monkeypatch.setattr(fx_service.httpx, "get", fake_get)

    response = client.get("/api/exchange-rates/latest", headers=admin_headers)
    assert response.status_code == 200
    rates = {entry["currency"]: entry for entry in response.json()["rates"]}
    assert rates["BRL"]["rate"] == 5.4
    assert rates["BRL"]["source"] == "live"
    assert rates["EUR"]["rate"] == 0.92
    assert rates["EUR"]["source"] == "static"
    assert rates["USD"]["rate"] == 1


def test_dashboard(client, admin_headers, requester_headers, marketing_area):
    client.post("/api/areas", json={"area": "Sales", "total_budget": 100}, headers=admin_headers)
    base = {
        "start_date": "2025-03-01",
        "end_date": "2025-03-01",
        "destination": "Brasil",
        "travelers": ["Ana"],
    }
    brl = client.post("/api/budgets", json={
        **base, "area": "Marketing", "currency": "BRL",
        "general_expense": {"accommodation": 250, "flights": 250},
    }, headers=requester_headers).json()
    usd = client.post("/api/budgets", json={
        **base, "area": "Sales", "currency": "USD",
        "general_expense": {"accommodation": 30, "flights": 0},
    }, headers=requester_headers).json()
    client.post("/api/budgets", json={
        **base, "area": "Sales", "currency": "USD",
        "general_expense": {"accommodation": 999, "flights": 0},
    }, headers=requester_headers)

    client.post(f"/api/budgets/{brl['id']}/approve", headers=admin_headers)
    client.post(f"/api/budgets/{usd['id']}/approve", headers=admin_headers)

    response = client.get("/api/dashboard", headers=admin_headers)
    assert response.status_code == 200
    summary = response.json()
    assert summary["total_budgets"] == 3
    assert summary["approved_budgets"] == 2
    assert summary["total_spent_usd"] == 130
    assert summary["formatted_total_spent_usd"] == "$130.00"
    assert summary["active_areas"] == 2

    areas = {a["area"]: a for a in summary["areas"]}
    assert areas["Marketing"]["spent_usd"] == 100
    assert areas["Marketing"]["remaining_usd"] == 4900
    assert areas["Sales"]["spent_usd"] == 30
    assert areas["Sales"]["used_budget"] == 30


def test_dashboard_requires_reviewer(client, requester_headers):
    assert client.get("/api/dashboard", headers=requester_headers).status_code == 403


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
