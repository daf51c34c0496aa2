"""
Shared fixtures: an in-memory database behind the FastAPI app.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
import tripbudget.models  # noqa: F401
from tripbudget.db.base import Base
from tripbudget.db.session import get_db
from tripbudget.main import app

PASSWORD = "testpassword123"


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def signup_and_login(client, email):
    """Register a user and return auth headers for it."""
    response = client.post(
        "/api/auth/signup",
        json={"email": email, "full_name": email.split("@")[0], "password": PASSWORD},
    )
    assert response.status_code == 201, response.text
    response = client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin_headers(client):
    # First user to sign up becomes Administrator
    return signup_and_login(client, "admin@miempresa.com")


@pytest.fixture
def requester_headers(client, admin_headers):
    return signup_and_login(client, "ana@miempresa.com")


@pytest.fixture
def approver_headers(client, admin_headers):
    headers = signup_and_login(client, "boss@miempresa.com")
    user_id = client.get("/api/users/me", headers=headers).json()["id"]
    response = client.put(
        f"/api/users/{user_id}/role", json={"role": "Approver"}, headers=admin_headers
    )
    assert response.status_code == 200, response.text
    return headers


@pytest.fixture
def marketing_area(client, admin_headers):
    response = client.post(
        "/api/areas", json={"area": "Marketing", "total_budget": 5000}, headers=admin_headers
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def signup():
    """The signup_and_login helper, for tests that need extra users."""
    return signup_and_login
