import os

# Configure an isolated in-memory database before the application is imported.
os.environ["DATABASE_URL"] = "sqlite+pysqlite://"
os.environ["GENERATION_DELAY_SECONDS"] = "0"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["AUTH_RATE_LIMIT_REGISTER_MAX_REQUESTS"] = "100"

import pytest
from fastapi.testclient import TestClient

from smartschedule.core.config import get_settings
from smartschedule.db.base import Base
from smartschedule.db.bootstrap import ensure_admin_user
from smartschedule.db.session import SessionLocal, engine
from smartschedule.main import app
from smartschedule.services.mailbox import clear_mock_mailbox
from smartschedule.services.rate_limit import clear_rate_limiter


@pytest.fixture(autouse=True)
def fresh_database():
    clear_rate_limiter()
    clear_mock_mailbox()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    clear_mock_mailbox()
    clear_rate_limiter()


@pytest.fixture()
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def db_session():
    db = SessionLocal()
    ensure_admin_user(db, get_settings())
    db.commit()
    try:
        yield db
    finally:
        db.rollback()
        db.close()


@pytest.fixture()
def admin_token(client):
    settings = get_settings()
    response = client.post(
        "/api/auth/login",
        json={"role": "admin", "email": settings.admin_email, "password": settings.admin_password},
    )
    assert response.status_code == 200
    return response.json()["access_token"]

