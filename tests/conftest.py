import os

# Must be set before the app modules read their configuration
os.environ["FINX_DATABASE_URL"] = "sqlite://"
os.environ["FINX_SECRET_KEY"] = "test-secret"
os.environ["FINX_SINGLE_USER_EMAIL"] = ""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from db import Base, engine
from financeirox import config
from main import app

TODAY = date(2026, 10, 18)  # a Sunday


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def fixed_today(monkeypatch):
    monkeypatch.setattr(config, "today", lambda: TODAY)
    return TODAY


@pytest.fixture
def single_user(monkeypatch):
    email = "motorista@example.com"
    monkeypatch.setattr(config, "SINGLE_USER_EMAIL", email)
    return email


def signup_payload(**overrides):
    payload = {
        "name": "Ana",
        "email": "ana@example.com",
        "password": "segredo123",
        "confirmPassword": "segredo123",
        "jobType": "Uber",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def logged_in(client):
    assert client.post("/api/signup", json=signup_payload()).status_code == 201
    res = client.post("/api/login", json={"email": "ana@example.com", "password": "segredo123"})
    assert res.status_code == 200
    return client
