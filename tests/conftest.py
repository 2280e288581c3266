import os

# must be set before taskflow.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_taskflow.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from taskflow.main import app
from taskflow.database import SessionLocal, Base, engine


# Recreate all tables for each test
@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def register(client, name, email, password="secret1", role=None):
    body = {"name": name, "email": email, "password": password}
    if role:
        body["role"] = role
    r = client.post("/api/auth/register", json=body)
    assert r.status_code == 201, r.text
    return r.json()["userId"]


def login(client, email, password="secret1"):
    r = client.post("/api/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["token"]


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice(client):
    user_id = register(client, "Alice", "alice@example.com")
    return user_id, bearer(login(client, "alice@example.com"))


@pytest.fixture
def bob_admin(client):
    user_id = register(client, "Bob", "bob@example.com", role="admin")
    return user_id, bearer(login(client, "bob@example.com"))


@pytest.fixture
def carol(client):
    user_id = register(client, "Carol", "carol@example.com")
    return user_id, bearer(login(client, "carol@example.com"))
