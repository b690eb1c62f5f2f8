from __future__ import annotations

import os
import sys
from pathlib import Path

# Settings must be in place before config is imported
os.environ["ENV"] = "test"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DATABASE_URL"] = "sqlite://"

# Modules under app/ import each other by bare name (config, stores, ...)
APP = Path(__file__).resolve().parents[1] / "app"
if str(APP) not in sys.path:
    sys.path.insert(0, str(APP))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from database import Base, SessionLocal, engine  # noqa: E402
from main import app  # noqa: E402
from services.asset_service import AssetStore, get_asset_store  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def assets(tmp_path: Path) -> AssetStore:
    return AssetStore(tmp_path / "uploads")


@pytest.fixture
def client(assets: AssetStore):
    app.dependency_overrides[get_asset_store] = lambda: assets
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def login_token(client: TestClient, email: str, password: str) -> str:
    """Register (if needed) and log in; return the bearer token."""
    client.post("/api/auth/register", json={"email": email, "password": password})
    r = client.post("/api/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["token"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
