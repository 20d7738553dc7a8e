import os
import uuid

# keep app import side effects local: no postgres driver, no limiter
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.db import get_db
from app.main import create_app
from app.models import Base

@pytest.fixture()
def db_session() -> Session:
    database_url = os.environ.get("TEST_DATABASE_URL", "sqlite+pysqlite:///:memory:")

    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(database_url, pool_pre_ping=True)

    Base.metadata.create_all(engine)

    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session: Session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()

@pytest.fixture()
def client(db_session: Session) -> TestClient:
    app = create_app()

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    return TestClient(app)

def _register(client, name: str) -> str:
    email = f"{name}+{uuid.uuid4().hex[:8]}@example.com"
    r = client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": "secret123"},
    )
    assert r.status_code == 201, r.text
    return r.json()["token"]

def _auth(jwt: str) -> dict[str, str]:
    return {"authorization": f"bearer {jwt}"}

@pytest.fixture()
def alice(client) -> dict[str, str]:
    return _auth(_register(client, "alice"))

@pytest.fixture()
def bob(client) -> dict[str, str]:
    return _auth(_register(client, "bob"))
