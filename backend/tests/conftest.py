import os

# Settings are read at import time; keep tests off the real gateway and disk.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["HABIT_ANALYSIS_ENABLED"] = "false"
os.environ.pop("LOVABLE_API_KEY", None)

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hub import models  # noqa: F401  registers tables
from hub.db import Base, enable_sqlite_foreign_keys, get_db
from hub.deps import get_gateway
from hub.errors import GatewayError
from hub.main import app


class FakeGateway:
    """Stands in for GatewayClient; records every completion request."""

    def __init__(self, content: str = "{}", configured: bool = True, status: int | None = None):
        self.content = content
        self.configured = configured
        self.status = status
        self.calls = []

    async def complete(self, messages, model=None):
        self.calls.append({"messages": messages, "model": model})
        if self.status is not None:
            raise GatewayError(self.status, "upstream said no")
        return self.content

    @property
    def system_prompt(self) -> str:
        return self.calls[-1]["messages"][0]["content"]


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(eng)
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def client(session_factory, gateway):
    def _get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user_id():
    return uuid.uuid4()


@pytest.fixture
def headers(user_id):
    return {"X-User-Id": str(user_id), "X-User-Email": "ada@example.com", "X-User-Name": "Ada"}


@pytest.fixture
def other_headers():
    return {"X-User-Id": str(uuid.uuid4())}
