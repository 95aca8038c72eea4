from __future__ import annotations

from collections.abc import Callable, Generator

import pytest
from sqlalchemy.pool import StaticPool
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine
from starlette.requests import Request

from src.meredith.core.services import JwtService
from src.meredith.core.services.database.db_manage import register_tables
from src.meredith.runtime.config.config_data import JWTConfig

_JWT_SECRET = "test-secret-key"
_ISSUER = "https://meredith.test"
_AUDIENCE = "api://meredith-test"


@pytest.fixture
def engine() -> Generator[Engine]:
    """Create a fresh in-memory database for each test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Table models must be imported before create_all
    register_tables()
    SQLModel.metadata.create_all(engine)

    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session]:
    """Create a database session bound to the per-test engine."""
    with Session(engine) as session:
        try:
            yield session
        finally:
            session.rollback()


@pytest.fixture
def jwt_config() -> JWTConfig:
    return JWTConfig(secret=_JWT_SECRET, issuer=_ISSUER, audiences=[_AUDIENCE])


@pytest.fixture
def jwt_service(jwt_config: JWTConfig) -> JwtService:
    return JwtService(jwt_config)


@pytest.fixture
def request_factory() -> Callable[..., Request]:
    def _make_request(
        headers: dict[str, str] | None = None, cookies: dict[str, str] | None = None
    ) -> Request:
        raw_headers = [
            (name.lower().encode("ascii"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ]
        if cookies:
            cookie_header = "; ".join(f"{k}={v}" for k, v in cookies.items())
            raw_headers.append((b"cookie", cookie_header.encode("latin-1")))
        scope = {
            "type": "http",
            "headers": raw_headers,
            "method": "GET",
            "path": "/",
            "query_string": b"",
        }
        return Request(scope)

    return _make_request
