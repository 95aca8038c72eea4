"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, HTTPException, Request
from sqlmodel import Session

from src.meredith.api.http.app_data import ApplicationDependencies
from src.meredith.core.models.auth import TokenClaims
from src.meredith.core.services import (
    CategoryService,
    DbSessionService,
    JwtService,
    PageService,
    ProductService,
)
from src.meredith.runtime.context import get_config


def get_database_service(request: Request) -> DbSessionService:
    """Get the database service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.database_service


def get_db_session(
    database_service: DbSessionService = Depends(get_database_service),
) -> Iterator[Session]:
    """Yield one session per request and close it afterwards.

    Uncommitted work is rolled back on close.
    """
    session = database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_jwt_service(request: Request) -> JwtService:
    """Get the JWT service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.jwt_service


def get_page_service(db: Session = Depends(get_db_session)) -> PageService:
    return PageService(db)


def get_category_service(db: Session = Depends(get_db_session)) -> CategoryService:
    return CategoryService(db)


def get_product_service(db: Session = Depends(get_db_session)) -> ProductService:
    return ProductService(db)


def extract_token(request: Request) -> str | None:
    """Return the bearer token, falling back to the auth cookie."""
    auth_header = request.headers.get("Authorization")
    if auth_header:
        scheme, _, token = auth_header.partition(" ")
        if scheme.lower() != "bearer" or not token:
            raise HTTPException(status_code=401, detail="Malformed Authorization header")
        return token.strip()

    return request.cookies.get(get_config().jwt.cookie_name)


def get_current_principal(
    request: Request,
    jwt_service: JwtService = Depends(get_jwt_service),
) -> TokenClaims:
    """Authenticate the request with a bearer token or the auth cookie."""
    token = extract_token(request)
    if not token:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return jwt_service.verify_jwt(token)
