"""Core services exports."""

from .database.db_manage import DbManageService
from .database.db_session import DbSessionService
from .jwt_service import JwtService
from .page_service import PageService
from .shop import CategoryService, ProductService

__all__ = [
    "DbManageService",
    "DbSessionService",
    "JwtService",
    "PageService",
    "CategoryService",
    "ProductService",
]
