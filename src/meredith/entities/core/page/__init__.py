"""Entity package: Page."""

from .entity import Page
from .repository import PageRepository
from .table import PageTable

__all__ = ["Page", "PageRepository", "PageTable"]
