"""Entity: Page."""

from pydantic import Field

from src.meredith.entities._base import Entity


class Page(Entity):
    """Content container that owns products and categories of a tenant."""

    name: str = Field(description="Display name")
    slug: str | None = Field(default=None, description="Unique URL slug")
