"""Entity: Category."""

from pydantic import Field

from src.meredith.entities._base import Entity


class Category(Entity):
    """Shop category grouping the products of a page."""

    name: str = Field(description="Display name")
    page_id: int = Field(description="Owning page")
