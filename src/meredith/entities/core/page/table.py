"""Page database table model."""

from sqlmodel import Field

from src.meredith.entities._base import EntityTable


class PageTable(EntityTable, table=True):
    """Database persistence model for pages."""

    __tablename__ = "pages"

    name: str
    slug: str | None = Field(default=None, unique=True, index=True)
