"""Category database table model."""

from sqlmodel import Field

from src.meredith.entities._base import EntityTable


class CategoryTable(EntityTable, table=True):
    """Database persistence model for shop categories."""

    __tablename__ = "shop_categories"

    name: str
    page_id: int = Field(foreign_key="pages.id", index=True)
