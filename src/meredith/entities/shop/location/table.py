"""Location database table model."""

from src.meredith.entities._base import EntityTable


class LocationTable(EntityTable, table=True):
    """Database persistence model for stock locations."""

    __tablename__ = "shop_locations"

    name: str
