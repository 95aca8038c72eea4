"""Entity: Location."""

from pydantic import Field

from src.meredith.entities._base import Entity


class Location(Entity):
    """Stock location referenced by product inventories."""

    name: str = Field(description="Location name")
