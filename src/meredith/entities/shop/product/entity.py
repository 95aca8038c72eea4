"""Entity: Product aggregate."""

from typing import Any

from pydantic import Field

from src.meredith.entities._base import Entity
from src.meredith.entities.shop.location import Location
from src.meredith.entities.shop.price import Price


class Variation(Entity):
    """Purchasable variant of a product with its own price."""

    name: str = Field(description="Variation name, never empty")
    price: Price


class ProductAttribute(Entity):
    """Optional add-on of a product with its own price."""

    name: str = Field(description="Attribute name")
    price: Price


class ProductLocationInventory(Entity):
    """Stock count of a product at one location."""

    count: int = Field(description="Units in stock")
    location: Location


class Product(Entity):
    """Product aggregate root.

    Children are plain values; they carry no back-reference to the product.
    """

    name: str = Field(description="Product name")
    category_id: int = Field(description="Category the product is listed in")
    page_id: int = Field(description="Owning page")
    price: Price
    variations: list[Variation] = Field(default_factory=list)
    attributes: list[ProductAttribute] = Field(default_factory=list)
    location_inventories: list[ProductLocationInventory] = Field(default_factory=list)

    def __eq__(self, other: Any) -> bool:
        """Compare products by identity and business attributes."""
        if not isinstance(other, Product):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.category_id == other.category_id
            and self.page_id == other.page_id
            and self.price == other.price
            and self.variations == other.variations
            and self.attributes == other.attributes
            and self.location_inventories == other.location_inventories
        )

    def __hash__(self) -> int:
        return hash((self.id, self.name, self.category_id, self.page_id))
