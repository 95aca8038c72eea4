"""Product aggregate database table models.

Children reference the product and their price by foreign key only; the
repository assembles the aggregate explicitly.
"""

from sqlmodel import Field

from src.meredith.entities._base import EntityTable


class ProductTable(EntityTable, table=True):
    """Database persistence model for products."""

    __tablename__ = "shop_products"

    name: str
    category_id: int = Field(foreign_key="shop_categories.id", index=True)
    page_id: int = Field(foreign_key="pages.id", index=True)
    price_id: int = Field(foreign_key="shop_prices.id")


class VariationTable(EntityTable, table=True):
    """Database persistence model for product variations."""

    __tablename__ = "shop_variations"

    product_id: int = Field(foreign_key="shop_products.id", index=True)
    name: str
    price_id: int = Field(foreign_key="shop_prices.id")


class ProductAttributeTable(EntityTable, table=True):
    """Database persistence model for product attributes."""

    __tablename__ = "shop_product_attributes"

    product_id: int = Field(foreign_key="shop_products.id", index=True)
    name: str
    price_id: int = Field(foreign_key="shop_prices.id")


class ProductLocationInventoryTable(EntityTable, table=True):
    """Database persistence model for per-location stock counts."""

    __tablename__ = "shop_product_location_inventories"

    product_id: int = Field(foreign_key="shop_products.id", index=True)
    location_id: int = Field(foreign_key="shop_locations.id", index=True)
    count: int = 0
