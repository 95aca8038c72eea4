"""Entities organised by business module.

Each entity package contains:
- entity.py: pydantic domain model returned by repositories
- table.py: SQLModel persistence model
- repository.py: data access layer mapping rows to domain models

Table rows never leave their repository.
"""

from .core.page import Page, PageRepository, PageTable
from .shop.category import Category, CategoryRepository, CategoryTable
from .shop.location import Location, LocationRepository, LocationTable
from .shop.price import Price, PriceTable
from .shop.product import (
    Product,
    ProductAttribute,
    ProductAttributeTable,
    ProductLocationInventory,
    ProductLocationInventoryTable,
    ProductRepository,
    ProductTable,
    Variation,
    VariationTable,
)

__all__ = [
    "Page",
    "PageRepository",
    "PageTable",
    "Category",
    "CategoryRepository",
    "CategoryTable",
    "Location",
    "LocationRepository",
    "LocationTable",
    "Price",
    "PriceTable",
    "Product",
    "ProductAttribute",
    "ProductAttributeTable",
    "ProductLocationInventory",
    "ProductLocationInventoryTable",
    "ProductRepository",
    "ProductTable",
    "Variation",
    "VariationTable",
]
