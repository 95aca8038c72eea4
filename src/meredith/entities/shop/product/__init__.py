"""Entity package: Product aggregate.

A product owns its price, variations, attributes and location inventories.
The repository reads and writes the whole aggregate at once.
"""

from .entity import Product, ProductAttribute, ProductLocationInventory, Variation
from .repository import ProductRepository
from .table import (
    ProductAttributeTable,
    ProductLocationInventoryTable,
    ProductTable,
    VariationTable,
)

__all__ = [
    "Product",
    "ProductAttribute",
    "ProductLocationInventory",
    "Variation",
    "ProductRepository",
    "ProductTable",
    "ProductAttributeTable",
    "ProductLocationInventoryTable",
    "VariationTable",
]
