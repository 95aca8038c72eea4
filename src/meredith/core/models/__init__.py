"""Input models consumed by Meredith services."""

from .auth import TokenClaims
from .page import PageCreateModel
from .shop import (
    CategoryCreateModel,
    ProductAttributeCreateModel,
    ProductAttributeEditModel,
    ProductCreateBody,
    ProductCreateModel,
    ProductEditBody,
    ProductEditModel,
    ProductLocationInventoryCreateModel,
    ProductLocationInventoryEditModel,
    VariationCreateModel,
    VariationEditModel,
)

__all__ = [
    "TokenClaims",
    "PageCreateModel",
    "CategoryCreateModel",
    "ProductAttributeCreateModel",
    "ProductAttributeEditModel",
    "ProductCreateBody",
    "ProductCreateModel",
    "ProductEditBody",
    "ProductEditModel",
    "ProductLocationInventoryCreateModel",
    "ProductLocationInventoryEditModel",
    "VariationCreateModel",
    "VariationEditModel",
]
