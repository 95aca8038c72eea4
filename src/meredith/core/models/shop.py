"""Shop input models.

Create models never carry ids. Edit models carry the ids of the rows they
keep; a child without an ``id`` is inserted as a new row.

``*Body`` models are what HTTP clients send; the router completes them with
the ids taken from the path.
"""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, Field

# Matches the NUMERIC(18, 2) price column; extra precision is rejected, not rounded
Money = Annotated[Decimal, Field(max_digits=18, decimal_places=2)]


class CategoryCreateModel(BaseModel):
    name: str = Field(min_length=1)
    page_id: int


class VariationCreateModel(BaseModel):
    # Emptiness is checked by the service so it surfaces as an invalid action
    name: str | None = None
    price: Money


class ProductAttributeCreateModel(BaseModel):
    name: str
    price: Money


class ProductLocationInventoryCreateModel(BaseModel):
    count: int


class ProductCreateBody(BaseModel):
    name: str
    page_id: int
    price: Money
    variations: list[VariationCreateModel] = Field(default_factory=list)
    attributes: list[ProductAttributeCreateModel] = Field(default_factory=list)
    location_inventories: list[ProductLocationInventoryCreateModel] = Field(
        default_factory=list
    )


class ProductCreateModel(ProductCreateBody):
    category_id: int


class VariationEditModel(BaseModel):
    id: int | None = None
    name: str | None = None
    price_id: int | None = None
    price: Money


class ProductAttributeEditModel(BaseModel):
    id: int | None = None
    name: str
    price_id: int | None = None
    price: Money


class ProductLocationInventoryEditModel(BaseModel):
    id: int | None = None
    count: int
    location_id: int


class ProductEditBody(BaseModel):
    name: str
    page_id: int
    price: Money
    variations: list[VariationEditModel] = Field(default_factory=list)
    attributes: list[ProductAttributeEditModel] = Field(default_factory=list)
    location_inventories: list[ProductLocationInventoryEditModel] = Field(
        default_factory=list
    )


class ProductEditModel(ProductEditBody):
    id: int
    category_id: int
