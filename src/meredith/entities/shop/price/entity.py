"""Entity: Price."""

from decimal import Decimal

from pydantic import Field

from src.meredith.entities._base import Entity


class Price(Entity):
    """Monetary amount owned by exactly one product, variation or attribute."""

    amount: Decimal = Field(description="Amount in the page currency")
