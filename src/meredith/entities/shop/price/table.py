"""Price database table model."""

from decimal import Decimal

from sqlmodel import Field

from src.meredith.entities._base import EntityTable


class PriceTable(EntityTable, table=True):
    """Database persistence model for prices.

    Prices have no owner column; products, variations and attributes point
    at their price through ``price_id``.
    """

    __tablename__ = "shop_prices"

    amount: Decimal = Field(max_digits=18, decimal_places=2)
