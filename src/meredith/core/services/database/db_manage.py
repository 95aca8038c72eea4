"""Schema management for the Meredith database."""

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel


def register_tables() -> None:
    """Import every table model so it is attached to ``SQLModel.metadata``."""
    from src.meredith.entities.core.page import PageTable  # noqa: F401
    from src.meredith.entities.shop.category import CategoryTable  # noqa: F401
    from src.meredith.entities.shop.location import LocationTable  # noqa: F401
    from src.meredith.entities.shop.price import PriceTable  # noqa: F401
    from src.meredith.entities.shop.product import (  # noqa: F401
        ProductAttributeTable,
        ProductLocationInventoryTable,
        ProductTable,
        VariationTable,
    )


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    def create_all(self) -> None:
        """Create all database tables."""
        register_tables()
        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def drop_all(self) -> None:
        """Drop all database tables."""
        register_tables()
        SQLModel.metadata.drop_all(self._engine)
        logger.warning("Database tables dropped.")
