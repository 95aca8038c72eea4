"""Product aggregate repository."""

from collections import defaultdict
from collections.abc import Sequence
from decimal import Decimal

from sqlmodel import Session, col, select

from src.meredith.entities._base import Entity
from src.meredith.entities.shop.location import LocationRepository, LocationTable
from src.meredith.entities.shop.price import Price, PriceTable

from .entity import Product, ProductAttribute, ProductLocationInventory, Variation
from .table import (
    ProductAttributeTable,
    ProductLocationInventoryTable,
    ProductTable,
    VariationTable,
)

PricedChildTable = type[VariationTable] | type[ProductAttributeTable]
ChildTable = PricedChildTable | type[ProductLocationInventoryTable]
ChildRow = VariationTable | ProductAttributeTable | ProductLocationInventoryTable


class ProductRepository:
    """Data-access layer for the product aggregate.

    Reads always return fully populated ``Product`` values. Writes flush but
    never commit; committing is left to the caller's unit of work.
    """

    def __init__(self, session: Session) -> None:
        self._session = session
        self._locations = LocationRepository(session)

    # ------------------------------------------------------------------ reads

    def list_by_category(self, category_id: int) -> list[Product]:
        statement = (
            select(ProductTable)
            .where(ProductTable.category_id == category_id)
            .order_by(col(ProductTable.id))
        )
        return self._hydrate(self._session.exec(statement).all())

    def get(self, category_id: int, product_id: int) -> Product | None:
        statement = select(ProductTable).where(
            (ProductTable.category_id == category_id) & (ProductTable.id == product_id)
        )
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return self._hydrate([row])[0]

    def get_by_id(self, product_id: int) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        return self._hydrate([row])[0]

    def _hydrate(self, rows: Sequence[ProductTable]) -> list[Product]:
        """Load the children and prices of ``rows`` and assemble aggregates."""
        if not rows:
            return []

        product_ids = [row.id for row in rows]
        variation_rows = self._children(VariationTable, product_ids)
        attribute_rows = self._children(ProductAttributeTable, product_ids)
        inventory_rows = self._children(ProductLocationInventoryTable, product_ids)

        price_ids = {row.price_id for row in rows}
        price_ids.update(row.price_id for row in variation_rows)
        price_ids.update(row.price_id for row in attribute_rows)
        prices = self._prices(price_ids)
        locations = self._locations.get_many(row.location_id for row in inventory_rows)

        variations: dict[int, list[Variation]] = defaultdict(list)
        for row in variation_rows:
            variations[row.product_id].append(
                Variation(id=row.id, name=row.name, price=prices[row.price_id])
            )

        attributes: dict[int, list[ProductAttribute]] = defaultdict(list)
        for row in attribute_rows:
            attributes[row.product_id].append(
                ProductAttribute(id=row.id, name=row.name, price=prices[row.price_id])
            )

        inventories: dict[int, list[ProductLocationInventory]] = defaultdict(list)
        for row in inventory_rows:
            inventories[row.product_id].append(
                ProductLocationInventory(
                    id=row.id, count=row.count, location=locations[row.location_id]
                )
            )

        return [
            Product(
                id=row.id,
                name=row.name,
                category_id=row.category_id,
                page_id=row.page_id,
                price=prices[row.price_id],
                variations=variations[row.id],
                attributes=attributes[row.id],
                location_inventories=inventories[row.id],
            )
            for row in rows
        ]

    def _children(self, table: ChildTable, product_ids: Sequence[int]) -> list[ChildRow]:
        statement = (
            select(table)
            .where(col(table.product_id).in_(product_ids))
            .order_by(col(table.id))
        )
        return list(self._session.exec(statement).all())

    def _prices(self, price_ids: set[int]) -> dict[int, Price]:
        statement = select(PriceTable).where(col(PriceTable.id).in_(price_ids))
        return {
            row.id: Price.model_validate(row, from_attributes=True)
            for row in self._session.exec(statement)
        }

    # ----------------------------------------------------------------- writes

    def add(self, product: Product) -> Product:
        """Insert a new aggregate and return it with generated ids."""
        price_row = self._add_price(product.price.amount)
        row = ProductTable(
            name=product.name,
            category_id=product.category_id,
            page_id=product.page_id,
            price_id=price_row.id,
        )
        self._session.add(row)
        self._session.flush()

        self._sync_priced_children(VariationTable, row.id, product.variations)
        self._sync_priced_children(ProductAttributeTable, row.id, product.attributes)
        self._sync_inventories(row.id, product.location_inventories)
        self._session.flush()

        return self._hydrate([row])[0]

    def update(self, product: Product) -> Product:
        """Overwrite an existing aggregate.

        Simple fields and the base price amount are updated in place. Child
        collections are replaced wholesale: children whose id is kept are
        updated, children without an id are inserted and the rest are
        deleted together with their prices.
        """
        if product.id is None:
            raise ValueError("Cannot update a product without an id")

        row = self._session.get(ProductTable, product.id)
        if row is None:
            raise ValueError(f"Product with id {product.id} not found")

        row.name = product.name
        row.category_id = product.category_id
        row.page_id = product.page_id
        self._set_price(row.price_id, product.price.amount)
        self._session.add(row)

        self._sync_priced_children(VariationTable, row.id, product.variations)
        self._sync_priced_children(ProductAttributeTable, row.id, product.attributes)
        self._sync_inventories(row.id, product.location_inventories)
        self._session.flush()

        return self._hydrate([row])[0]

    def delete(self, product_id: int) -> bool:
        """Delete the aggregate and every owned row. Locations are kept."""
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return False

        for inventory_row in self._children(ProductLocationInventoryTable, [row.id]):
            self._session.delete(inventory_row)
        self._remove_priced(self._children(VariationTable, [row.id]))
        self._remove_priced(self._children(ProductAttributeTable, [row.id]))

        price_id = row.price_id
        self._session.delete(row)
        self._session.flush()
        self._delete_prices([price_id])
        self._session.flush()
        return True

    def _sync_priced_children(
        self,
        table: PricedChildTable,
        product_id: int,
        children: Sequence[Variation] | Sequence[ProductAttribute],
    ) -> None:
        existing = {row.id: row for row in self._children(table, [product_id])}
        _check_unique_ids(table.__name__, children)
        kept: set[int] = set()

        for child in children:
            if child.id is None:
                price_row = self._add_price(child.price.amount)
                self._session.add(
                    table(product_id=product_id, name=child.name, price_id=price_row.id)
                )
                continue

            row = existing.get(child.id)
            if row is None:
                raise ValueError(
                    f"{table.__name__} {child.id} does not belong to product {product_id}"
                )
            row.name = child.name
            self._set_price(row.price_id, child.price.amount)
            self._session.add(row)
            kept.add(row.id)

        self._remove_priced([row for row_id, row in existing.items() if row_id not in kept])

    def _sync_inventories(
        self, product_id: int, inventories: Sequence[ProductLocationInventory]
    ) -> None:
        existing = {
            row.id: row
            for row in self._children(ProductLocationInventoryTable, [product_id])
        }
        _check_unique_ids(ProductLocationInventoryTable.__name__, inventories)
        kept: set[int] = set()

        for inventory in inventories:
            location_id = inventory.location.id
            if location_id is None:
                location_row = LocationTable(name=inventory.location.name)
                self._session.add(location_row)
                self._session.flush()
                location_id = location_row.id

            if inventory.id is None:
                self._session.add(
                    ProductLocationInventoryTable(
                        product_id=product_id,
                        location_id=location_id,
                        count=inventory.count,
                    )
                )
                continue

            row = existing.get(inventory.id)
            if row is None:
                raise ValueError(
                    f"Inventory {inventory.id} does not belong to product {product_id}"
                )
            row.count = inventory.count
            row.location_id = location_id
            self._session.add(row)
            kept.add(row.id)

        for row_id, row in existing.items():
            if row_id not in kept:
                self._session.delete(row)

    def _add_price(self, amount: Decimal) -> PriceTable:
        price_row = PriceTable(amount=amount)
        self._session.add(price_row)
        self._session.flush()
        return price_row

    def _set_price(self, price_id: int, amount: Decimal) -> None:
        price_row = self._session.get(PriceTable, price_id)
        if price_row is None:
            raise ValueError(f"Price with id {price_id} not found")
        price_row.amount = amount
        self._session.add(price_row)

    def _remove_priced(self, rows: Sequence[VariationTable | ProductAttributeTable]) -> None:
        if not rows:
            return
        price_ids = [row.price_id for row in rows]
        for row in rows:
            self._session.delete(row)
        self._session.flush()
        self._delete_prices(price_ids)

    def _delete_prices(self, price_ids: Sequence[int]) -> None:
        for price_id in price_ids:
            price_row = self._session.get(PriceTable, price_id)
            if price_row is not None:
                self._session.delete(price_row)


def _check_unique_ids(table_name: str, children: Sequence[Entity]) -> None:
    ids = [child.id for child in children if child.id is not None]
    duplicates = sorted({child_id for child_id in ids if ids.count(child_id) > 1})
    if duplicates:
        raise ValueError(f"{table_name} ids listed more than once: {duplicates}")
