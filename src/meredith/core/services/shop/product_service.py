"""Product service: lifecycle and validation of the shop product aggregate."""

from collections.abc import Sequence
from typing import Any

from loguru import logger
from sqlmodel import Session

from src.meredith.core.exceptions import InvalidActionError, RecordNotFoundError
from src.meredith.core.models.shop import (
    ProductAttributeEditModel,
    ProductCreateModel,
    ProductEditModel,
    VariationCreateModel,
    VariationEditModel,
)
from src.meredith.entities.core.page import PageRepository
from src.meredith.entities.shop.category import CategoryRepository
from src.meredith.entities.shop.location import Location, LocationRepository
from src.meredith.entities.shop.price import Price
from src.meredith.entities.shop.product import (
    Product,
    ProductAttribute,
    ProductLocationInventory,
    ProductRepository,
    Variation,
)


class ProductService:
    """CRUD for products scoped by category.

    Every check runs before the first write, so a rejected request leaves
    the database untouched. Storage errors are not caught here.
    """

    def __init__(self, session: Session) -> None:
        self._session = session
        self._products = ProductRepository(session)
        self._pages = PageRepository(session)
        self._categories = CategoryRepository(session)
        self._locations = LocationRepository(session)

    def list_products(self, category_id: int) -> list[Product]:
        """Return every product of ``category_id``; empty when there are none."""
        return self._products.list_by_category(category_id)

    def get_product(self, category_id: int, product_id: int) -> Product:
        product = self._products.get(category_id, product_id)
        if product is None:
            raise RecordNotFoundError(f"Product {product_id} not found")
        return product

    def delete_product(self, category_id: int, product_id: int) -> None:
        product = self.get_product(category_id, product_id)

        self._products.delete(product.id)
        self._session.commit()
        logger.info("Deleted product {} from category {}", product_id, category_id)

    def create_product(self, model: ProductCreateModel) -> Product:
        """Create a product together with its prices and child rows.

        Each inventory line gets a new Location named after the product;
        callers cannot choose the location through this operation.
        """
        self._validate(model.page_id, model.category_id, model.variations)

        product = Product(
            name=model.name,
            category_id=model.category_id,
            page_id=model.page_id,
            price=Price(amount=model.price),
            variations=[
                Variation(name=item.name, price=Price(amount=item.price))
                for item in model.variations
            ],
            attributes=[
                ProductAttribute(name=item.name, price=Price(amount=item.price))
                for item in model.attributes
            ],
            location_inventories=[
                ProductLocationInventory(count=item.count, location=Location(name=model.name))
                for item in model.location_inventories
            ],
        )

        created = self._products.add(product)
        self._session.commit()
        logger.info(
            "Created product {} '{}' in category {}",
            created.id,
            created.name,
            created.category_id,
        )
        return created

    def edit_product(self, model: ProductEditModel) -> Product:
        """Overwrite a product and replace its child collections wholesale."""
        self._validate(model.page_id, model.category_id, model.variations)

        existing = self._products.get_by_id(model.id)
        if existing is None:
            raise RecordNotFoundError(f"Product {model.id} not found")

        variation_prices = self._check_priced_children(
            "Variation", model.variations, existing.variations
        )
        attribute_prices = self._check_priced_children(
            "Attribute", model.attributes, existing.attributes
        )
        locations = self._check_inventories(model, existing)

        product = Product(
            id=existing.id,
            name=model.name,
            category_id=model.category_id,
            page_id=model.page_id,
            price=Price(id=existing.price.id, amount=model.price),
            variations=[
                Variation(
                    id=item.id,
                    name=item.name,
                    price=Price(id=variation_prices.get(item.id), amount=item.price),
                )
                for item in model.variations
            ],
            attributes=[
                ProductAttribute(
                    id=item.id,
                    name=item.name,
                    price=Price(id=attribute_prices.get(item.id), amount=item.price),
                )
                for item in model.attributes
            ],
            location_inventories=[
                ProductLocationInventory(
                    id=item.id, count=item.count, location=locations[item.location_id]
                )
                for item in model.location_inventories
            ],
        )

        updated = self._products.update(product)
        self._session.commit()
        logger.info("Edited product {} in category {}", updated.id, updated.category_id)
        return updated

    def _validate(
        self,
        page_id: int,
        category_id: int,
        variations: Sequence[VariationCreateModel] | Sequence[VariationEditModel],
    ) -> None:
        if not self._pages.exists(page_id):
            logger.warning("Rejected product write: page {} not found", page_id)
            raise RecordNotFoundError(f"Page {page_id} not found")

        if not self._categories.exists(category_id):
            logger.warning("Rejected product write: category {} not found", category_id)
            raise RecordNotFoundError(f"Category {category_id} not found")

        for item in variations:
            if not item.name:
                logger.warning("Rejected product write: empty variation name")
                raise InvalidActionError("Variation name cannot be empty")

    @staticmethod
    def _check_priced_children(
        kind: str,
        items: Sequence[VariationEditModel] | Sequence[ProductAttributeEditModel],
        current: Sequence[Variation] | Sequence[ProductAttribute],
    ) -> dict[int, int | None]:
        """Check that kept children belong to the product.

        Returns the existing price id of every kept child keyed by child id.
        """
        current_prices = {child.id: child.price.id for child in current}
        _reject_duplicate_ids(kind, items)

        for item in items:
            if item.id is None:
                if item.price_id is not None:
                    raise InvalidActionError(
                        f"New {kind.lower()} cannot reuse price {item.price_id}"
                    )
                continue

            if item.id not in current_prices:
                raise RecordNotFoundError(f"{kind} {item.id} not found")

            if item.price_id is not None and item.price_id != current_prices[item.id]:
                raise InvalidActionError(
                    f"Price {item.price_id} does not belong to {kind.lower()} {item.id}"
                )

        return current_prices

    def _check_inventories(
        self, model: ProductEditModel, existing: Product
    ) -> dict[int, Location]:
        current_ids = {inventory.id for inventory in existing.location_inventories}
        _reject_duplicate_ids("Inventory", model.location_inventories)
        for item in model.location_inventories:
            if item.id is not None and item.id not in current_ids:
                raise RecordNotFoundError(f"Inventory {item.id} not found")

        location_ids = {item.location_id for item in model.location_inventories}
        locations = self._locations.get_many(location_ids)
        missing = sorted(location_ids - locations.keys())
        if missing:
            raise RecordNotFoundError(f"Location {missing[0]} not found")

        return locations


def _reject_duplicate_ids(kind: str, items: Sequence[Any]) -> None:
    """Each kept child may appear once; a repeated id would overwrite itself."""
    seen: set[int] = set()
    for item in items:
        if item.id is None:
            continue
        if item.id in seen:
            logger.warning("Rejected product write: {} {} listed twice", kind.lower(), item.id)
            raise InvalidActionError(f"{kind} {item.id} is listed more than once")
        seen.add(item.id)
