"""Unit tests for ProductService."""

from decimal import Decimal
from unittest.mock import patch

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError
from sqlmodel import Session

from src.meredith.core.exceptions import InvalidActionError, RecordNotFoundError
from src.meredith.core.models.shop import (
    ProductAttributeCreateModel,
    ProductAttributeEditModel,
    ProductCreateModel,
    ProductEditModel,
    ProductLocationInventoryEditModel,
    VariationCreateModel,
    VariationEditModel,
)
from src.meredith.core.services import ProductService
from src.meredith.entities.core.page import Page
from src.meredith.entities.shop.category import Category
from src.meredith.entities.shop.location import LocationTable
from src.meredith.entities.shop.price import PriceTable
from src.meredith.entities.shop.product import (
    Product,
    ProductAttributeTable,
    ProductLocationInventoryTable,
    ProductTable,
    VariationTable,
)
from tests.utils import count_rows


def _edit_model(product: Product, **overrides) -> ProductEditModel:
    """Build an edit model that keeps every child of ``product`` unchanged."""
    values = {
        "id": product.id,
        "category_id": product.category_id,
        "name": product.name,
        "page_id": product.page_id,
        "price": product.price.amount,
        "variations": [
            VariationEditModel(
                id=v.id, name=v.name, price_id=v.price.id, price=v.price.amount
            )
            for v in product.variations
        ],
        "attributes": [
            ProductAttributeEditModel(
                id=a.id, name=a.name, price_id=a.price.id, price=a.price.amount
            )
            for a in product.attributes
        ],
        "location_inventories": [
            ProductLocationInventoryEditModel(
                id=i.id, count=i.count, location_id=i.location.id
            )
            for i in product.location_inventories
        ],
    }
    values.update(overrides)
    return ProductEditModel(**values)


class TestListProducts:
    """Test cases for listing the products of a category."""

    def test_empty_category_returns_empty_list(self, product_service, category):
        assert product_service.list_products(category.id) == []

    def test_unknown_category_returns_empty_list(self, product_service):
        assert product_service.list_products(999) == []

    def test_lists_only_products_of_category(
        self, product_service, mug, mug_model, other_category
    ):
        """Products of other categories are not listed."""
        product_service.create_product(
            mug_model.model_copy(update={"name": "Rake", "category_id": other_category.id})
        )

        products = product_service.list_products(mug.category_id)

        assert [p.name for p in products] == ["Mug"]
        assert products[0] == mug

    def test_listed_products_are_fully_populated(self, product_service, mug):
        (listed,) = product_service.list_products(mug.category_id)

        assert listed.price.amount == Decimal("9.99")
        assert [v.name for v in listed.variations] == ["Red", "Blue"]
        assert [a.name for a in listed.attributes] == ["Gift wrap"]
        assert listed.location_inventories[0].count == 10


class TestGetProduct:
    """Test cases for fetching a single product."""

    def test_get_existing_product(self, product_service, mug):
        assert product_service.get_product(mug.category_id, mug.id) == mug

    def test_get_unknown_product_raises_not_found(self, product_service, category):
        with pytest.raises(RecordNotFoundError, match="Product 42 not found"):
            product_service.get_product(category.id, 42)

    def test_get_product_through_wrong_category_raises_not_found(
        self, product_service, mug, other_category
    ):
        with pytest.raises(RecordNotFoundError):
            product_service.get_product(other_category.id, mug.id)


class TestCreateProduct:
    """Test cases for product creation."""

    def test_create_assigns_ids_everywhere(self, mug):
        assert mug.id is not None
        assert mug.price.id is not None
        assert all(v.id is not None and v.price.id is not None for v in mug.variations)
        assert all(a.id is not None and a.price.id is not None for a in mug.attributes)
        assert all(
            i.id is not None and i.location.id is not None
            for i in mug.location_inventories
        )

    def test_create_persists_values(self, product_service, mug, mug_model):
        stored = product_service.get_product(mug.category_id, mug.id)

        assert stored.name == "Mug"
        assert stored.page_id == mug_model.page_id
        assert stored.category_id == mug_model.category_id
        assert stored.price.amount == Decimal("9.99")
        assert [(v.name, v.price.amount) for v in stored.variations] == [
            ("Red", Decimal("9.99")),
            ("Blue", Decimal("10.49")),
        ]
        assert [(a.name, a.price.amount) for a in stored.attributes] == [
            ("Gift wrap", Decimal("1.50"))
        ]

    def test_every_child_gets_its_own_price(self, session: Session, mug):
        price_ids = {mug.price.id}
        price_ids.update(v.price.id for v in mug.variations)
        price_ids.update(a.price.id for a in mug.attributes)

        assert len(price_ids) == 4
        assert count_rows(session, PriceTable) == 4

    def test_inventory_location_is_named_after_product(self, mug):
        (inventory,) = mug.location_inventories
        assert inventory.location.name == "Mug"

    def test_create_without_children(self, product_service, page, category):
        product = product_service.create_product(
            ProductCreateModel(
                name="Plain", category_id=category.id, page_id=page.id, price=Decimal("1.00")
            )
        )

        assert product.variations == []
        assert product.attributes == []
        assert product.location_inventories == []

    def test_unknown_page_raises_not_found(
        self, session: Session, product_service, mug_model
    ):
        with pytest.raises(RecordNotFoundError, match="Page 999 not found"):
            product_service.create_product(mug_model.model_copy(update={"page_id": 999}))

        assert count_rows(session, ProductTable) == 0
        assert count_rows(session, PriceTable) == 0

    def test_unknown_category_raises_not_found(
        self, session: Session, product_service, mug_model
    ):
        with pytest.raises(RecordNotFoundError, match="Category 999 not found"):
            product_service.create_product(
                mug_model.model_copy(update={"category_id": 999})
            )

        assert count_rows(session, ProductTable) == 0

    def test_page_is_checked_before_category(self, product_service, mug_model):
        with pytest.raises(RecordNotFoundError, match="Page"):
            product_service.create_product(
                mug_model.model_copy(update={"page_id": 998, "category_id": 999})
            )

    @pytest.mark.parametrize("name", ["", None])
    def test_empty_variation_name_is_invalid(
        self, session: Session, product_service, mug_model, name
    ):
        model = mug_model.model_copy(
            update={"variations": [VariationCreateModel(name=name, price=Decimal("1"))]}
        )

        with pytest.raises(InvalidActionError, match="Variation name cannot be empty"):
            product_service.create_product(model)

        assert count_rows(session, ProductTable) == 0
        assert count_rows(session, VariationTable) == 0
        assert count_rows(session, LocationTable) == 0

    @pytest.mark.parametrize(
        "override",
        [
            {"price": "9.999"},
            {"variations": [{"name": "Red", "price": "1.005"}]},
            {"attributes": [{"name": "Gift wrap", "price": "0.001"}]},
        ],
        ids=["product", "variation", "attribute"],
    )
    def test_price_with_more_than_two_decimals_is_rejected(self, mug_model, override):
        values = {**mug_model.model_dump(), **override}

        with pytest.raises(ValidationError, match="decimal places"):
            ProductCreateModel(**values)

    def test_created_prices_match_stored_prices(self, product_service, mug_model):
        model = ProductCreateModel(**{**mug_model.model_dump(), "price": "9.9"})

        created = product_service.create_product(model)
        stored = product_service.get_product(created.category_id, created.id)

        assert created.price.amount == stored.price.amount == Decimal("9.90")
        assert [v.price.amount for v in created.variations] == [
            v.price.amount for v in stored.variations
        ]

    def test_storage_error_propagates(self, session: Session, product_service, mug_model):
        """Commit failures surface unchanged to the caller."""
        with patch.object(
            session, "commit", side_effect=OperationalError("COMMIT", {}, Exception("disk"))
        ):
            with pytest.raises(OperationalError):
                product_service.create_product(mug_model)


class TestEditProduct:
    """Test cases for product edits."""

    def test_edit_overwrites_simple_fields(self, product_service, mug):
        edited = product_service.edit_product(
            _edit_model(mug, name="Big Mug", price=Decimal("12.00"))
        )

        assert edited.id == mug.id
        assert edited.name == "Big Mug"
        assert edited.price.amount == Decimal("12.00")
        assert edited.price.id == mug.price.id

    def test_edit_is_persisted(self, product_service, mug):
        product_service.edit_product(_edit_model(mug, name="Big Mug"))

        assert product_service.get_product(mug.category_id, mug.id).name == "Big Mug"

    def test_edit_keeps_child_ids(self, product_service, mug):
        edited = product_service.edit_product(_edit_model(mug))

        assert [v.id for v in edited.variations] == [v.id for v in mug.variations]
        assert [a.id for a in edited.attributes] == [a.id for a in mug.attributes]
        assert edited.location_inventories[0].id == mug.location_inventories[0].id

    def test_edit_updates_child_price_in_place(self, product_service, mug):
        red = mug.variations[0]
        variations = [
            VariationEditModel(
                id=red.id, name="Crimson", price_id=red.price.id, price=Decimal("11.00")
            )
        ]

        edited = product_service.edit_product(_edit_model(mug, variations=variations))

        (variation,) = edited.variations
        assert variation.id == red.id
        assert variation.name == "Crimson"
        assert variation.price.id == red.price.id
        assert variation.price.amount == Decimal("11.00")

    def test_edit_replaces_children_wholesale(self, session: Session, product_service, mug):
        """Dropped children are deleted together with their prices."""
        new_variations = [VariationEditModel(name="Green", price=Decimal("8.00"))]

        edited = product_service.edit_product(
            _edit_model(mug, variations=new_variations, attributes=[])
        )

        assert [v.name for v in edited.variations] == ["Green"]
        assert edited.attributes == []
        assert count_rows(session, VariationTable) == 1
        assert count_rows(session, ProductAttributeTable) == 0
        # product price + Green
        assert count_rows(session, PriceTable) == 2

    def test_edit_moves_product_to_other_category(
        self, product_service, mug, other_category
    ):
        edited = product_service.edit_product(
            _edit_model(mug, category_id=other_category.id)
        )

        assert edited.category_id == other_category.id
        assert product_service.list_products(mug.category_id) == []
        assert product_service.list_products(other_category.id) == [edited]

    def test_edit_inventory_count(self, product_service, mug):
        inventory = mug.location_inventories[0]
        inventories = [
            ProductLocationInventoryEditModel(
                id=inventory.id, count=3, location_id=inventory.location.id
            )
        ]

        edited = product_service.edit_product(
            _edit_model(mug, location_inventories=inventories)
        )

        assert edited.location_inventories[0].count == 3
        assert edited.location_inventories[0].location == inventory.location

    def test_removed_inventory_keeps_location(self, session: Session, product_service, mug):
        product_service.edit_product(_edit_model(mug, location_inventories=[]))

        assert count_rows(session, ProductLocationInventoryTable) == 0
        assert count_rows(session, LocationTable) == 1

    def test_unknown_product_raises_not_found(self, product_service, mug):
        with pytest.raises(RecordNotFoundError, match="Product 999 not found"):
            product_service.edit_product(_edit_model(mug, id=999))

    def test_unknown_page_raises_not_found(self, product_service, mug):
        with pytest.raises(RecordNotFoundError, match="Page 999 not found"):
            product_service.edit_product(_edit_model(mug, page_id=999))

    def test_unknown_category_raises_not_found(self, product_service, mug):
        with pytest.raises(RecordNotFoundError, match="Category 999 not found"):
            product_service.edit_product(_edit_model(mug, category_id=999))

    def test_empty_variation_name_leaves_product_unchanged(self, product_service, mug):
        model = _edit_model(
            mug,
            name="Renamed",
            variations=[VariationEditModel(name="", price=Decimal("1.00"))],
        )

        with pytest.raises(InvalidActionError):
            product_service.edit_product(model)

        assert product_service.get_product(mug.category_id, mug.id) == mug

    def test_foreign_variation_id_raises_not_found(
        self, product_service, mug, mug_model
    ):
        other = product_service.create_product(mug_model.model_copy(update={"name": "Cup"}))
        foreign = other.variations[0]

        model = _edit_model(
            mug,
            variations=[
                VariationEditModel(id=foreign.id, name="Stolen", price=Decimal("1.00"))
            ],
        )

        with pytest.raises(RecordNotFoundError, match=f"Variation {foreign.id} not found"):
            product_service.edit_product(model)

    def test_mismatched_price_id_is_invalid(self, product_service, mug):
        red, blue = mug.variations
        model = _edit_model(
            mug,
            variations=[
                VariationEditModel(
                    id=red.id, name="Red", price_id=blue.price.id, price=Decimal("1.00")
                )
            ],
        )

        with pytest.raises(InvalidActionError, match="does not belong"):
            product_service.edit_product(model)

    def test_new_attribute_cannot_reuse_price(self, product_service, mug):
        model = _edit_model(
            mug,
            attributes=[
                ProductAttributeEditModel(
                    name="Engraving", price_id=mug.price.id, price=Decimal("4.00")
                )
            ],
        )

        with pytest.raises(InvalidActionError, match="cannot reuse price"):
            product_service.edit_product(model)

    def test_unknown_location_raises_not_found(self, product_service, mug):
        model = _edit_model(
            mug,
            location_inventories=[ProductLocationInventoryEditModel(count=1, location_id=999)],
        )

        with pytest.raises(RecordNotFoundError, match="Location 999 not found"):
            product_service.edit_product(model)

    def test_foreign_inventory_id_raises_not_found(self, product_service, mug):
        location_id = mug.location_inventories[0].location.id
        model = _edit_model(
            mug,
            location_inventories=[
                ProductLocationInventoryEditModel(id=999, count=1, location_id=location_id)
            ],
        )

        with pytest.raises(RecordNotFoundError, match="Inventory 999 not found"):
            product_service.edit_product(model)

    def test_new_inventory_can_reference_existing_location(self, product_service, mug):
        location = mug.location_inventories[0].location
        model = _edit_model(
            mug,
            location_inventories=[
                ProductLocationInventoryEditModel(count=4, location_id=location.id)
            ],
        )

        edited = product_service.edit_product(model)

        (inventory,) = edited.location_inventories
        assert inventory.location == location
        assert inventory.count == 4

    def test_repeated_variation_id_leaves_product_unchanged(self, product_service, mug):
        red = mug.variations[0]
        model = _edit_model(
            mug,
            variations=[
                VariationEditModel(
                    id=red.id, name="Red", price_id=red.price.id, price=Decimal("1.00")
                ),
                VariationEditModel(
                    id=red.id, name="Crimson", price_id=red.price.id, price=Decimal("2.00")
                ),
            ],
        )

        with pytest.raises(
            InvalidActionError, match=f"Variation {red.id} is listed more than once"
        ):
            product_service.edit_product(model)

        assert product_service.get_product(mug.category_id, mug.id) == mug

    def test_repeated_attribute_id_leaves_product_unchanged(self, product_service, mug):
        (wrap,) = mug.attributes
        repeated = ProductAttributeEditModel(
            id=wrap.id, name="Gift wrap", price_id=wrap.price.id, price=Decimal("3.00")
        )
        model = _edit_model(mug, attributes=[repeated, repeated])

        with pytest.raises(
            InvalidActionError, match=f"Attribute {wrap.id} is listed more than once"
        ):
            product_service.edit_product(model)

        assert product_service.get_product(mug.category_id, mug.id) == mug

    def test_repeated_inventory_id_leaves_product_unchanged(self, product_service, mug):
        (inventory,) = mug.location_inventories
        model = _edit_model(
            mug,
            location_inventories=[
                ProductLocationInventoryEditModel(
                    id=inventory.id, count=1, location_id=inventory.location.id
                ),
                ProductLocationInventoryEditModel(
                    id=inventory.id, count=50, location_id=inventory.location.id
                ),
            ],
        )

        with pytest.raises(
            InvalidActionError, match=f"Inventory {inventory.id} is listed more than once"
        ):
            product_service.edit_product(model)

        assert product_service.get_product(mug.category_id, mug.id) == mug

    def test_new_children_without_ids_are_not_duplicates(self, product_service, mug):
        extra = [
            VariationEditModel(name="Green", price=Decimal("9.99")),
            VariationEditModel(name="Green", price=Decimal("9.99")),
        ]
        model = _edit_model(mug, variations=extra)

        edited = product_service.edit_product(model)

        assert [v.name for v in edited.variations] == ["Green", "Green"]


class TestDeleteProduct:
    """Test cases for product deletion."""

    def test_delete_removes_aggregate(self, session: Session, product_service, mug):
        product_service.delete_product(mug.category_id, mug.id)

        assert product_service.list_products(mug.category_id) == []
        assert count_rows(session, ProductTable) == 0
        assert count_rows(session, VariationTable) == 0
        assert count_rows(session, ProductAttributeTable) == 0
        assert count_rows(session, ProductLocationInventoryTable) == 0
        assert count_rows(session, PriceTable) == 0

    def test_delete_keeps_locations(self, session: Session, product_service, mug):
        product_service.delete_product(mug.category_id, mug.id)

        assert count_rows(session, LocationTable) == 1

    def test_delete_twice_raises_not_found(self, product_service, mug):
        product_service.delete_product(mug.category_id, mug.id)

        with pytest.raises(RecordNotFoundError):
            product_service.delete_product(mug.category_id, mug.id)

    def test_delete_through_wrong_category_raises_not_found(
        self, session: Session, product_service, mug, other_category
    ):
        with pytest.raises(RecordNotFoundError):
            product_service.delete_product(other_category.id, mug.id)

        assert count_rows(session, ProductTable) == 1

    def test_delete_leaves_other_products_untouched(
        self, product_service, mug, mug_model
    ):
        cup = product_service.create_product(mug_model.model_copy(update={"name": "Cup"}))

        product_service.delete_product(mug.category_id, mug.id)

        assert product_service.get_product(cup.category_id, cup.id) == cup


class TestProductScenarios:
    """End-to-end flows through the service."""

    def test_create_then_list(self, product_service, page: Page, category: Category):
        created = product_service.create_product(
            ProductCreateModel(
                name="Teapot",
                category_id=category.id,
                page_id=page.id,
                price=Decimal("25.00"),
                attributes=[
                    ProductAttributeCreateModel(name="Lid", price=Decimal("3.00"))
                ],
            )
        )

        assert product_service.list_products(category.id) == [created]

    def test_create_edit_delete(self, product_service, mug):
        edited = product_service.edit_product(_edit_model(mug, name="Travel Mug"))
        assert edited.name == "Travel Mug"

        product_service.delete_product(edited.category_id, edited.id)

        with pytest.raises(RecordNotFoundError):
            product_service.get_product(edited.category_id, edited.id)

    def test_service_instances_share_database(self, session: Session, mug):
        """A second service on the same session sees committed data."""
        assert ProductService(session).get_product(mug.category_id, mug.id) == mug
