"""Unit tests for CategoryService."""

import pytest

from src.meredith.core.exceptions import RecordNotFoundError
from src.meredith.core.models.shop import CategoryCreateModel
from src.meredith.entities.shop.category import CategoryTable
from tests.utils import count_rows


class TestCategoryService:
    """Test cases for shop categories."""

    def test_create_category(self, category_service, page):
        category = category_service.create_category(
            CategoryCreateModel(name="Tea", page_id=page.id)
        )

        assert category.id is not None
        assert category.name == "Tea"
        assert category.page_id == page.id

    def test_create_category_on_unknown_page(self, session, category_service):
        with pytest.raises(RecordNotFoundError, match="Page 99 not found"):
            category_service.create_category(CategoryCreateModel(name="Tea", page_id=99))

        assert count_rows(session, CategoryTable) == 0

    def test_get_category(self, category_service, category):
        assert category_service.get_category(category.id) == category

    def test_get_unknown_category_raises_not_found(self, category_service):
        with pytest.raises(RecordNotFoundError, match="Category 5 not found"):
            category_service.get_category(5)

    def test_list_categories(self, category_service, category, other_category):
        assert category_service.list_categories() == [category, other_category]
