"""Shop category service."""

from loguru import logger
from sqlmodel import Session

from src.meredith.core.exceptions import RecordNotFoundError
from src.meredith.core.models.shop import CategoryCreateModel
from src.meredith.entities.core.page import PageRepository
from src.meredith.entities.shop.category import Category, CategoryRepository


class CategoryService:
    """List, read and create shop categories."""

    def __init__(self, session: Session) -> None:
        self._session = session
        self._categories = CategoryRepository(session)
        self._pages = PageRepository(session)

    def list_categories(self) -> list[Category]:
        return self._categories.list_all()

    def get_category(self, category_id: int) -> Category:
        category = self._categories.get(category_id)
        if category is None:
            raise RecordNotFoundError(f"Category {category_id} not found")
        return category

    def create_category(self, model: CategoryCreateModel) -> Category:
        if not self._pages.exists(model.page_id):
            raise RecordNotFoundError(f"Page {model.page_id} not found")

        category = self._categories.create(
            Category(name=model.name, page_id=model.page_id)
        )
        self._session.commit()
        logger.info("Created category {} on page {}", category.id, category.page_id)
        return category
