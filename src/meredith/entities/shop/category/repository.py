"""Category repository."""

from sqlmodel import Session, select

from .entity import Category
from .table import CategoryTable


class CategoryRepository:
    """Data-access layer for shop categories."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, category_id: int) -> Category | None:
        row = self._session.get(CategoryTable, category_id)
        if row is None:
            return None
        return Category.model_validate(row, from_attributes=True)

    def exists(self, category_id: int) -> bool:
        statement = select(CategoryTable.id).where(CategoryTable.id == category_id)
        return self._session.exec(statement).first() is not None

    def list_all(self) -> list[Category]:
        statement = select(CategoryTable).order_by(CategoryTable.id)
        rows = self._session.exec(statement).all()
        return [Category.model_validate(row, from_attributes=True) for row in rows]

    def create(self, category: Category) -> Category:
        row = CategoryTable(name=category.name, page_id=category.page_id)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Category.model_validate(row, from_attributes=True)
