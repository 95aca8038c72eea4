"""Page repository."""

from sqlmodel import Session, select

from .entity import Page
from .table import PageTable


class PageRepository:
    """Data-access layer for pages."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, page_id: int) -> Page | None:
        row = self._session.get(PageTable, page_id)
        if row is None:
            return None
        return Page.model_validate(row, from_attributes=True)

    def get_by_slug(self, slug: str) -> Page | None:
        statement = select(PageTable).where(PageTable.slug == slug)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return Page.model_validate(row, from_attributes=True)

    def exists(self, page_id: int) -> bool:
        statement = select(PageTable.id).where(PageTable.id == page_id)
        return self._session.exec(statement).first() is not None

    def list_all(self) -> list[Page]:
        statement = select(PageTable).order_by(PageTable.id)
        rows = self._session.exec(statement).all()
        return [Page.model_validate(row, from_attributes=True) for row in rows]

    def create(self, page: Page) -> Page:
        row = PageTable(name=page.name, slug=page.slug)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Page.model_validate(row, from_attributes=True)
