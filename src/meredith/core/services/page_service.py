"""Page service."""

from loguru import logger
from sqlmodel import Session

from src.meredith.core.exceptions import InvalidActionError, RecordNotFoundError
from src.meredith.core.models.page import PageCreateModel
from src.meredith.entities.core.page import Page, PageRepository


class PageService:
    """List, read and create pages."""

    def __init__(self, session: Session) -> None:
        self._session = session
        self._pages = PageRepository(session)

    def list_pages(self) -> list[Page]:
        return self._pages.list_all()

    def get_page(self, page_id: int) -> Page:
        page = self._pages.get(page_id)
        if page is None:
            raise RecordNotFoundError(f"Page {page_id} not found")
        return page

    def create_page(self, model: PageCreateModel) -> Page:
        if model.slug and self._pages.get_by_slug(model.slug) is not None:
            raise InvalidActionError(f"Slug '{model.slug}' is already taken")

        page = self._pages.create(Page(name=model.name, slug=model.slug or None))
        self._session.commit()
        logger.info("Created page {} '{}'", page.id, page.name)
        return page
