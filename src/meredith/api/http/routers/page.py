"""Page API router."""

from fastapi import APIRouter, Depends, status

from src.meredith.api.http.deps import get_current_principal, get_page_service
from src.meredith.core.models.auth import TokenClaims
from src.meredith.core.models.page import PageCreateModel
from src.meredith.core.services import PageService
from src.meredith.entities.core.page import Page

router = APIRouter(prefix="/pages", tags=["pages"])


@router.get("", response_model=list[Page])
def list_pages(service: PageService = Depends(get_page_service)) -> list[Page]:
    """List all pages."""
    return service.list_pages()


@router.get("/{page_id}", response_model=Page)
def get_page(page_id: int, service: PageService = Depends(get_page_service)) -> Page:
    """Get a page by ID."""
    return service.get_page(page_id)


@router.post("", response_model=Page, status_code=status.HTTP_201_CREATED)
def create_page(
    model: PageCreateModel,
    service: PageService = Depends(get_page_service),
    _principal: TokenClaims = Depends(get_current_principal),
) -> Page:
    """Create a new page."""
    return service.create_page(model)
