"""Shop category API router."""

from fastapi import APIRouter, Depends, status

from src.meredith.api.http.deps import get_category_service, get_current_principal
from src.meredith.core.models.auth import TokenClaims
from src.meredith.core.models.shop import CategoryCreateModel
from src.meredith.core.services import CategoryService
from src.meredith.entities.shop.category import Category

router = APIRouter(prefix="/shop/categories", tags=["shop"])


@router.get("", response_model=list[Category])
def list_categories(
    service: CategoryService = Depends(get_category_service),
) -> list[Category]:
    """List all categories."""
    return service.list_categories()


@router.get("/{category_id}", response_model=Category)
def get_category(
    category_id: int,
    service: CategoryService = Depends(get_category_service),
) -> Category:
    """Get a category by ID."""
    return service.get_category(category_id)


@router.post("", response_model=Category, status_code=status.HTTP_201_CREATED)
def create_category(
    model: CategoryCreateModel,
    service: CategoryService = Depends(get_category_service),
    _principal: TokenClaims = Depends(get_current_principal),
) -> Category:
    """Create a new category on an existing page."""
    return service.create_category(model)
