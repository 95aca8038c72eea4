"""Shop product API router."""

from fastapi import APIRouter, Depends, Response, status

from src.meredith.api.http.deps import get_current_principal, get_product_service
from src.meredith.core.models.auth import TokenClaims
from src.meredith.core.models.shop import (
    ProductCreateBody,
    ProductCreateModel,
    ProductEditBody,
    ProductEditModel,
)
from src.meredith.core.services import ProductService
from src.meredith.entities.shop.product import Product

router = APIRouter(prefix="/shop/categories/{category_id}/products", tags=["shop"])


@router.get("", response_model=list[Product])
def list_products(
    category_id: int,
    service: ProductService = Depends(get_product_service),
) -> list[Product]:
    """List the products of a category."""
    return service.list_products(category_id)


@router.get("/{product_id}", response_model=Product)
def get_product(
    category_id: int,
    product_id: int,
    service: ProductService = Depends(get_product_service),
) -> Product:
    """Get a product of a category."""
    return service.get_product(category_id, product_id)


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
def create_product(
    category_id: int,
    body: ProductCreateBody,
    service: ProductService = Depends(get_product_service),
    _principal: TokenClaims = Depends(get_current_principal),
) -> Product:
    """Create a product in a category."""
    model = ProductCreateModel(category_id=category_id, **body.model_dump())
    return service.create_product(model)


@router.put("/{product_id}", response_model=Product)
def edit_product(
    category_id: int,
    product_id: int,
    body: ProductEditBody,
    service: ProductService = Depends(get_product_service),
    _principal: TokenClaims = Depends(get_current_principal),
) -> Product:
    """Overwrite a product; the path category becomes its category."""
    model = ProductEditModel(id=product_id, category_id=category_id, **body.model_dump())
    return service.edit_product(model)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    category_id: int,
    product_id: int,
    service: ProductService = Depends(get_product_service),
    _principal: TokenClaims = Depends(get_current_principal),
) -> Response:
    """Delete a product and everything it owns."""
    service.delete_product(category_id, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
