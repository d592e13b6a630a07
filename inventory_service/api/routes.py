"""Product API router with CRUD operations."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response, status

from inventory_service.api.deps import get_gateway, get_product_id
from inventory_service.domain.models import Product, ProductIn
from inventory_service.gateway.abstract import ProductGateway

router = APIRouter(prefix="/products", tags=["products"])


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
def create_product(
    product: ProductIn,
    gateway: ProductGateway = Depends(get_gateway),
) -> Product:
    """Create a new product."""
    return gateway.create(product)


@router.get("/{product_id}", response_model=Product)
def get_product(
    product_id: int = Depends(get_product_id),
    gateway: ProductGateway = Depends(get_gateway),
) -> Product:
    """Get a product by ID."""
    return gateway.get(product_id)


@router.put("/{product_id}", response_model=Product)
def update_product(
    *,
    product_id: int = Depends(get_product_id),
    product: ProductIn,
    gateway: ProductGateway = Depends(get_gateway),
) -> Product:
    """Replace a product's fields and refresh its updated_at."""
    return gateway.update(product_id, product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_product(
    product_id: int = Depends(get_product_id),
    gateway: ProductGateway = Depends(get_gateway),
) -> Response:
    """Delete a product. Deleting an unknown id still answers 204."""
    gateway.delete(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("", response_model=List[Product])
def list_products(
    gateway: ProductGateway = Depends(get_gateway),
) -> List[Product]:
    """List all products ordered by id."""
    return gateway.list_all()


__all__ = ["router"]
