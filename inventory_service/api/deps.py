"""FastAPI dependency implementations."""

from __future__ import annotations

from fastapi import Path, Request

from inventory_service.gateway.abstract import ProductGateway

# Optional minus sign and ASCII digits only: no "+", spaces, "_" or decimals.
PRODUCT_ID_PATTERN = r"^-?[0-9]+$"


def get_gateway(request: Request) -> ProductGateway:
    """Get the product gateway bound to the running application."""
    return request.app.state.gateway


def get_product_id(
    product_id: str = Path(..., pattern=PRODUCT_ID_PATTERN, description="Base-10 product id."),
) -> int:
    """Parse the `{product_id}` path segment as a base-10 integer."""
    return int(product_id)


__all__ = ["PRODUCT_ID_PATTERN", "get_gateway", "get_product_id"]
