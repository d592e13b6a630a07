"""
Domain models for the Inventory Service.

`ProductIn` is the write payload accepted by create and update; `Product` is
a full row of the `products` table as returned by the gateway. Both are
pydantic models so validation, serialization and type hints share a single
definition.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class ProductIn(BaseModel):
    """
    Fields a client may set on a product.

    Types are strict: `quantity` must be a JSON integer and `price` a finite
    JSON number (`NaN` and `Infinity` are rejected). Unknown keys such as `id`
    or the timestamps are ignored.
    """

    name: str = Field(..., min_length=1, description="Product name; must be non-empty.")
    description: str = Field("", description="Free-form description.")
    price: float = Field(..., allow_inf_nan=False, description="Unit price; must be finite.")
    quantity: int = Field(..., description="Units in stock.")

    model_config = ConfigDict(strict=True, extra="ignore")

    def as_params(self) -> Dict[str, Any]:
        """Named parameters for the insert/update statements."""
        return {
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "quantity": self.quantity,
        }


class Product(BaseModel):
    """
    Representation of a single row in the `products` table.
    """

    id: int = Field(..., description="Primary key (BIGSERIAL).")
    name: str = Field(..., description="Product name.")
    description: str = Field("", description="Free-form description.")
    price: float = Field(..., description="Unit price.")
    quantity: int = Field(..., description="Units in stock.")
    created_at: datetime = Field(..., description="Row creation timestamp.")
    updated_at: datetime = Field(..., description="Last update timestamp.")

    model_config = ConfigDict(frozen=True)


__all__ = ["Product", "ProductIn"]
