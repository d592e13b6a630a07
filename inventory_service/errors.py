"""
Error taxonomy for the Inventory Service.

The gateway raises these; the HTTP layer is the only place that maps them to
status codes.
"""

from __future__ import annotations

from typing import List, Optional, TypedDict


class FieldError(TypedDict):
    """A single failing input field."""

    field: str
    message: str


class InventoryError(Exception):
    """Base class for all service errors."""


class ValidationError(InventoryError):
    """
    Malformed client input: bad JSON, a missing or mistyped field, or a
    non-numeric id. Carries every failing field, not just the first.
    """

    def __init__(self, message: str, details: Optional[List[FieldError]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: List[FieldError] = list(details or [])


class NotFoundError(InventoryError):
    """The referenced product id does not exist."""

    def __init__(self, product_id: int) -> None:
        super().__init__(f"product {product_id} not found")
        self.product_id = product_id


class StorageError(InventoryError):
    """Connection failure, pool timeout, constraint violation or other store fault."""


__all__ = [
    "FieldError",
    "InventoryError",
    "NotFoundError",
    "StorageError",
    "ValidationError",
]
