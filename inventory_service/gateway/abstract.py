"""
Gateway interface for the Inventory Service.

The HTTP layer depends only on this protocol, so any object implementing the
five operations (the PostgreSQL gateway, an in-memory double in tests) can be
injected into the application factory.
"""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from inventory_service.domain.models import Product, ProductIn


@runtime_checkable
class ProductGateway(Protocol):
    """
    Data-access contract for the `products` table.

    Implementations raise `NotFoundError` for a missing id on `get` and
    `update`, and `StorageError` for any store-side fault. They never
    swallow errors and never retry.
    """

    def create(self, product: ProductIn) -> Product:
        """
        Insert a product and return it with its store-assigned id and timestamps.
        """
        ...

    def get(self, product_id: int) -> Product:
        """Return the product with `product_id`."""
        ...

    def update(self, product_id: int, product: ProductIn) -> Product:
        """
        Replace name, description, price and quantity; refresh `updated_at`.

        Returns
        -------
        Product
            The refreshed record. `created_at` is unchanged and `updated_at`
            is strictly later than before.
        """
        ...

    def delete(self, product_id: int) -> bool:
        """
        Remove the product if present. Deleting a missing id is not an error.

        Returns
        -------
        bool
            Whether a row was removed.
        """
        ...

    def list_all(self) -> List[Product]:
        """Return every product ordered by ascending id (empty list if none)."""
        ...


__all__ = ["ProductGateway"]
