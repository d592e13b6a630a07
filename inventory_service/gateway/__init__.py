"""
Gateway package for the Inventory Service.

Re-exports the gateway protocol and the PostgreSQL implementation so callers
can import from `inventory_service.gateway` directly.
"""

from inventory_service.gateway.abstract import ProductGateway
from inventory_service.gateway.postgres import PostgresProductGateway

__all__ = [
    "PostgresProductGateway",
    "ProductGateway",
]
