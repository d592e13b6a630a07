"""
Inventory Service - CRUD HTTP API for product inventory records.

This package exposes a small JSON API over a single PostgreSQL table:

- A data store gateway translating product operations into parameterized SQL
- A FastAPI router mapping HTTP requests onto gateway operations
- Pydantic models for request validation and response serialization

The connection pool is created explicitly and injected into the gateway, and
the gateway is injected into the application factory, so either can be
replaced in tests.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from inventory_service.api.app import create_app
from inventory_service.config import Settings, get_settings
from inventory_service.domain.models import Product, ProductIn
from inventory_service.errors import (
    InventoryError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from inventory_service.gateway import PostgresProductGateway, ProductGateway
from inventory_service.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Application
    "create_app",
    # Domain
    "Product",
    "ProductIn",
    # Gateway
    "ProductGateway",
    "PostgresProductGateway",
    # Errors
    "InventoryError",
    "NotFoundError",
    "StorageError",
    "ValidationError",
    # Logging
    "configure_logging",
    "get_logger",
]
