"""
Infrastructure package for the Inventory Service.

Centralizes database connectivity concerns (DSN, pooling, schema setup).
Keep this layer focused on I/O and resource management, decoupled from the
gateway's SQL and the HTTP layer.
"""

from inventory_service.infrastructure.db_factory import (
    apply_statement_timeout,
    build_dsn,
    create_pool,
    get_sync_connection,
    init_schema,
)

__all__ = [
    "apply_statement_timeout",
    "build_dsn",
    "create_pool",
    "get_sync_connection",
    "init_schema",
]
