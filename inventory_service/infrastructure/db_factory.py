"""
Database connection factory utilities for the Inventory Service.

Builds the psycopg connection pool that the gateway receives by injection.
Nothing here is process-global: callers own the pool they create and are
responsible for closing it.

One-off administrative connections (schema setup) retry transient failures
using tenacity; the request path never retries.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import psycopg
from psycopg import Connection
from psycopg_pool import ConnectionPool
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from inventory_service.config import Settings, get_settings
from inventory_service.utils.logging import get_logger

log = get_logger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")


def build_dsn(settings: Optional[Settings] = None) -> str:
    """Compose a DSN string from settings, preferring an explicit DATABASE_URL."""
    settings = settings or get_settings()
    if settings.database_url:
        return settings.database_url
    return (
        f"postgresql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )


def apply_statement_timeout(conn: Connection, timeout_ms: int) -> None:
    """
    Bound every statement on `conn` to `timeout_ms` milliseconds.

    A non-positive value leaves the server default (no timeout) in place.
    """
    if timeout_ms <= 0:
        return
    conn.execute("SELECT set_config('statement_timeout', %s, false)", (f"{int(timeout_ms)}ms",))


def create_pool(
    settings: Optional[Settings] = None,
    dsn: Optional[str] = None,
    open: bool = True,
) -> ConnectionPool:
    """
    Create a synchronous connection pool for the gateway.

    Parameters
    ----------
    settings : Settings, optional
        Source of pool sizing and timeouts. Defaults to the cached settings.
    dsn : str, optional
        Connection string override; defaults to `build_dsn(settings)`.
    open : bool
        Whether to open the pool immediately.

    Returns
    -------
    ConnectionPool
        A pool of autocommit connections. Borrowers beyond `max_size` wait up
        to `db_pool_timeout_seconds` before the pool raises `PoolTimeout`.
    """
    settings = settings or get_settings()
    timeout_ms = settings.db_statement_timeout_ms

    def _configure(conn: Connection) -> None:
        apply_statement_timeout(conn, timeout_ms)

    pool = ConnectionPool(
        conninfo=dsn or build_dsn(settings),
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        timeout=settings.db_pool_timeout_seconds,
        kwargs={"autocommit": True},
        configure=_configure,
        open=open,
    )
    log.info(
        "Connection pool created",
        extra={
            "pool_min_size": settings.db_pool_min_size,
            "pool_max_size": settings.db_pool_max_size,
        },
    )
    return pool


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
    reraise=True,
)
def get_sync_connection(dsn: Optional[str] = None) -> Connection:
    """
    Acquire a dedicated synchronous connection with automatic retry.

    Retries up to 3 times with exponential backoff for transient connection
    errors. Meant for administrative commands such as `init-db`.

    Raises
    ------
    psycopg.OperationalError
        If connection fails after all retry attempts.
    """
    return psycopg.connect(dsn or build_dsn())


def init_schema(conn: Connection) -> None:
    """Create the `products` table if it does not exist yet."""
    ddl = SCHEMA_PATH.read_text(encoding="utf-8")
    with conn.cursor() as cur:
        cur.execute(ddl)
    conn.commit()
    log.info("Schema applied", extra={"schema": str(SCHEMA_PATH)})


__all__ = [
    "SCHEMA_PATH",
    "apply_statement_timeout",
    "build_dsn",
    "create_pool",
    "get_sync_connection",
    "init_schema",
]
