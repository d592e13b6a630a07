"""
Pytest configuration for the Inventory Service.

Provides fixtures for:
- An in-memory gateway and an HTTP test client for unit tests
- Database connection management for integration tests
- Schema initialisation and table cleanup between integration tests
"""

from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from typing import Dict, Generator, List

import psycopg
import pytest
from fastapi.testclient import TestClient

from inventory_service.api.app import create_app
from inventory_service.config import Settings
from inventory_service.domain.models import Product, ProductIn
from inventory_service.errors import NotFoundError
from inventory_service.infrastructure.db_factory import build_dsn, init_schema


class InMemoryProductGateway:
    """
    Dict-backed gateway with the same contract as the PostgreSQL one.

    Counts calls so tests can assert that rejected requests never reach it.
    """

    def __init__(self) -> None:
        self._rows: Dict[int, Product] = {}
        self._next_id = 1
        self.calls: List[str] = []

    def create(self, product: ProductIn) -> Product:
        self.calls.append("create")
        now = datetime.now(timezone.utc)
        created = Product(id=self._next_id, created_at=now, updated_at=now, **product.as_params())
        self._rows[created.id] = created
        self._next_id += 1
        return created

    def get(self, product_id: int) -> Product:
        self.calls.append("get")
        if product_id not in self._rows:
            raise NotFoundError(product_id)
        return self._rows[product_id]

    def update(self, product_id: int, product: ProductIn) -> Product:
        self.calls.append("update")
        current = self._rows.get(product_id)
        if current is None:
            raise NotFoundError(product_id)
        updated_at = max(datetime.now(timezone.utc), current.updated_at + timedelta(microseconds=1))
        refreshed = Product(
            id=product_id,
            created_at=current.created_at,
            updated_at=updated_at,
            **product.as_params(),
        )
        self._rows[product_id] = refreshed
        return refreshed

    def delete(self, product_id: int) -> bool:
        self.calls.append("delete")
        return self._rows.pop(product_id, None) is not None

    def list_all(self) -> List[Product]:
        self.calls.append("list_all")
        return [self._rows[key] for key in sorted(self._rows)]

    def __len__(self) -> int:
        return len(self._rows)


@pytest.fixture
def app_settings() -> Settings:
    """Settings for unit tests; nothing here touches a database."""
    return Settings(log_level="DEBUG", expose_storage_errors=True)


@pytest.fixture
def memory_gateway() -> InMemoryProductGateway:
    return InMemoryProductGateway()


@pytest.fixture
def client(memory_gateway: InMemoryProductGateway, app_settings: Settings) -> TestClient:
    """HTTP client bound to an application serving the in-memory gateway."""
    return TestClient(create_app(gateway=memory_gateway, settings=app_settings))


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "stock"),
        db_pool_max_size=4,
        db_pool_timeout_seconds=5.0,
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return os.getenv("DATABASE_URL") or build_dsn(test_settings)


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture(scope="session")
def db_connection(
    test_dsn: str, db_connection_available: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped database connection for integration tests.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    conn = psycopg.connect(test_dsn)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="session")
def db_schema_initialized(db_connection: psycopg.Connection) -> bool:
    """
    Ensure the products table exists.
    """
    init_schema(db_connection)
    return True


@pytest.fixture(scope="function")
def clean_products_table(db_connection: psycopg.Connection, db_schema_initialized: bool):
    """
    Empty the products table (and reset its id sequence) around each test.
    """
    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE public.products RESTART IDENTITY;")
    db_connection.commit()
    yield
    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE public.products RESTART IDENTITY;")
    db_connection.commit()


@pytest.fixture
def product_count(db_connection: psycopg.Connection):
    """
    Callable returning the current number of rows in the products table.
    """

    def _count() -> int:
        with db_connection.cursor() as cur:
            cur.execute("SELECT COUNT(*) FROM public.products;")
            count = cur.fetchone()[0]
        db_connection.commit()
        return count

    return _count
