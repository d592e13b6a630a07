"""
PostgreSQL implementation of the product gateway.

Every operation borrows one connection from the injected pool, runs exactly
one parameterized statement and hands the connection back. Connections are
in autocommit mode, so no transaction outlives a statement.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from inventory_service.domain.models import Product, ProductIn
from inventory_service.errors import NotFoundError, StorageError
from inventory_service.gateway.abstract import ProductGateway
from inventory_service.utils.logging import get_logger

log = get_logger(__name__)

_COLUMNS = "id, name, description, price, quantity, created_at, updated_at"

INSERT_SQL = f"""
    INSERT INTO public.products (name, description, price, quantity)
    VALUES (%(name)s, %(description)s, %(price)s, %(quantity)s)
    RETURNING {_COLUMNS};
"""

SELECT_ONE_SQL = f"SELECT {_COLUMNS} FROM public.products WHERE id = %(id)s;"

# updated_at moves forward by at least one microsecond even if the clock has not.
UPDATE_SQL = f"""
    UPDATE public.products
    SET name = %(name)s,
        description = %(description)s,
        price = %(price)s,
        quantity = %(quantity)s,
        updated_at = GREATEST(CURRENT_TIMESTAMP, updated_at + INTERVAL '1 microsecond')
    WHERE id = %(id)s
    RETURNING {_COLUMNS};
"""

DELETE_SQL = "DELETE FROM public.products WHERE id = %(id)s;"

SELECT_ALL_SQL = f"SELECT {_COLUMNS} FROM public.products ORDER BY id;"


class PostgresProductGateway(ProductGateway):
    """
    Product gateway backed by a psycopg `ConnectionPool`.

    The pool is owned by the caller; this class never opens or closes it.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def _fetch_one(self, sql: str, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(sql, params)
                    return cur.fetchone()
        except psycopg.Error as exc:
            log.warning("Storage operation failed", extra={"error": str(exc)})
            raise StorageError(str(exc)) from exc

    def create(self, product: ProductIn) -> Product:
        row = self._fetch_one(INSERT_SQL, product.as_params())
        if row is None:
            raise StorageError("insert returned no row")
        created = Product.model_validate(row)
        log.info("Product created", extra={"product_id": created.id})
        return created

    def get(self, product_id: int) -> Product:
        row = self._fetch_one(SELECT_ONE_SQL, {"id": product_id})
        if row is None:
            raise NotFoundError(product_id)
        log.debug("Product fetched", extra={"product_id": product_id})
        return Product.model_validate(row)

    def update(self, product_id: int, product: ProductIn) -> Product:
        row = self._fetch_one(UPDATE_SQL, {**product.as_params(), "id": product_id})
        if row is None:
            raise NotFoundError(product_id)
        log.info("Product updated", extra={"product_id": product_id})
        return Product.model_validate(row)

    def delete(self, product_id: int) -> bool:
        try:
            with self._pool.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(DELETE_SQL, {"id": product_id})
                    deleted = cur.rowcount > 0
        except psycopg.Error as exc:
            log.warning("Storage operation failed", extra={"error": str(exc)})
            raise StorageError(str(exc)) from exc
        log.info("Product deleted", extra={"product_id": product_id, "deleted": deleted})
        return deleted

    def list_all(self) -> List[Product]:
        try:
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(SELECT_ALL_SQL)
                    products = [Product.model_validate(row) for row in cur]
        except psycopg.Error as exc:
            log.warning("Storage operation failed", extra={"error": str(exc)})
            raise StorageError(str(exc)) from exc
        log.debug("Products listed", extra={"count": len(products)})
        return products


__all__ = ["PostgresProductGateway"]
