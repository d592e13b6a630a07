from __future__ import annotations

import sys
from typing import Optional

import typer
import uvicorn
from psycopg.conninfo import make_conninfo
from rich import box
from rich.console import Console
from rich.table import Table

from inventory_service.config import get_settings
from inventory_service.infrastructure.db_factory import build_dsn, get_sync_connection, init_schema
from inventory_service.utils.logging import configure_logging

app = typer.Typer(help="Inventory Service CLI.")


def _masked_dsn() -> str:
    settings = get_settings()
    if settings.database_url:
        return make_conninfo(settings.database_url, password="***")
    return f"{settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name}"


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    table = Table(title="Inventory Service Configuration", box=box.ROUNDED)
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    table.add_row("database", _masked_dsn())
    table.add_row("pool", f"min={settings.db_pool_min_size} max={settings.db_pool_max_size}")
    table.add_row("pool timeout", f"{settings.db_pool_timeout_seconds}s")
    table.add_row("statement timeout", f"{settings.db_statement_timeout_ms}ms")
    table.add_row("listen", f"{settings.api_host}:{settings.api_port}")
    table.add_row("environment", settings.app_env)
    table.add_row("log level", settings.log_level)
    table.add_row("expose storage errors", str(settings.expose_storage_errors))
    Console().print(table)


@app.command("init-db")
def init_db(
    dsn: Optional[str] = typer.Option(
        None,
        "--dsn",
        help="Optional DSN override for Postgres.",
    ),
) -> None:
    """
    Create the products table if it does not exist.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    conn = get_sync_connection(dsn or build_dsn(settings))
    try:
        init_schema(conn)
    finally:
        conn.close()
    typer.echo("Schema ready.")


@app.command()
def serve(
    host: Optional[str] = typer.Option(
        None,
        "--host",
        help="Interface to bind (default from settings).",
    ),
    port: Optional[int] = typer.Option(
        None,
        "--port",
        "-p",
        help="Port to listen on (default from settings).",
    ),
) -> None:
    """
    Run the HTTP API.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    uvicorn.run(
        "inventory_service.api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_config=None,
        access_log=False,
    )


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
