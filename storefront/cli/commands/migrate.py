"""Migrate command - bring the database schema up to date."""

import sys

import cyclopts
from pydantic import ValidationError

from storefront.cli.console import get_console
from storefront.config import Config
from storefront.infrastructure.persistence.migrate import run_migrations

app = cyclopts.App(name="migrate", help="Apply database migrations")


@app.default
def migrate() -> None:
    """Upgrade the configured database to the latest schema revision."""
    console = get_console()
    try:
        config = Config()  # type: ignore[call-arg]
    except ValidationError as e:
        console.error(f"Invalid configuration: {e}", hint="Check STOREFRONT_* environment variables")
        sys.exit(1)

    run_migrations(config.database.url)
    console.success("Database is up to date")
