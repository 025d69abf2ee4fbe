"""
Flavors API — Command Line Interface
=====================================

    flavors-api serve [--host H] [--port P] [--reload]
    flavors-api init-db      create the flavors table if missing
    flavors-api reset-db     drop, recreate and seed the flavors table

All commands read DATABASE_URL (and the rest of Settings) from the
environment or .env.
"""

import asyncio

import click
import uvicorn

from flavors_api.config import get_settings
from flavors_api.database import create_engine, dispose_engine
from flavors_api.main import setup_logging
from flavors_api.seed import create_schema, reset_schema


async def _with_engine(action):
    settings = get_settings()
    engine = create_engine(settings)
    try:
        return await action(engine)
    finally:
        await dispose_engine(engine)


@click.group()
def cli() -> None:
    """Flavors API service and database commands."""


@cli.command("serve")
@click.option("--host", default=None, help="Listen host (default: HOST or 0.0.0.0)")
@click.option("--port", type=int, default=None, help="Listen port (default: PORT or 3000)")
@click.option("--reload", is_flag=True, help="Restart on code changes (development)")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Run the HTTP server."""
    settings = get_settings()
    uvicorn.run(
        "flavors_api.main:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@cli.command("init-db")
def init_db() -> None:
    """Create the flavors table if it does not exist."""
    setup_logging(get_settings().log_level)
    asyncio.run(_with_engine(create_schema))
    click.echo("Database initialized")


@cli.command("reset-db")
@click.confirmation_option(prompt="This deletes every stored flavor. Continue?")
def reset_db() -> None:
    """Drop, recreate and seed the flavors table."""
    setup_logging(get_settings().log_level)
    count = asyncio.run(_with_engine(reset_schema))
    click.echo(f"Database reset; seeded {count} flavors")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
