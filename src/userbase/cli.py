"""Command-line interface for UserBase.

This module provides the CLI commands for running and managing
the UserBase application.
"""

import asyncio

import click

from userbase import __version__
from userbase.core.config import get_settings
from userbase.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="UserBase")
def cli() -> None:
    """UserBase - user accounts, roles and JWT authentication.

    Settings are read from USERBASE_* environment variables and .env files.
    """


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the UserBase HTTP server."""
    import uvicorn

    settings = get_settings()
    bind_host = host or settings.host
    bind_port = port or settings.port

    configure_logging(settings)
    logger = get_logger(__name__)
    logger.info(
        "Starting UserBase server",
        host=bind_host,
        port=bind_port,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "userbase.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command("init-db")
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
def init_db(force: bool) -> None:
    """Create the tables and seed the default roles."""
    from userbase.infrastructure.persistence.database import (
        get_db_manager,
        init_database,
    )

    settings = get_settings()
    configure_logging(settings)

    if not force:
        click.confirm(
            f"This will create the tables in {settings.database_url}. Continue?",
            abort=True,
            default=False,
        )

    async def initialize() -> None:
        try:
            await init_database()
            click.echo("Database initialized successfully.")
        finally:
            await get_db_manager().disconnect()

    asyncio.run(initialize())


@cli.command()
def info() -> None:
    """Display UserBase configuration."""
    settings = get_settings()

    click.echo(f"""
UserBase v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix or '/'}

Server:
  Host:         {settings.host}
  Port:         {settings.port}

Database:
  URL:          {settings.database_url}
  Echo:         {settings.db_echo}

Security:
  Token Expire: {settings.access_token_expire_minutes} minutes
  bcrypt Cost:  {settings.bcrypt_rounds}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> None:
    """Entry point for the ``userbase`` command and ``python -m userbase``."""
    cli()


if __name__ == "__main__":
    main()
