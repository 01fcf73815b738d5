"""Command-line interface for OutletBase.

This module provides the CLI commands for running and managing
the OutletBase application.
"""

from datetime import timedelta
from typing import NoReturn

import click

from outletbase.core.config import get_settings
from outletbase.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(package_name="outletbase", prog_name="OutletBase")
def cli() -> None:
    """OutletBase - outlets, delivery areas and outlet admin invitations."""


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload/--no-reload",
    default=None,
    help="Auto-reload on code changes (defaults to on in development)",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool | None) -> None:
    """Start the OutletBase server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers
    if reload is None:
        reload = settings.is_development

    if bind_workers > 1 and settings.database_url.startswith("sqlite"):
        click.echo(
            "Error: SQLite does not support multiple worker processes. "
            "Use --workers 1 or switch to PostgreSQL.",
            err=True,
        )
        raise SystemExit(1)

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting OutletBase server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "outletbase.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command("init-db")
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
def init_db(force: bool) -> None:
    """Create all database tables.

    Use this only in development. In production, run the Alembic
    migrations instead.
    """
    import asyncio

    from outletbase.infrastructure.persistence.database import get_db_manager, init_database

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init-db.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
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


@cli.command("issue-token")
@click.option("--user-id", required=True, help="User ID (the 'sub' claim)")
@click.option("--email", required=True, help="Email claim")
@click.option("--name", default=None, help="Optional display name claim")
@click.option(
    "--expires-minutes",
    type=int,
    default=None,
    help="Token lifetime (defaults to access_token_expire_minutes)",
)
def issue_token(user_id: str, email: str, name: str | None, expires_minutes: int | None) -> None:
    """Mint a bearer token signed with the shared secret.

    Tokens are normally issued by the auth provider; this is for local
    development and manual testing.
    """
    from outletbase.infrastructure.auth import jwt_service

    settings = get_settings()
    if settings.is_production:
        click.echo("ERROR: issue-token is disabled in production.", err=True)
        raise SystemExit(1)

    expires_delta = timedelta(minutes=expires_minutes) if expires_minutes else None
    click.echo(jwt_service.create_access_token(user_id, email, name, expires_delta))


@cli.command()
def info() -> None:
    """Display OutletBase configuration."""
    settings = get_settings()

    click.echo(f"""
OutletBase v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {settings.database_url}
  Pool Size:    {settings.db_pool_size}
  Echo:         {settings.db_echo}

Service Area:
  Mode:         {settings.service_area_mode}
  Postal Code:  {settings.postal_code_length} digits
  Radius:       {settings.default_delivery_radius_km} km (default)
  Geocoding:    {"enabled" if settings.geocoding_enabled else "disabled"}

Invitations:
  Expiry:       {settings.invitation_expire_days} days
  Accept URL:   {settings.invitation_accept_url}
  Email:        {settings.email_provider}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    Called by the `outletbase` command and by `python -m outletbase`.
    """
    cli()


if __name__ == "__main__":
    main()
