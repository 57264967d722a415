"""Skill Swap CLI — run the API and handle small admin chores.

Usage:
    skillswap serve                      # Run the API with uvicorn
    skillswap init-db                    # Create tables in SKILLSWAP_DATABASE_URL
    skillswap create-token <user-id>     # Mint a bearer token for manual testing
"""

from __future__ import annotations

import asyncio
from typing import Optional

import click

from skillswap.config import settings


@click.group()
@click.version_option(package_name="skillswap")
def cli() -> None:
    """Skill Swap backend."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default: SKILLSWAP_HOST).")
@click.option("--port", type=int, default=None, help="Port (default: SKILLSWAP_PORT).")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes.")
def serve(host: Optional[str], port: Optional[int], reload: bool) -> None:
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run(
        "skillswap.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_config=None,
    )


@cli.command("init-db")
def init_db() -> None:
    """Create any missing tables (use Alembic for real migrations)."""
    from skillswap.db.engine import create_tables, engine

    async def _run() -> None:
        try:
            await create_tables()
        finally:
            await engine.dispose()

    asyncio.run(_run())
    click.secho("Tables created.", fg="green")


@cli.command("create-token")
@click.argument("user_id")
@click.option("--days", type=int, default=None, help="Lifetime in days (default: 7).")
def create_token(user_id: str, days: Optional[int]) -> None:
    """Print a bearer token for USER_ID. Does not check the user exists."""
    from datetime import timedelta

    from skillswap.auth.jwt import issue_token
    from skillswap.storage.records import parse_id

    if parse_id(user_id) is None:
        raise click.BadParameter("not a valid user id", param_hint="USER_ID")

    expires = timedelta(days=days) if days else None
    click.echo(issue_token(user_id, expires_delta=expires))


if __name__ == "__main__":
    cli()
