"""Database management commands for BranchPoint CLI."""
import asyncio
from pathlib import Path
from typing import Optional

import click
from alembic import command
from alembic.config import Config

from branchpoint.core.database import create_all, create_engine, mask_url


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent.parent


def get_alembic_config(url: Optional[str] = None) -> Config:
    """
    Build the Alembic config from alembic.ini at the project root.

    Args:
        url: Optional sync database URL overriding settings
    """
    root = get_project_root()
    config = Config(str(root / "alembic.ini"))
    config.set_main_option("script_location", str(root / "alembic"))
    if url:
        config.set_main_option("sqlalchemy.url", url)
    return config


async def _create_all(url: Optional[str]) -> None:
    engine = create_engine(url)
    try:
        await create_all(engine)
    finally:
        await engine.dispose()


@click.group()
def db_group() -> None:
    """Database management commands."""
    pass


@db_group.command("create-all")
@click.option("--url", default=None, help="Async database URL (defaults to DATABASE_URL)")
def create_all_command(url: Optional[str]) -> None:
    """Create the document table directly (development only)."""
    click.echo(click.style("Creating tables...", fg="yellow"))
    asyncio.run(_create_all(url))
    click.echo(click.style("✓ Tables created", fg="green"))


@db_group.command()
@click.option("--url", default=None, help="Sync database URL (defaults to DATABASE_URL_SYNC)")
@click.option("--revision", default="head", show_default=True, help="Target revision")
def upgrade(url: Optional[str], revision: str) -> None:
    """Run Alembic migrations up to a revision."""
    target = mask_url(url) if url else "configured database"
    click.echo(click.style(f"Upgrading {target} to {revision}...", fg="yellow"))
    command.upgrade(get_alembic_config(url), revision)
    click.echo(click.style("✓ Migrations applied", fg="green"))
