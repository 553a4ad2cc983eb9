"""Main CLI entry point for BranchPoint commands."""
import click

from branchpoint import __version__
from branchpoint.cli import db


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """BranchPoint - decision journal API CLI."""
    pass


# Register command groups
cli.add_command(db.db_group, name="db")


@cli.command()
@click.option("--host", default="0.0.0.0", show_default=True, help="Bind address")
@click.option("--port", default=8000, show_default=True, type=int, help="Bind port")
@click.option("--reload/--no-reload", default=False, show_default=True, help="Auto-reload on code changes")
def serve(host: str, port: int, reload: bool) -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    click.echo(click.style(f"Starting BranchPoint API on {host}:{port}", fg="green"))
    uvicorn.run("branchpoint.main:app", host=host, port=port, reload=reload, log_level="info")


if __name__ == "__main__":
    cli()
