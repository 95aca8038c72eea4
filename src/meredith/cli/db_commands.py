"""Database CLI commands."""

import typer
from rich.panel import Panel

from src.meredith.core.services import DbManageService, DbSessionService
from src.meredith.runtime.context import get_config

from .utils import console

db_app = typer.Typer(help="Database commands")


@db_app.command(name="init")
def init(
    drop: bool = typer.Option(
        False, "--drop", help="Drop existing tables before creating them"
    ),
) -> None:
    """Create every Meredith table in the configured database."""
    config = get_config()
    if drop and config.app.environment == "production":
        console.print("[red]Refusing to drop tables in production[/red]")
        raise typer.Exit(1)

    console.print(
        Panel.fit(
            f"[bold blue]Initializing database[/bold blue]\n{config.database.url}",
            border_style="blue",
        )
    )

    database_service = DbSessionService()
    manager = DbManageService(database_service.engine)
    if drop:
        manager.drop_all()
    manager.create_all()

    console.print("[green]Database ready[/green]")
