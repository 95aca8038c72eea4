"""Development CLI commands."""

import typer
import uvicorn
from fastapi import HTTPException
from rich.panel import Panel

from src.meredith.core.services import JwtService
from src.meredith.runtime.context import get_config

from .utils import console

dev_app = typer.Typer(help="Development commands")


@dev_app.command(name="start-server")
def start_server(
    host: str | None = typer.Option(None, help="Bind address; defaults to app.host"),
    port: int | None = typer.Option(None, help="Bind port; defaults to app.port"),
    reload: bool = typer.Option(True, help="Enable auto-reload on code changes"),
    log_level: str = typer.Option(
        "info", help="Log level (debug, info, warning, error, critical)"
    ),
) -> None:
    """Start the FastAPI development server."""
    app_config = get_config().app
    if host is not None or port is not None:
        app_config = app_config.model_copy(
            update={"host": host or app_config.host, "port": port or app_config.port}
        )

    console.print(
        Panel.fit(
            "[bold green]Starting Meredith API[/bold green]",
            border_style="green",
        )
    )
    console.print(f"[blue]Server will be available at:[/blue] {app_config.base_url}")
    console.print("[dim]Press Ctrl+C to stop the server[/dim]")

    uvicorn.run(
        "src.meredith.api.http.app:app",
        host=app_config.host,
        port=app_config.port,
        reload=reload,
        reload_dirs=["src"] if reload else None,
        log_level=log_level,
    )


@dev_app.command(name="issue-token")
def issue_token(
    subject: str = typer.Argument(..., help="Subject (user id) of the token"),
    role: list[str] = typer.Option([], "--role", "-r", help="Role to embed; repeatable"),
    expires_in: int | None = typer.Option(
        None, help="Lifetime in seconds; defaults to the configured lifetime"
    ),
) -> None:
    """Print a signed access token for local testing."""
    try:
        token = JwtService().generate_jwt(
            subject, roles=role or None, expires_in_seconds=expires_in
        )
    except HTTPException as e:
        console.print(f"[red]{e.detail}[/red]")
        raise typer.Exit(1) from e
    console.print(token, soft_wrap=True)
