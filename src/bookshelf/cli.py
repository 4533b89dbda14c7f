"""Command line interface for running and preparing the service."""

from typing import Optional

import typer
import uvicorn
from rich.console import Console
from rich.panel import Panel

from bookshelf.core.errors import DatabaseStartupError
from bookshelf.core.services.database import DbSessionService
from bookshelf.runtime.context import get_config
from bookshelf.runtime.init_db import init_db

console = Console()

app = typer.Typer(
    help="📚 Bookshelf service CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def run_server(
    host: str | None = None,
    port: int | None = None,
    reload: bool = False,
    log_level: str = "info",
) -> None:
    """Start uvicorn with the application; host and port default to the config."""
    config = get_config()
    uvicorn.run(
        "bookshelf.api.http.app:app",
        host=host or config.app.host,
        port=port or config.app.port,
        reload=reload,
        log_level=log_level,
    )


@app.command(name="serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Host to bind the server to"),
    port: Optional[int] = typer.Option(None, help="Port to bind the server to"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
    log_level: str = typer.Option(
        "info", help="Log level (debug, info, warning, error, critical)"
    ),
) -> None:
    """
    🚀 Start the HTTP server.
    """
    console.print(
        Panel.fit("[bold green]Starting Bookshelf server[/bold green]", border_style="green")
    )
    run_server(host=host, port=port, reload=reload, log_level=log_level)


@app.command(name="init-db")
def init_db_command() -> None:
    """Create the books table if it does not exist."""
    try:
        init_db()
    except DatabaseStartupError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1) from e
    console.print("[green]✅ Books table is ready[/green]")


@app.command(name="check-db")
def check_db() -> None:
    """Check that the configured database answers."""
    db_config = get_config().database
    database_service = DbSessionService(db_config)
    try:
        healthy = database_service.health_check()
    finally:
        database_service.dispose()

    if healthy:
        console.print(
            Panel.fit(
                f"[green]Database reachable[/green]\n{db_config.safe_connection_string}",
                border_style="green",
            )
        )
        return
    console.print(
        Panel.fit(
            f"[red]Database not reachable[/red]\n{db_config.safe_connection_string}",
            border_style="red",
        )
    )
    raise typer.Exit(1)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
