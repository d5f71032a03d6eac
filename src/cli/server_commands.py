"""Server and database CLI commands."""

from typing import Optional

import typer
from rich.panel import Panel
from rich.table import Table
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError

from src.bookstore.runtime.context import get_config

from .utils import console

server_app = typer.Typer(help="📚 Bookstore API commands")


@server_app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Host to bind (default: app.host from config)"),
    port: Optional[int] = typer.Option(None, help="Port to bind (default: app.port from config)"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """
    🚀 Start the Bookstore API server.

    Creates missing tables on startup, then serves the /book/ endpoints.
    """
    import uvicorn

    config = get_config()
    bind_host = config.app.host if host is None else host
    bind_port = config.app.port if port is None else port

    console.print(
        Panel.fit(
            f"[bold green]Bookstore API on http://{bind_host}:{bind_port}[/bold green]",
            border_style="green",
        )
    )
    console.print("[dim]Press Ctrl+C to stop the server[/dim]")

    uvicorn.run(
        "src.bookstore.api.http.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        access_log=False,  # Request logging is done by the middleware
    )


@server_app.command(name="init-db")
def init_db_command() -> None:
    """
    🗄️  Create the database tables.

    Safe to run repeatedly: existing tables are left untouched.
    """
    from src.bookstore.runtime.init_db import init_db

    config = get_config()
    safe_url = make_url(config.database.url).render_as_string(hide_password=True)
    console.print(f"[blue]Initializing database:[/blue] {safe_url}")

    try:
        tables = init_db(config)
    except SQLAlchemyError as e:
        console.print(f"[red]❌ Database initialization failed: {e}[/red]")
        raise typer.Exit(1) from e

    table = Table(show_header=True, header_style="bold blue")
    table.add_column("Table", style="cyan", no_wrap=True)
    for name in tables:
        table.add_row(name)
    console.print(table)
    console.print("[green]✅ Database ready[/green]")
