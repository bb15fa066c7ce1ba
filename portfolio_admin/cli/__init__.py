"""
Command Line Interface for Portfolio Admin.
"""

import asyncio
from typing import Optional

import typer
import uvicorn
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..auth import create_access_token
from ..config import get_settings
from ..content.aggregation import AggregationService, exhibition_date
from ..db.base import get_session_local, init_database

app = typer.Typer(help="Portfolio Admin - content management for an artist portfolio")
console = Console()


@app.command()
def serve(
    port: Optional[int] = typer.Option(None, help="Port to run the API server on"),
    host: Optional[str] = typer.Option(None, help="Host to bind the server to"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
):
    """Run the admin API server."""
    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port
    rprint(Panel.fit(f"Starting Portfolio Admin on http://{host}:{port}", style="bold blue"))
    uvicorn.run("portfolio_admin.main:app", host=host, port=port, reload=reload)


@app.command()
def init_db():
    """Create all database tables."""
    asyncio.run(init_database())
    console.print("✅ Database initialized")


@app.command()
def token(
    user_id: str = typer.Argument(..., help="User id placed in the token subject"),
    email: Optional[str] = typer.Option(None, help="Email claim"),
    minutes: Optional[int] = typer.Option(None, help="Lifetime in minutes"),
):
    """Issue a bearer token for the admin API."""
    from datetime import timedelta

    expires = timedelta(minutes=minutes) if minutes else None
    console.print(create_access_token(user_id, email=email, expires_delta=expires))


@app.command()
def collections(
    drafts: bool = typer.Option(True, help="Include draft artworks"),
):
    """Show collections and their artworks."""
    db = get_session_local()()
    try:
        groups = AggregationService(db).get_artworks_by_collection(include_drafts=drafts)
    finally:
        db.close()

    if not groups:
        console.print("No collections")
        return

    table = Table(title="Collections", show_header=True, header_style="bold magenta")
    table.add_column("Collection", style="cyan")
    table.add_column("Artworks", style="green", justify="right")
    table.add_column("Titles")
    for name, artworks in groups.items():
        titles = ", ".join(a.title or a.id for a in artworks[:5])
        if len(artworks) > 5:
            titles += ", …"
        table.add_row(name, str(len(artworks)), titles)
    console.print(table)


@app.command()
def exhibitions(
    drafts: bool = typer.Option(True, help="Include draft artworks"),
):
    """Show exhibitions, most recent first."""
    db = get_session_local()()
    try:
        items = AggregationService(db).get_exhibitions(include_drafts=drafts)
    finally:
        db.close()

    if not items:
        console.print("No exhibitions")
        return

    table = Table(title="Exhibitions", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="yellow")
    table.add_column("Venue", style="green")
    table.add_column("Dates")
    table.add_column("Sorted as", style="blue")
    table.add_column("Artworks", justify="right")
    for exhibition in items:
        when = exhibition_date(exhibition)
        table.add_row(
            exhibition.name,
            exhibition.venue,
            exhibition.dates,
            when.isoformat() if when else "-",
            str(len(exhibition.artworks)),
        )
    console.print(table)


if __name__ == "__main__":
    app()
