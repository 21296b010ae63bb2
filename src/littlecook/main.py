"""
My Little Cook - CLI Entry Point.

Usage:
    littlecook serve            Start the web server
    littlecook health           Check configuration
    littlecook db               Check database connection and tables
    littlecook --help           Show help
"""

import logging
import sys

import typer
from rich.console import Console

app = typer.Typer(
    name="littlecook",
    help="My Little Cook - meal plans, recipes and shopping lists.",
    add_completion=False,
)
console = Console()


def setup_logging(level: str) -> None:
    """Root logger at the configured level, noisy HTTP libraries quieted."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@app.command()
def serve(
    port: int = typer.Option(8000, "--port", "-p", help="Port to run on"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload for development"),
) -> None:
    """Start the web server."""
    import os

    import uvicorn

    from littlecook.config import settings

    setup_logging(settings.log_level)

    # Hosting platforms set PORT
    actual_port = int(os.environ.get("PORT", port))

    console.print(f"\n[bold green]My Little Cook[/bold green]")
    console.print(f"Starting server on http://localhost:{actual_port}")
    console.print(f"[dim]Press Ctrl+C to stop[/dim]\n")

    uvicorn.run(
        "littlecook.web.app:app",
        host="0.0.0.0",
        port=actual_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@app.command()
def health() -> None:
    """Check configuration."""
    console.print("\n[bold]Configuration Check[/bold]\n")

    try:
        from littlecook.config import settings

        if settings.supabase_url.startswith("https://"):
            console.print("[green]OK[/green] Supabase URL configured")
        else:
            console.print("[yellow]WARN[/yellow] Supabase URL is not https")

        if settings.supabase_service_role_key:
            console.print("[green]OK[/green] Supabase service role key configured")
        else:
            console.print("[red]FAIL[/red] Supabase service role key missing")
            raise typer.Exit(1)

        console.print(f"[dim]INFO[/dim] Environment: {settings.littlecook_env}")
        console.print("\n[green]All checks passed![/green]")

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"\n[red]FAIL Configuration error: {e}[/red]")
        console.print("[dim]Make sure you have a .env file with required variables.[/dim]")
        raise typer.Exit(1)


@app.command()
def db() -> None:
    """Check database connection and tables."""
    from littlecook.db.client import create_service_client

    console.print("\n[bold]Database Connection Check[/bold]\n")

    try:
        client = create_service_client()
        console.print("[green]OK[/green] Connected to Supabase")
    except Exception as e:
        console.print(f"[red]FAIL[/red] Could not connect: {e}")
        raise typer.Exit(1)

    failed = False
    for table in ("users", "user_settings", "meal_users", "default_slot_settings", "meal_plans"):
        try:
            client.table(table).select("*").limit(1).execute()
            console.print(f"[green]OK[/green] Table '{table}' accessible")
        except Exception as e:
            console.print(f"[red]FAIL[/red] Table '{table}': {e}")
            failed = True

    if failed:
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    from littlecook import __version__

    console.print(f"My Little Cook version {__version__}")


if __name__ == "__main__":
    app()
