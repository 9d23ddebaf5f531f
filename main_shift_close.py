"""Mini README: Entry point CLI for launching the shift close form.

This script exposes a Typer CLI that starts the FastAPI application with
configurable host, port, and production flags, and a ``check`` command that
reports the effective configuration before a shift goes live.
"""

from __future__ import annotations

import typer
import uvicorn

from shiftclose.configuration import get_settings
from shiftclose.logging_utils import configure_root_logger

cli = typer.Typer(help="Launch and manage the shift close web form.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # Browsers cannot open the 0.0.0.0 sentinel, so point at localhost instead.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        "Starting shift close on "
        f"{effective_host}:{effective_port}.\n"
        "Open your browser at "
        f"http://{browser_host}:{effective_port}"
    )
    if not settings.webhook_url:
        typer.echo("Warning: SHIFTCLOSE_WEBHOOK_URL is not set; submissions will fail.", err=True)
    uvicorn.run(
        "shiftclose.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def check() -> None:
    """Print the effective configuration and exit non-zero without a webhook."""

    settings = get_settings()
    typer.echo(f"environment: {settings.environment}")
    typer.echo(f"webhook_url: {settings.webhook_url or '(not set)'}")
    typer.echo(f"webhook_timeout_seconds: {settings.webhook_timeout_seconds}")
    typer.echo(f"status_reset_seconds: {settings.status_reset_seconds}")
    typer.echo(f"interface: {settings.interface_host}:{settings.interface_port}")
    if not settings.webhook_url:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    cli()
