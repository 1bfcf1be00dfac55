"""Mini README: Entry point CLI for launching the expense tracker dashboard.

This script exposes a Typer CLI that starts the FastAPI application under
uvicorn. Host, port, log level and auto-reload default to the
``EXPENSE_TRACKER_*`` settings; command line options override them for a
single run.
"""

from __future__ import annotations

from typing import Optional

import typer
import uvicorn

from expense_tracker.configuration import get_settings
from expense_tracker.logging_utils import configure_root_logger

cli = typer.Typer(help="Launch the personal expense tracker dashboard.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: Optional[bool] = typer.Option(
        None,
        "--production/--development",
        help="Disable or force auto-reload. Defaults to the configured environment.",
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # Browsers cannot open the 0.0.0.0 / :: wildcard addresses directly.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting expense tracker on {effective_host}:{effective_port}"
        f" (ledger file: {settings.ledger_path}).\n"
        f"Open your browser at http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "expense_tracker.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=settings.auto_reload if production is None else not production,
    )


if __name__ == "__main__":
    cli()
