"""Mini README: Entry point CLI for the khata ledger service.

This script exposes a Typer CLI to start the FastAPI application, create the
ledger database ahead of time, and print the dashboard summary from a
terminal. Settings come from ``KHATA_`` environment variables unless an
option overrides them.
"""

from __future__ import annotations

from typing import Optional

import typer
import uvicorn

from khata.configuration import get_settings
from khata.errors import StorageError
from khata.ledger import LedgerStore, ledger_summary
from khata.logging_utils import configure_root_logger

cli = typer.Typer(help="Run and inspect the khata ledger service.")


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

    # Browsers cannot open 0.0.0.0, so point operators at localhost instead.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting khata ledger on {effective_host}:{effective_port} "
        f"({settings.environment}).\n"
        f"API available at http://{browser_host}:{effective_port}/api"
    )
    uvicorn.run(
        "khata.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not (production or settings.is_production),
    )


@cli.command("init-db")
def init_db(
    database_url: Optional[str] = typer.Option(None, help="Override the configured database URL."),
) -> None:
    """Create the ledger tables if they do not exist yet."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    url = database_url or settings.database_url
    try:
        with LedgerStore(url):
            pass
    except StorageError as error:
        typer.echo(f"Could not initialise {url}: {error}", err=True)
        raise typer.Exit(code=1) from error
    typer.echo(f"Ledger database ready at {url}")


@cli.command()
def summary(
    database_url: Optional[str] = typer.Option(None, help="Override the configured database URL."),
) -> None:
    """Print today's expense, total receivable and total payable."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    with LedgerStore(database_url or settings.database_url) as store:
        figures = ledger_summary(store)
    typer.echo(f"Today's expense:  {figures.today_expense:.2f}")
    typer.echo(f"Total receivable: {figures.total_receivable:.2f}")
    typer.echo(f"Total payable:    {figures.total_payable:.2f}")


if __name__ == "__main__":
    cli()
