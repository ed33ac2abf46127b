"""Mini README: Request-facing interfaces for the khata ledger.

Exports the FastAPI application factory serving the JSON API. The Typer CLI
in ``main_khata.py`` launches it through uvicorn.
"""

from .web_app import create_application

__all__ = ["create_application"]
