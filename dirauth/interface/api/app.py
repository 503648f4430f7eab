"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI

from dirauth.interface.api.routes import accounts, health
from dirauth.util.di.container import create_container, setup_di
from dirauth.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use instead of the production one

    Returns:
        Configured application
    """
    app_instance = FastAPI(
        title="dirauth",
        description="Directory identity reconciliation for the local account store",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    # Settings are loaded from environment automatically
    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(accounts.router)

    return app_instance
