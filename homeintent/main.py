"""
Main application entry point - FastAPI app instance and configuration.
Run with: uvicorn homeintent.main:app --port 3000
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from homeintent.ai.intent.parser import IntentExtractor
from homeintent.ai.providers import AIProvider, get_provider
from homeintent.core.config import settings
from homeintent.devices.address_table import DEFAULT_ADDRESS_TABLE, AddressTable
from homeintent.devices.store import DeviceStore, build_store
from homeintent.monitoring import DispatchMonitor, configure_logging, dispatch_monitor
from homeintent.routers import instructions
from homeintent.services.dispatcher import IntentDispatcher
from homeintent.services.instruction_service import InstructionService

logger = logging.getLogger("homeintent.main")


def create_app(
    store: Optional[DeviceStore] = None,
    provider: Optional[AIProvider] = None,
    table: AddressTable = DEFAULT_ADDRESS_TABLE,
    monitor: DispatchMonitor = dispatch_monitor,
) -> FastAPI:
    """
    Build the FastAPI application.

    Collaborators not passed in are created from settings when the app
    starts and closed when it stops. Passed-in ones are left open for
    the caller to manage.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.LOG_LEVEL)
        owned = []

        app_store = store
        if app_store is None:
            app_store = build_store(settings)
            owned.append(app_store)

        app_provider = provider
        if app_provider is None:
            app_provider = get_provider(settings)
            owned.append(app_provider)

        dispatcher = IntentDispatcher(app_store, table=table, monitor=monitor)
        app.state.monitor = monitor
        app.state.instruction_service = InstructionService(
            extractor=IntentExtractor(app_provider),
            dispatcher=dispatcher,
            monitor=monitor,
        )
        logger.info(
            f"{settings.APP_NAME} started (store={app_store.name}, "
            f"provider={app_provider.provider_type.value})"
        )

        try:
            yield
        finally:
            for resource in owned:
                await resource.close()
            logger.info(f"{settings.APP_NAME} stopped")

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Malformed bodies are a client error (400), not FastAPI's default 422
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
        return instructions.invalid_request_response()

    app.include_router(instructions.router)

    @app.get("/health", tags=["health"])
    def health_check():
        """
        Simple health check endpoint.

        Does NOT check the device store or the LLM.

        Returns:
            {"status": "ok"}
        """
        return {"status": "ok"}

    return app


app = create_app()
