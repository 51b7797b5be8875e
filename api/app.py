"""Application factory: configuration, storage, services, events, routes."""

import logging
from contextlib import asynccontextmanager
from typing import Callable

from dotenv import load_dotenv
from fastapi import FastAPI

from api.actions import create_actions_router
from api.data import create_data_router
from api.errors import register_error_handlers
from api.middleware import RequestIDMiddleware
from clients.postgres_client import PostgresClient
from core.config import StorageConfig, load_storage_config
from core.event_bus import EventBus
from core.handlers.revalidation_handler import log_revalidation, subscribe_revalidation
from core.services.customer_service import CustomerService
from core.services.dashboard_service import DashboardService
from core.services.invoice_service import InvoiceService

logger = logging.getLogger(__name__)


def build_services(postgres: PostgresClient, event_bus: EventBus) -> dict:
    """Instantiate every service against one client and one bus."""
    return {
        "invoice": InvoiceService(postgres, event_bus),
        "customer": CustomerService(postgres),
        "dashboard": DashboardService(postgres),
    }


def create_app(
    config: StorageConfig | None = None,
    postgres: PostgresClient | None = None,
    revalidate: Callable[[str], None] = log_revalidation,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Storage settings. Loaded from the environment (and .env) if omitted.
        postgres: Pre-built client, mainly for tests. Built from config if omitted.
        revalidate: Called with the invoice list path after each committed mutation

    Raises:
        ConfigError: If required configuration is missing
    """
    if config is None:
        load_dotenv()
        config = load_storage_config()

    if postgres is None:
        postgres = PostgresClient.from_config(config)

    event_bus = EventBus()
    subscribe_revalidation(event_bus, revalidate, config.revalidate_path)

    services = build_services(postgres, event_bus)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        postgres.close()

    app = FastAPI(title="Invoice Dashboard", lifespan=lifespan)
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)

    app.include_router(create_data_router(services), prefix="/api")
    app.include_router(create_actions_router(services, config.revalidate_path))

    logger.info("Invoice dashboard app created")
    return app
