"""
Handler for invoice change events.

Any committed invoice mutation makes the rendered invoice list stale, so
the list view is revalidated.
"""

import logging
from typing import Callable

from core.events import InvoiceEvent

logger = logging.getLogger(__name__)

INVOICE_LIST_PATH = "/dashboard/invoices"


def log_revalidation(path: str) -> None:
    """Default revalidator: record the invalidation for the rendering tier."""
    logger.info("Revalidated %s", path)


def handle_invoice_changed(
    revalidate: Callable[[str], None] = log_revalidation,
    path: str = INVOICE_LIST_PATH,
) -> Callable:
    """
    Factory that returns an invoice-change handler.

    Args:
        revalidate: Callable that invalidates a rendered path
        path: View to invalidate

    Returns:
        Handler callable for any InvoiceEvent
    """

    def handler(event: InvoiceEvent):
        revalidate(path)

    return handler


def subscribe_revalidation(event_bus, revalidate: Callable[[str], None] = log_revalidation,
                           path: str = INVOICE_LIST_PATH) -> None:
    """Revalidate the invoice list after every invoice change event."""
    event_bus.subscribe(InvoiceEvent, handle_invoice_changed(revalidate, path))
