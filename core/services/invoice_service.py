"""
Invoice service: form-driven mutations and the invoice table queries.

Mutations validate first and touch storage exactly once. A committed
mutation publishes an event; a failed one raises WriteError and publishes
nothing. The invoice list and its page count share one search predicate so
the pager always agrees with the table.
"""

import logging
import math
from typing import Any, Mapping
from uuid import UUID

from clients.postgres_client import PostgresClient
from core.event_bus import EventBus
from core.events import InvoiceCreated, InvoiceUpdated, InvoiceDeleted
from core.exceptions import StorageError, WriteError
from core.models import (
    Invoice, InvoiceCreate, InvoiceUpdate, InvoiceForm, InvoiceTableRow,
)
from core.services.fetch_policy import data_fetch
from utils.currency import to_cents
from utils.timezone import today_iso

logger = logging.getLogger(__name__)

ITEMS_PER_PAGE = 6

# Columns every invoice mutation returns, cast so they validate as Invoice
_RETURNING = "id::text AS id, customer_id::text AS customer_id, amount, status, date::text AS date"

# Case-insensitive substring match over the invoices_with_cast view
_SEARCH_PREDICATE = """
    customer_name ILIKE %(pattern)s
    OR customer_email ILIKE %(pattern)s
    OR amount_text ILIKE %(pattern)s
    OR date_text ILIKE %(pattern)s
    OR status ILIKE %(pattern)s
"""


def page_offset(page: int) -> int:
    """
    Row offset of a 1-indexed page.

    Raises:
        ValueError: If page is less than 1
    """
    if page < 1:
        raise ValueError(f"Page must be 1 or greater, got {page}")
    return (page - 1) * ITEMS_PER_PAGE


def total_pages(count: int) -> int:
    """Number of pages needed to show count rows."""
    return math.ceil(count / ITEMS_PER_PAGE)


class InvoiceService:
    """Service for invoice operations."""

    def __init__(self, postgres: PostgresClient, event_bus: EventBus):
        self.postgres = postgres
        self.event_bus = event_bus

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create_invoice(self, form: Mapping[str, Any]) -> Invoice:
        """
        Create an invoice from submitted form data.

        Args:
            form: String-keyed form payload (customerId, amount, status)

        Returns:
            Stored invoice (amount in cents, date = today UTC)

        Raises:
            pydantic.ValidationError: If the form is malformed. Nothing is written.
            WriteError: If the insert fails
        """
        data = InvoiceCreate.model_validate(dict(form))
        amount_cents = to_cents(data.amount)
        date = today_iso()

        try:
            row = self.postgres.execute_returning(
                f"""
                INSERT INTO invoices (customer_id, amount, status, date)
                VALUES (%s, %s, %s, %s)
                RETURNING {_RETURNING}
                """,
                (data.customer_id, amount_cents, data.status.value, date)
            )[0]
        except StorageError as e:
            logger.exception(f"Insert into invoices failed: {e}")
            raise WriteError("Failed to create invoice.") from e

        invoice = Invoice.model_validate(row)
        logger.info(f"Created invoice {invoice.id} for customer {invoice.customer_id}")

        self.event_bus.publish(InvoiceCreated.create(invoice=invoice))

        return invoice

    def update_invoice(self, invoice_id: UUID, form: Mapping[str, Any]) -> Invoice:
        """
        Update customer, amount and status of an invoice.

        The id and the original date are never changed.

        Args:
            invoice_id: Invoice identifier
            form: String-keyed form payload (customerId, amount, status)

        Returns:
            Updated invoice

        Raises:
            pydantic.ValidationError: If the form is malformed. Nothing is written.
            WriteError: If the update fails
            ValueError: If no invoice has this id
        """
        data = InvoiceUpdate.model_validate(dict(form))
        amount_cents = to_cents(data.amount)

        try:
            rows = self.postgres.execute_returning(
                f"""
                UPDATE invoices
                SET customer_id = %s, amount = %s, status = %s
                WHERE id = %s
                RETURNING {_RETURNING}
                """,
                (data.customer_id, amount_cents, data.status.value, invoice_id)
            )
        except StorageError as e:
            logger.exception(f"Update of invoice {invoice_id} failed: {e}")
            raise WriteError("Failed to update invoice.") from e

        if not rows:
            raise ValueError(f"Invoice {invoice_id} not found")

        invoice = Invoice.model_validate(rows[0])

        self.event_bus.publish(InvoiceUpdated.create(invoice=invoice))

        return invoice

    def delete_invoice(self, invoice_id: UUID) -> bool:
        """
        Delete an invoice.

        Args:
            invoice_id: Invoice identifier

        Returns:
            True if deleted, False if not found

        Raises:
            WriteError: If the delete fails
        """
        try:
            rows = self.postgres.execute_returning(
                "DELETE FROM invoices WHERE id = %s RETURNING id::text AS id",
                (invoice_id,)
            )
        except StorageError as e:
            logger.exception(f"Delete of invoice {invoice_id} failed: {e}")
            raise WriteError("Failed to delete invoice.") from e

        if not rows:
            return False

        self.event_bus.publish(InvoiceDeleted.create(invoice_id=invoice_id))

        return True

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @data_fetch("Failed to fetch invoices.", fallback=[])
    def fetch_filtered_invoices(self, query: str, page: int = 1) -> list[InvoiceTableRow]:
        """
        One page of invoices matching a free-text query, newest first.

        Args:
            query: Substring matched against customer name/email, amount,
                date and status (case-insensitive)
            page: 1-indexed page number

        Returns:
            At most ITEMS_PER_PAGE rows. Empty list if storage fails.
        """
        offset = page_offset(page)

        rows = self.postgres.execute(
            f"""
            SELECT id, customer_id, customer_name, customer_email, image_url,
                   date_text, amount, status
            FROM invoices_with_cast
            WHERE {_SEARCH_PREDICATE}
            ORDER BY date DESC, id DESC
            LIMIT %(limit)s OFFSET %(offset)s
            """,
            {"pattern": f"%{query}%", "limit": ITEMS_PER_PAGE, "offset": offset}
        )

        return [
            InvoiceTableRow(
                id=str(row["id"]),
                customer_id=str(row["customer_id"]),
                name=row.get("customer_name") or "",
                email=row.get("customer_email") or "",
                image_url=row.get("image_url") or "",
                date=row["date_text"],
                amount=row["amount"],
                status=row["status"],
            )
            for row in rows
        ]

    @data_fetch("Failed to fetch total number of invoices.")
    def fetch_invoices_pages(self, query: str) -> int:
        """
        Total pages of invoices matching a free-text query.

        Uses the same predicate as fetch_filtered_invoices.
        """
        count = self.postgres.execute_scalar(
            f"""
            SELECT COUNT(*)
            FROM invoices_with_cast
            WHERE {_SEARCH_PREDICATE}
            """,
            {"pattern": f"%{query}%"}
        )

        return total_pages(int(count or 0))

    @data_fetch("Failed to fetch invoice.")
    def fetch_invoice_by_id(self, invoice_id: UUID) -> InvoiceForm | None:
        """
        Load an invoice for the edit form.

        Returns:
            Invoice with amount converted back to dollars, None if not found
        """
        row = self.postgres.execute_single(
            """
            SELECT id::text AS id, customer_id::text AS customer_id, amount, status
            FROM invoices
            WHERE id = %s
            """,
            (invoice_id,)
        )

        if row is None:
            return None

        return InvoiceForm(
            id=row["id"],
            customer_id=row["customer_id"],
            amount=row["amount"] / 100,
            status=row["status"],
        )
