"""
Dashboard service for the overview page: revenue chart, latest invoices
and the summary cards.

The card summary fans out three independent reads on worker threads and
fails as a whole if any one of them fails. The reads are not wrapped in a
transaction, so the counts are a best-effort snapshot.
"""

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait

from clients.postgres_client import PostgresClient
from core.models import CardData, LatestInvoice, Revenue
from core.services.fetch_policy import data_fetch
from utils.currency import format_currency

logger = logging.getLogger(__name__)


class DashboardService:
    """Service for dashboard overview reads."""

    def __init__(self, postgres: PostgresClient):
        self.postgres = postgres

    @data_fetch("Failed to fetch revenue data.", fallback=[])
    def fetch_revenue(self) -> list[Revenue]:
        """Monthly revenue rows. Empty list if storage fails."""
        rows = self.postgres.execute("SELECT month, revenue FROM revenue")
        return [Revenue.model_validate(row) for row in rows]

    @data_fetch("Failed to fetch the latest invoices.", fallback=[])
    def fetch_latest_invoices(self) -> list[LatestInvoice]:
        """
        The most recent invoices with formatted amounts.

        Returns:
            Rows of the recent_invoices view, newest first.
            Empty list if storage fails.
        """
        rows = self.postgres.execute(
            """
            SELECT id, name, email, image_url, amount
            FROM recent_invoices
            """
        )

        return [
            LatestInvoice(
                id=str(row["id"]),
                name=row["name"],
                email=row["email"],
                image_url=row["image_url"],
                amount=format_currency(row["amount"]),
            )
            for row in rows
        ]

    @data_fetch("Failed to fetch card data.")
    def fetch_card_data(self) -> CardData:
        """
        Summary card values from three concurrent reads.

        Returns:
            Customer and invoice counts, paid and pending totals as currency

        Raises:
            DataFetchError: If any of the three reads fails
        """
        with ThreadPoolExecutor(max_workers=3) as executor:
            invoice_count = executor.submit(
                self.postgres.execute_scalar, "SELECT COUNT(*) FROM invoices"
            )
            customer_count = executor.submit(
                self.postgres.execute_scalar, "SELECT COUNT(*) FROM customers"
            )
            status_totals = executor.submit(
                self.postgres.execute_single, "SELECT paid, pending FROM invoice_status"
            )

            futures = [invoice_count, customer_count, status_totals]
            done, _ = wait(futures, return_when=FIRST_EXCEPTION)
            for future in futures:
                if future in done and future.exception() is not None:
                    for pending in futures:
                        pending.cancel()
                    raise future.exception()

        totals = status_totals.result() or {}

        return CardData(
            number_of_customers=int(customer_count.result() or 0),
            number_of_invoices=int(invoice_count.result() or 0),
            total_paid_invoices=format_currency(totals.get("paid") or 0),
            total_pending_invoices=format_currency(totals.get("pending") or 0),
        )
