"""
Customer service for the customer picker and the customers table.

Customers are read-only; invoices reference them by id.
"""

import logging

from clients.postgres_client import PostgresClient
from core.models import CustomerField, CustomerTableRow
from core.services.fetch_policy import data_fetch
from utils.currency import format_currency

logger = logging.getLogger(__name__)


class CustomerService:
    """Service for customer reads."""

    def __init__(self, postgres: PostgresClient):
        self.postgres = postgres

    @data_fetch("Failed to fetch all customers.")
    def fetch_customers(self) -> list[CustomerField]:
        """
        All customers as id/name pairs.

        Returns:
            Customers ordered by name ascending
        """
        rows = self.postgres.execute(
            """
            SELECT id::text AS id, name
            FROM customers
            ORDER BY name ASC
            """
        )

        return [CustomerField.model_validate(row) for row in rows]

    @data_fetch("Failed to fetch customer table.")
    def fetch_filtered_customers(self, query: str) -> list[CustomerTableRow]:
        """
        Customers matching a query, with invoice count and totals.

        Uses ILIKE for case-insensitive partial matching on name or email.
        Customers without invoices are included with zero totals.

        Args:
            query: Search string

        Returns:
            Matching customers ordered by name, totals formatted as currency
        """
        pattern = f"%{query}%"

        rows = self.postgres.execute(
            """
            SELECT
                customers.id::text AS id,
                customers.name,
                customers.email,
                customers.image_url,
                COUNT(invoices.id) AS total_invoices,
                COALESCE(SUM(CASE WHEN invoices.status = 'pending' THEN invoices.amount ELSE 0 END), 0) AS total_pending,
                COALESCE(SUM(CASE WHEN invoices.status = 'paid' THEN invoices.amount ELSE 0 END), 0) AS total_paid
            FROM customers
            LEFT JOIN invoices ON customers.id = invoices.customer_id
            WHERE customers.name ILIKE %s
               OR customers.email ILIKE %s
            GROUP BY customers.id, customers.name, customers.email, customers.image_url
            ORDER BY customers.name ASC
            """,
            (pattern, pattern)
        )

        return [
            CustomerTableRow(
                id=row["id"],
                name=row["name"],
                email=row["email"],
                image_url=row["image_url"],
                total_invoices=row["total_invoices"],
                total_pending=format_currency(row["total_pending"]),
                total_paid=format_currency(row["total_paid"]),
            )
            for row in rows
        ]
