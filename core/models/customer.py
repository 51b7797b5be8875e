"""Customer domain models. Customers are read-only here."""

from pydantic import BaseModel


class CustomerField(BaseModel):
    """Customer option for the invoice form's customer picker."""

    id: str
    name: str


class CustomerTableRow(BaseModel):
    """
    Customer with invoice aggregates for the customers table.

    Totals are formatted currency strings.
    """

    id: str
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: str
    total_paid: str
