"""Core domain models."""

from core.models.invoice import (
    Invoice, InvoiceStatus, InvoiceFields, InvoiceRecord,
    InvoiceCreate, InvoiceUpdate, InvoiceForm, InvoiceTableRow, LatestInvoice,
)
from core.models.customer import CustomerField, CustomerTableRow
from core.models.dashboard import Revenue, CardData

__all__ = [
    # Invoice
    "Invoice", "InvoiceStatus", "InvoiceFields", "InvoiceRecord",
    "InvoiceCreate", "InvoiceUpdate", "InvoiceForm", "InvoiceTableRow", "LatestInvoice",
    # Customer
    "CustomerField", "CustomerTableRow",
    # Dashboard
    "Revenue", "CardData",
]
