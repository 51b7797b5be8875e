"""Invoice domain models.

All amounts are stored in cents (integer) to avoid floating point issues.
$10.00 = 1000 cents. Dollars appear only in form input and the edit form.

One canonical field set (InvoiceFields). InvoiceRecord adds the
server-assigned id and date; InvoiceCreate and InvoiceUpdate carry only
what a client may submit.
"""

from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class InvoiceStatus(str, Enum):
    """Invoice payment status."""

    PENDING = "pending"
    PAID = "paid"


class InvoiceFields(BaseModel):
    """Client-editable invoice fields, as submitted by the invoice form."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    customer_id: UUID = Field(..., alias="customerId")
    amount: float = Field(..., allow_inf_nan=False)  # dollars, coerced from form text
    status: InvoiceStatus


class InvoiceRecord(InvoiceFields):
    """Full invoice shape including server-assigned fields."""

    id: UUID
    date: str


class InvoiceCreate(InvoiceFields):
    """Data accepted when creating an invoice. id and date are assigned server-side."""


class InvoiceUpdate(InvoiceFields):
    """Data accepted when updating an invoice. id and date never change."""


class Invoice(BaseModel):
    """Invoice row as stored."""

    id: UUID
    customer_id: UUID
    amount: int  # cents
    status: InvoiceStatus
    date: str

    model_config = {"from_attributes": True}


class InvoiceForm(BaseModel):
    """Invoice as loaded into the edit form. Amount is in dollars."""

    id: UUID
    customer_id: UUID
    amount: float
    status: InvoiceStatus


class InvoiceTableRow(BaseModel):
    """One row of the paginated invoice table."""

    id: UUID
    customer_id: UUID
    name: str
    email: str
    image_url: str
    date: str
    amount: int  # cents
    status: InvoiceStatus


class LatestInvoice(BaseModel):
    """Entry of the latest-invoices panel. Amount is pre-formatted."""

    id: str
    name: str
    email: str
    image_url: str
    amount: str
