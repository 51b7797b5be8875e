"""
Domain events for the invoice dashboard.

Immutable event objects published after an invoice mutation commits.
Subscribers (view revalidation) react without the service knowing who
is listening.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from utils.timezone import now_utc


@dataclass(frozen=True, kw_only=True)
class DashboardEvent:
    """Base class for all dashboard domain events."""
    event_id: str = field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = field(default_factory=now_utc)


@dataclass(frozen=True)
class InvoiceEvent(DashboardEvent):
    """Events related to invoice changes."""
    pass


@dataclass(frozen=True)
class InvoiceCreated(InvoiceEvent):
    """A new invoice row was inserted."""
    invoice: Any = None  # Invoice — using Any to avoid circular import

    @classmethod
    def create(cls, invoice: Any) -> "InvoiceCreated":
        return cls(invoice=invoice)


@dataclass(frozen=True)
class InvoiceUpdated(InvoiceEvent):
    """An invoice's customer, amount or status changed."""
    invoice: Any = None

    @classmethod
    def create(cls, invoice: Any) -> "InvoiceUpdated":
        return cls(invoice=invoice)


@dataclass(frozen=True)
class InvoiceDeleted(InvoiceEvent):
    """An invoice row was removed. Only the id survives."""
    invoice_id: UUID | None = None

    @classmethod
    def create(cls, invoice_id: UUID) -> "InvoiceDeleted":
        return cls(invoice_id=invoice_id)
