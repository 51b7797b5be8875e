"""Read models for the dashboard overview."""

from pydantic import BaseModel


class Revenue(BaseModel):
    """Revenue for one month. Revenue is in whole dollars as seeded."""

    month: str
    revenue: int


class CardData(BaseModel):
    """Summary cards: counts plus formatted paid/pending totals."""

    number_of_customers: int
    number_of_invoices: int
    total_paid_invoices: str
    total_pending_invoices: str
