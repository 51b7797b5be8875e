"""Shared test fixtures for the invoice dashboard test suite."""

import pytest
from unittest.mock import Mock
from uuid import UUID

from clients.postgres_client import PostgresClient
from core.event_bus import EventBus
from core.handlers.revalidation_handler import subscribe_revalidation
from utils.request_context import clear_request_id


# =============================================================================
# TEST DATA CONSTANTS
# =============================================================================

INVOICE_ID = UUID("3958dc9e-712f-4377-85e9-fec4b6a6442a")
CUSTOMER_ID = UUID("d6e15727-9fe1-4961-8c5b-ea44a9bd81aa")


# =============================================================================
# CONTEXT FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def reset_request_context():
    """Ensure clean request context before and after each test."""
    clear_request_id()
    yield
    clear_request_id()


@pytest.fixture
def invoice_id() -> UUID:
    return INVOICE_ID


@pytest.fixture
def customer_id() -> UUID:
    return CUSTOMER_ID


# =============================================================================
# STORAGE & EVENT FIXTURES
# =============================================================================


@pytest.fixture
def db():
    """PostgresClient stand-in. Configure return values per test."""
    mock = Mock(spec=PostgresClient)
    mock.execute.return_value = []
    mock.execute_single.return_value = None
    mock.execute_scalar.return_value = 0
    mock.execute_returning.return_value = []
    return mock


@pytest.fixture
def revalidated():
    """Paths revalidated during the test, in order."""
    return []


@pytest.fixture
def event_bus(revalidated):
    """EventBus wired to record revalidations instead of logging them."""
    bus = EventBus()
    subscribe_revalidation(bus, revalidated.append)
    return bus


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def invoice_service(db, event_bus):
    from core.services.invoice_service import InvoiceService
    return InvoiceService(db, event_bus)


@pytest.fixture
def customer_service(db):
    from core.services.customer_service import CustomerService
    return CustomerService(db)


@pytest.fixture
def dashboard_service(db):
    from core.services.dashboard_service import DashboardService
    return DashboardService(db)


# =============================================================================
# ROW BUILDERS
# =============================================================================


@pytest.fixture
def invoice_row():
    """Builder for rows returned by an invoice mutation's RETURNING clause."""

    def build(**overrides) -> dict:
        row = {
            "id": str(INVOICE_ID),
            "customer_id": str(CUSTOMER_ID),
            "amount": 4250,
            "status": "pending",
            "date": "2026-10-19",
        }
        row.update(overrides)
        return row

    return build


@pytest.fixture
def invoice_table_row():
    """Builder for rows of the invoices_with_cast view. Higher index = older."""

    def build(index: int = 0, **overrides) -> dict:
        row = {
            "id": f"00000000-0000-0000-0000-{index:012d}",
            "customer_id": str(CUSTOMER_ID),
            "customer_name": "Lee Robinson",
            "customer_email": "lee@robinson.com",
            "image_url": "/customers/lee-robinson.png",
            "date_text": f"2026-10-{(19 - index):02d}",
            "amount": 1000 + index,
            "status": "paid",
        }
        row.update(overrides)
        return row

    return build
