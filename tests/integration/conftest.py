"""
Fixtures for tests that run the SQL against a real PostgreSQL database.

Point DASHBOARD_TEST_DATABASE_URL (environment or .env) at a scratch
database. db/schema.sql is applied once per session and every table is
truncated before each test. Without the variable these tests are skipped.
"""

import os
from pathlib import Path
from uuid import UUID

import pytest
from dotenv import load_dotenv

ROOT = Path(__file__).parent.parent.parent

load_dotenv(ROOT / ".env")

SCHEMA_PATH = ROOT / "db" / "schema.sql"


@pytest.fixture(scope="session")
def pg():
    """Session-scoped PostgresClient with the dashboard schema applied."""
    from clients.postgres_client import PostgresClient

    database_url = os.getenv("DASHBOARD_TEST_DATABASE_URL")
    if not database_url:
        pytest.skip("DASHBOARD_TEST_DATABASE_URL is not set")

    client = PostgresClient(
        database_url,
        password=os.getenv("DASHBOARD_TEST_DATABASE_PASSWORD"),
        min_connections=1,
        max_connections=5,
    )
    client.execute(SCHEMA_PATH.read_text())
    yield client
    client.close()


@pytest.fixture
def db(pg):
    """Real client with empty tables. Overrides the mocked store."""
    pg.execute("TRUNCATE invoices, customers, revenue CASCADE")
    return pg


@pytest.fixture
def add_customer(db):
    """Insert a customer row, return its id."""

    def add(name: str, email: str, image_url: str | None = None) -> UUID:
        slug = name.lower().replace(" ", "-")
        row = db.execute_returning(
            """
            INSERT INTO customers (name, email, image_url)
            VALUES (%s, %s, %s)
            RETURNING id::text AS id
            """,
            (name, email, image_url or f"/customers/{slug}.png")
        )[0]
        return UUID(row["id"])

    return add


@pytest.fixture
def add_invoice(db):
    """Insert an invoice row with an explicit date, return its id."""

    def add(customer_id: UUID, amount: int, status: str, date: str) -> UUID:
        row = db.execute_returning(
            """
            INSERT INTO invoices (customer_id, amount, status, date)
            VALUES (%s, %s, %s, %s)
            RETURNING id::text AS id
            """,
            (customer_id, amount, status, date)
        )[0]
        return UUID(row["id"])

    return add


@pytest.fixture
def ledger(add_customer, add_invoice):
    """
    Two customers with invoices, one without.

    Lee Robinson: 8 paid invoices, 2026-10-01 .. 2026-10-08, 1000 .. 1007 cents
    Amy Burns:    3 pending invoices in September, 500 / 600 / 77777 cents
    Zed Nobody:   no invoices
    """
    lee = add_customer("Lee Robinson", "lee@robinson.com")
    amy = add_customer("Amy Burns", "amy@burns.com")
    zed = add_customer("Zed Nobody", "zed@nobody.com")

    for i in range(8):
        add_invoice(lee, 1000 + i, "paid", f"2026-10-{i + 1:02d}")

    for day, amount in ((1, 500), (2, 600), (3, 77777)):
        add_invoice(amy, amount, "pending", f"2026-09-{day:02d}")

    return {"lee": lee, "amy": amy, "zed": zed}
