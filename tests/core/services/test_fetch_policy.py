"""Tests for the data_fetch storage-error contract."""

import logging

import pytest
from pydantic import BaseModel

from core.exceptions import DataFetchError, StorageError
from core.services.fetch_policy import data_fetch


class _Row(BaseModel):
    value: int


class TestRaisingContract:

    def test_success_passes_through(self):
        @data_fetch("Failed to fetch things.")
        def fetch():
            return [1, 2]

        assert fetch() == [1, 2]

    def test_storage_error_becomes_data_fetch_error(self):
        @data_fetch("Failed to fetch things.")
        def fetch():
            raise StorageError("gone")

        with pytest.raises(DataFetchError, match="Failed to fetch things.") as exc_info:
            fetch()

        assert isinstance(exc_info.value.__cause__, StorageError)

    def test_value_error_propagates_unchanged(self):
        @data_fetch("Failed to fetch things.")
        def fetch():
            raise ValueError("Page must be 1 or greater")

        with pytest.raises(ValueError, match="Page"):
            fetch()

    def test_bad_row_shape_becomes_data_fetch_error(self):
        @data_fetch("Failed to fetch things.")
        def fetch():
            return _Row.model_validate({"value": "not a number"})

        with pytest.raises(DataFetchError):
            fetch()

    def test_unexpected_error_logged_and_wrapped(self, caplog):
        @data_fetch("Failed to fetch things.")
        def fetch():
            raise KeyError("amount")

        with caplog.at_level(logging.ERROR, logger="core.services.fetch_policy"):
            with pytest.raises(DataFetchError):
                fetch()

        assert "fetch failed unexpectedly" in caplog.text


class TestFallbackContract:

    def test_storage_error_returns_fallback(self, caplog):
        @data_fetch("Failed to fetch things.", fallback=[])
        def fetch():
            raise StorageError("gone")

        with caplog.at_level(logging.ERROR, logger="core.services.fetch_policy"):
            assert fetch() == []

        assert "gone" in caplog.text

    def test_unexpected_error_still_raises(self):
        @data_fetch("Failed to fetch things.", fallback=[])
        def fetch():
            raise RuntimeError("bug")

        with pytest.raises(DataFetchError):
            fetch()

    def test_contract_is_introspectable(self):
        @data_fetch("soft", fallback=[])
        def soft():
            return []

        @data_fetch("hard")
        def hard():
            return []

        assert soft.soft_fails is True
        assert hard.soft_fails is False
        assert hard.fetch_message == "hard"


class TestDeclaredContracts:
    """Each read handler's storage-error behaviour is fixed by its declaration."""

    @pytest.mark.parametrize("handler, soft", [
        ("core.services.dashboard_service.DashboardService.fetch_revenue", True),
        ("core.services.dashboard_service.DashboardService.fetch_latest_invoices", True),
        ("core.services.dashboard_service.DashboardService.fetch_card_data", False),
        ("core.services.invoice_service.InvoiceService.fetch_filtered_invoices", True),
        ("core.services.invoice_service.InvoiceService.fetch_invoices_pages", False),
        ("core.services.invoice_service.InvoiceService.fetch_invoice_by_id", False),
        ("core.services.customer_service.CustomerService.fetch_customers", False),
        ("core.services.customer_service.CustomerService.fetch_filtered_customers", False),
    ])
    def test_handler_contract(self, handler, soft):
        import importlib

        module_name, class_name, method_name = handler.rsplit(".", 2)
        cls = getattr(importlib.import_module(module_name), class_name)

        assert getattr(cls, method_name).soft_fails is soft
