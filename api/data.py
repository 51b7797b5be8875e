"""GET /api/data — unified read endpoint."""

from uuid import UUID

from fastapi import APIRouter, Query, Request

from api.base import success_response


VALID_TYPES = {"revenue", "latest_invoices", "cards", "invoices", "invoice_pages", "customers"}


def create_data_router(services: dict) -> APIRouter:
    router = APIRouter()

    dashboard_svc = services["dashboard"]
    invoice_svc = services["invoice"]
    customer_svc = services["customer"]

    @router.get("/data")
    async def get_data(
        request: Request,
        type: str | None = Query(None),
        id: str | None = Query(None),
        query: str | None = Query(None),
        page: int = Query(1, ge=1),
    ):
        if type is None:
            raise ValueError("'type' query parameter is required")

        if type not in VALID_TYPES:
            raise ValueError(f"Unknown type '{type}'. Valid types: {', '.join(sorted(VALID_TYPES))}")

        if type == "revenue":
            return _dump_list(dashboard_svc.fetch_revenue())

        if type == "latest_invoices":
            return _dump_list(dashboard_svc.fetch_latest_invoices())

        if type == "cards":
            return success_response(
                dashboard_svc.fetch_card_data().model_dump(mode="json")
            ).model_dump(mode="json")

        if type == "invoices":
            return _handle_invoices(invoice_svc, id, query, page)

        if type == "invoice_pages":
            total = invoice_svc.fetch_invoices_pages(query or "")
            return success_response({"total_pages": total}).model_dump(mode="json")

        if type == "customers":
            return _handle_customers(customer_svc, query)

    return router


def _dump_list(items):
    return success_response(
        [item.model_dump(mode="json") for item in items]
    ).model_dump(mode="json")


def _handle_invoices(invoice_svc, id, query, page):
    if id:
        invoice = invoice_svc.fetch_invoice_by_id(UUID(id))
        if invoice is None:
            raise ValueError(f"Invoice {id} not found")
        return success_response(invoice.model_dump(mode="json")).model_dump(mode="json")

    return _dump_list(invoice_svc.fetch_filtered_invoices(query or "", page))


def _handle_customers(customer_svc, query):
    if query is not None:
        return _dump_list(customer_svc.fetch_filtered_customers(query))

    return _dump_list(customer_svc.fetch_customers())
