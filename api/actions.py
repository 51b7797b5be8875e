"""POST /dashboard/invoices/... — invoice form mutations."""

from uuid import UUID

from fastapi import APIRouter, Request
from starlette.responses import RedirectResponse

from api.base import success_response
from core.handlers.revalidation_handler import INVOICE_LIST_PATH


async def _form_payload(request: Request) -> dict:
    """Submitted form fields as a plain string-keyed dict."""
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


def create_actions_router(services: dict, invoices_path: str = INVOICE_LIST_PATH) -> APIRouter:
    """
    Router for the invoice form posts.

    Args:
        services: Service registry from build_services()
        invoices_path: Invoice list view; create and edit redirect here
    """
    router = APIRouter()

    handler = InvoiceHandler(services["invoice"])

    @router.post("/dashboard/invoices/create")
    async def create_invoice(request: Request):
        handler.create(await _form_payload(request))
        return RedirectResponse(invoices_path, status_code=303)

    @router.post("/dashboard/invoices/{invoice_id}/edit")
    async def update_invoice(invoice_id: str, request: Request):
        handler.update(invoice_id, await _form_payload(request))
        return RedirectResponse(invoices_path, status_code=303)

    @router.post("/dashboard/invoices/{invoice_id}/delete")
    async def delete_invoice(invoice_id: str):
        result = handler.delete(invoice_id)
        return success_response(result).model_dump(mode="json")

    return router


class InvoiceHandler:
    """Thin adapter between form routes and InvoiceService."""

    def __init__(self, service):
        self.service = service

    def create(self, form: dict):
        invoice = self.service.create_invoice(form)
        return invoice.model_dump(mode="json")

    def update(self, invoice_id: str, form: dict):
        # id comes from the path only; a form field cannot retarget the update
        form.pop("id", None)
        invoice = self.service.update_invoice(UUID(invoice_id), form)
        return invoice.model_dump(mode="json")

    def delete(self, invoice_id: str):
        deleted = self.service.delete_invoice(UUID(invoice_id))
        if not deleted:
            raise ValueError(f"Invoice {invoice_id} not found")
        return {"deleted": True}
