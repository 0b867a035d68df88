# dashboard/api/invoices.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Form, HTTPException
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy import select
from sqlalchemy.engine import Engine

from dashboard.actions.invoices import create_invoice, delete_invoice, update_invoice
from dashboard.actions.results import ActionResult, Success, ValidationFailure
from dashboard.cache import ViewCache, get_view_cache
from dashboard.db.engine import get_engine
from dashboard.db.schema import invoices
from dashboard.models.invoices import InvoiceOut, State

INVOICES_PATH = "/dashboard/invoices"

router = APIRouter(prefix=INVOICES_PATH, tags=["invoices"])


def _invoice_form(
    customer_id: Optional[str] = Form(None, alias="customerId"),
    amount: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
) -> dict:
    return {"customerId": customer_id, "amount": amount, "status": status}


def _respond(result: ActionResult, cache: ViewCache):
    """
    Successful mutations drop the cached listing and send the client
    back to it; failures render the form state.
    """
    if isinstance(result, Success):
        cache.revalidate_path(INVOICES_PATH)
        return RedirectResponse(INVOICES_PATH, status_code=303)

    status_code = 422 if isinstance(result, ValidationFailure) else 500
    return JSONResponse(
        status_code=status_code,
        content=result.to_state().model_dump(),
    )


def _fetch_invoices(engine: Engine) -> List[dict]:
    with engine.connect() as conn:
        stmt = (
            select(
                invoices.c.id,
                invoices.c.customer_id,
                invoices.c.amount,
                invoices.c.status,
                invoices.c.date,
            )
            .order_by(invoices.c.date.desc(), invoices.c.id)
        )
        rows = conn.execute(stmt).mappings().all()

    return [InvoiceOut(**row).model_dump(mode="json") for row in rows]


@router.get("", response_model=List[InvoiceOut])
def list_invoices(
    engine: Engine = Depends(get_engine),
    cache: ViewCache = Depends(get_view_cache),
):
    """
    Return all invoices, newest first. Served from the view cache until
    a mutation revalidates it.
    """
    return cache.get_or_render(INVOICES_PATH, lambda: _fetch_invoices(engine))


@router.get("/{invoice_id}", response_model=InvoiceOut)
def get_invoice(invoice_id: str, engine: Engine = Depends(get_engine)) -> InvoiceOut:
    with engine.connect() as conn:
        stmt = (
            select(
                invoices.c.id,
                invoices.c.customer_id,
                invoices.c.amount,
                invoices.c.status,
                invoices.c.date,
            )
            .where(invoices.c.id == invoice_id)
        )
        row = conn.execute(stmt).mappings().first()

    if row is None:
        raise HTTPException(status_code=404, detail="Invoice not found")

    return InvoiceOut(**row)


@router.post("", responses={422: {"model": State}, 500: {"model": State}})
def submit_create_invoice(
    form_data: dict = Depends(_invoice_form),
    engine: Engine = Depends(get_engine),
    cache: ViewCache = Depends(get_view_cache),
):
    return _respond(create_invoice(engine, form_data), cache)


@router.post("/{invoice_id}/edit", responses={422: {"model": State}, 500: {"model": State}})
def submit_update_invoice(
    invoice_id: str,
    form_data: dict = Depends(_invoice_form),
    engine: Engine = Depends(get_engine),
    cache: ViewCache = Depends(get_view_cache),
):
    return _respond(update_invoice(engine, invoice_id, form_data), cache)


@router.post("/{invoice_id}/delete", responses={500: {"model": State}})
def submit_delete_invoice(
    invoice_id: str,
    engine: Engine = Depends(get_engine),
    cache: ViewCache = Depends(get_view_cache),
):
    return _respond(delete_invoice(engine, invoice_id), cache)
