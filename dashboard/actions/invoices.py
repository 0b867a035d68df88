# dashboard/actions/invoices.py

import logging
from datetime import date, datetime, timezone
from typing import Mapping, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from dashboard.actions.results import (
    ActionResult,
    PersistenceFailure,
    Success,
    ValidationFailure,
)
from dashboard.db.schema import invoices
from dashboard.models.invoices import State, validate_invoice_form

logger = logging.getLogger(__name__)


def create_invoice(
    engine: Engine,
    form_data: Mapping[str, Optional[str]],
    prev_state: Optional[State] = None,
    as_of: Optional[date] = None,
) -> ActionResult:
    """
    Validate a submitted form and insert one invoice row.

    The amount is stored in cents and the date is today's UTC date
    unless `as_of` is given.
    """
    form, errors = validate_invoice_form(form_data)
    if form is None:
        logger.debug("Create invoice rejected: %s", errors)
        return ValidationFailure(
            errors=errors,
            message="Missing Fields. Failed to Create Invoice.",
        )

    if as_of is None:
        as_of = datetime.now(timezone.utc).date()

    stmt = invoices.insert().values(
        customer_id=form.customer_id,
        amount=form.amount_in_cents,
        status=form.status,
        date=as_of,
    )

    try:
        with engine.begin() as conn:
            result = conn.execute(stmt)
    except SQLAlchemyError:
        logger.exception("Failed to create invoice for customer %s", form.customer_id)
        return PersistenceFailure(message="Database Error: Failed to Create Invoice.")

    invoice_id = result.inserted_primary_key[0]
    logger.info(f"Created invoice {invoice_id} ({form.amount_in_cents} cents, {form.status})")
    return Success(invoice_id=invoice_id)


def update_invoice(
    engine: Engine,
    invoice_id: str,
    form_data: Mapping[str, Optional[str]],
    prev_state: Optional[State] = None,
) -> ActionResult:
    """
    Overwrite customer, amount and status of an invoice. `id` and `date`
    are left untouched.
    """
    form, errors = validate_invoice_form(form_data)
    if form is None:
        logger.debug("Update of invoice %s rejected: %s", invoice_id, errors)
        return ValidationFailure(
            errors=errors,
            message="Missing Fields. Failed to Update Invoice.",
        )

    stmt = (
        invoices.update()
        .where(invoices.c.id == invoice_id)
        .values(
            customer_id=form.customer_id,
            amount=form.amount_in_cents,
            status=form.status,
        )
    )

    try:
        with engine.begin() as conn:
            result = conn.execute(stmt)
    except SQLAlchemyError:
        logger.exception("Failed to update invoice %s", invoice_id)
        return PersistenceFailure(message="Database Error: Failed to Update Invoice.")

    if result.rowcount == 0:
        logger.debug("Update matched no invoice with id %s", invoice_id)
    else:
        logger.info(f"Updated invoice {invoice_id}")
    return Success(invoice_id=invoice_id)


def delete_invoice(engine: Engine, invoice_id: str) -> ActionResult:
    # Unknown ids delete nothing and still succeed
    stmt = invoices.delete().where(invoices.c.id == invoice_id)

    try:
        with engine.begin() as conn:
            result = conn.execute(stmt)
    except SQLAlchemyError:
        logger.exception("Failed to delete invoice %s", invoice_id)
        return PersistenceFailure(message="Database Error: Failed to Delete Invoice.")

    logger.info(f"Deleted invoice {invoice_id} ({result.rowcount} row(s))")
    return Success(invoice_id=invoice_id)
