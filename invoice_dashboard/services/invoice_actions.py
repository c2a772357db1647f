"""Create, update and delete handlers for invoices.

Each handler validates the submitted form, writes through
:mod:`invoice_dashboard.services.invoice_store` and invalidates the cached
invoices listing before control returns to the browser.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from flask import current_app, redirect, url_for

from invoice_dashboard import INVOICES_ROUTE
from invoice_dashboard.errors import InvoiceNotFoundError, ValidationError
from invoice_dashboard.route_cache import invalidate
from invoice_dashboard.services import invoice_store
from invoice_dashboard.services.customer_store import customer_exists
from invoice_dashboard.utils.activity import log_activity
from invoice_dashboard.validation import CREATE, UPDATE, validate_invoice


def today_iso() -> str:
    """Return today's UTC date as ``YYYY-MM-DD``."""

    return datetime.now(timezone.utc).date().isoformat()


def _validated(form_data: Mapping[str, Any], variant: str):
    result = validate_invoice(form_data, variant)
    if not result.ok:
        current_app.logger.info(
            "Rejected invoice %s: %s", variant, ", ".join(sorted(result.errors))
        )
        raise ValidationError(result.errors)
    if not customer_exists(result.data.customer_id):
        current_app.logger.info(
            "Rejected invoice %s: unknown customer %s", variant, result.data.customer_id
        )
        raise ValidationError({"customer_id": ["Please select a customer."]})
    return result.data


def create_invoice(form_data: Mapping[str, Any]):
    """Store a new invoice and redirect to the listing.

    Raises :class:`ValidationError` without touching storage when the form is
    invalid.
    """

    data = _validated(form_data, CREATE)
    invoice_id = invoice_store.insert_invoice(
        customer_id=data.customer_id,
        amount=data.amount_in_cents,
        status=data.status,
        date=today_iso(),
    )
    current_app.logger.info("Created invoice %s", invoice_id)
    log_activity(f"Created invoice {invoice_id}")

    invalidate(INVOICES_ROUTE)
    return redirect(url_for("invoices.view_invoices"))


def update_invoice(invoice_id: str, form_data: Mapping[str, Any]):
    """Overwrite customer, amount and status of an invoice and redirect.

    ``id`` and ``date`` are never changed.  Raises
    :class:`InvoiceNotFoundError` when no row has ``invoice_id``.
    """

    data = _validated(form_data, UPDATE)
    updated = invoice_store.update_invoice(
        invoice_id,
        customer_id=data.customer_id,
        amount=data.amount_in_cents,
        status=data.status,
    )
    if not updated:
        raise InvoiceNotFoundError(invoice_id)
    current_app.logger.info("Updated invoice %s", invoice_id)
    log_activity(f"Updated invoice {invoice_id}")

    invalidate(INVOICES_ROUTE)
    return redirect(url_for("invoices.view_invoices"))


def delete_invoice(invoice_id: str) -> bool:
    """Delete an invoice if it exists.

    Deleting an unknown id is not an error.  Returns ``True`` when a row was
    removed.
    """

    deleted = invoice_store.delete_invoice(invoice_id)
    if deleted:
        current_app.logger.info("Deleted invoice %s", invoice_id)
        log_activity(f"Deleted invoice {invoice_id}")
    else:
        current_app.logger.debug("Invoice %s already absent", invoice_id)

    invalidate(INVOICES_ROUTE)
    return bool(deleted)
