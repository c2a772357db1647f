"""Persistence of invoice rows.

Writes are single parameterized statements executed on the Flask-SQLAlchemy
session and committed immediately; nothing here catches database errors.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import String, cast, delete, func, insert, or_, select, update

from invoice_dashboard import db
from invoice_dashboard.models import Customer, Invoice
from invoice_dashboard.utils.numeric import from_cents
from invoice_dashboard.utils.pagination import total_pages


@dataclass(frozen=True)
class InvoiceRow:
    """An invoice joined with the customer fields shown in the table."""

    id: str
    amount: int
    date: str
    status: str
    customer_id: str
    name: str
    email: str
    image_url: str


@dataclass(frozen=True)
class InvoiceFormData:
    """An invoice loaded for the edit form, amount in whole units."""

    id: str
    customer_id: str
    amount: Decimal
    status: str
    date: str


def insert_invoice(customer_id: str, amount: int, status: str, date: str) -> str:
    """Insert a new invoice and return its generated id."""

    invoice_id = str(uuid.uuid4())
    db.session.execute(
        insert(Invoice).values(
            id=invoice_id,
            customer_id=customer_id,
            amount=amount,
            status=status,
            date=date,
        )
    )
    db.session.commit()
    return invoice_id


def update_invoice(invoice_id: str, customer_id: str, amount: int, status: str) -> int:
    """Overwrite the editable columns of ``invoice_id``.

    Returns the number of rows affected.
    """

    result = db.session.execute(
        update(Invoice)
        .where(Invoice.id == invoice_id)
        .values(customer_id=customer_id, amount=amount, status=status)
    )
    db.session.commit()
    return result.rowcount


def delete_invoice(invoice_id: str) -> int:
    result = db.session.execute(delete(Invoice).where(Invoice.id == invoice_id))
    db.session.commit()
    return result.rowcount


def fetch_invoice_by_id(invoice_id: str) -> Optional[InvoiceFormData]:
    row = db.session.execute(
        select(
            Invoice.id,
            Invoice.customer_id,
            Invoice.amount,
            Invoice.status,
            Invoice.date,
        ).where(Invoice.id == invoice_id)
    ).first()
    if row is None:
        return None
    return InvoiceFormData(
        id=row.id,
        customer_id=row.customer_id,
        amount=from_cents(row.amount),
        status=row.status,
        date=row.date,
    )


def _search_filter(query: str):
    pattern = f"%{query}%"
    return or_(
        Customer.name.ilike(pattern),
        Customer.email.ilike(pattern),
        cast(Invoice.amount, String).ilike(pattern),
        Invoice.date.ilike(pattern),
        Invoice.status.ilike(pattern),
    )


def _filtered_invoices(query: str):
    stmt = select(
        Invoice.id,
        Invoice.amount,
        Invoice.date,
        Invoice.status,
        Invoice.customer_id,
        Customer.name,
        Customer.email,
        Customer.image_url,
    ).join(Customer, Invoice.customer_id == Customer.id)
    if query:
        stmt = stmt.where(_search_filter(query))
    return stmt


def fetch_filtered_invoices(query: str, page: int, per_page: int) -> List[InvoiceRow]:
    """Return one page of invoices matching ``query``, newest first."""

    offset = (max(page, 1) - 1) * per_page
    stmt = (
        _filtered_invoices(query)
        .order_by(Invoice.date.desc(), Invoice.id)
        .limit(per_page)
        .offset(offset)
    )
    return [InvoiceRow(**row._mapping) for row in db.session.execute(stmt)]


def fetch_invoice_pages(query: str, per_page: int) -> int:
    """Return how many pages :func:`fetch_filtered_invoices` can serve."""

    count = db.session.execute(
        select(func.count()).select_from(_filtered_invoices(query).subquery())
    ).scalar_one()
    return total_pages(count, per_page)
