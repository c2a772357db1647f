"""Customer queries used by the invoice forms and the customers table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from sqlalchemy import case, func, or_, select

from invoice_dashboard import db
from invoice_dashboard.models import Customer, Invoice


@dataclass(frozen=True)
class CustomerSummary:
    id: str
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: int
    total_paid: int


def fetch_customer_choices() -> List[Tuple[str, str]]:
    """Return ``(id, name)`` pairs ordered by name for select inputs."""

    rows = db.session.execute(
        select(Customer.id, Customer.name).order_by(Customer.name.asc())
    )
    return [(row.id, row.name) for row in rows]


def fetch_filtered_customers(query: str = "") -> List[CustomerSummary]:
    """Return customers matching ``query`` with their invoice totals."""

    stmt = (
        select(
            Customer.id,
            Customer.name,
            Customer.email,
            Customer.image_url,
            func.count(Invoice.id).label("total_invoices"),
            func.coalesce(
                func.sum(case((Invoice.status == "pending", Invoice.amount), else_=0)),
                0,
            ).label("total_pending"),
            func.coalesce(
                func.sum(case((Invoice.status == "paid", Invoice.amount), else_=0)),
                0,
            ).label("total_paid"),
        )
        .outerjoin(Invoice, Invoice.customer_id == Customer.id)
        .group_by(Customer.id, Customer.name, Customer.email, Customer.image_url)
        .order_by(Customer.name.asc())
    )
    if query:
        pattern = f"%{query}%"
        stmt = stmt.where(
            or_(Customer.name.ilike(pattern), Customer.email.ilike(pattern))
        )
    return [CustomerSummary(**row._mapping) for row in db.session.execute(stmt)]


def customer_exists(customer_id: str) -> bool:
    return (
        db.session.execute(
            select(Customer.id).where(Customer.id == customer_id)
        ).first()
        is not None
    )
