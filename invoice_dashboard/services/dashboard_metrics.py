"""Helper functions for collecting dashboard metrics."""

from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy import case, func, select

from invoice_dashboard import db
from invoice_dashboard.models import Customer, Invoice, Revenue

MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def _coalesce_scalar(stmt) -> int:
    """Return an integer scalar result or ``0`` when ``None``."""

    result = db.session.execute(stmt).scalar()
    return int(result or 0)


def card_data() -> Dict[str, int]:
    """Return the figures shown on the four summary cards.

    Money figures are in cents.
    """

    totals = db.session.execute(
        select(
            func.sum(case((Invoice.status == "paid", Invoice.amount), else_=0)),
            func.sum(case((Invoice.status == "pending", Invoice.amount), else_=0)),
        )
    ).one()

    return {
        "total_paid": int(totals[0] or 0),
        "total_pending": int(totals[1] or 0),
        "invoice_count": _coalesce_scalar(select(func.count(Invoice.id))),
        "customer_count": _coalesce_scalar(select(func.count(Customer.id))),
    }


def revenue_series() -> List[Dict[str, Any]]:
    """Return monthly revenue in calendar order."""

    rows = Revenue.query.all()
    order = {month: index for index, month in enumerate(MONTHS)}
    rows.sort(key=lambda row: order.get(row.month, len(MONTHS)))
    return [{"month": row.month, "revenue": row.revenue} for row in rows]


def revenue_chart(series: List[Dict[str, Any]], steps: int = 4) -> Dict[str, Any]:
    """Return y-axis labels and bar heights for the revenue chart.

    The axis tops out at the highest month rounded up to the next thousand.
    """

    highest = max((item["revenue"] for item in series), default=0)
    top = -(-highest // 1000) * 1000
    step = top // steps if top else 0
    labels = [f"${(top - step * i) // 1000}K" for i in range(steps + 1)] if top else []
    bars = [
        {
            "month": item["month"],
            "revenue": item["revenue"],
            "percent": round(item["revenue"] * 100 / top) if top else 0,
        }
        for item in series
    ]
    return {"top": top, "labels": labels, "bars": bars}


def latest_invoices(limit: int = 5) -> List[Dict[str, Any]]:
    """Return the most recent invoices with their customer details."""

    rows = db.session.execute(
        select(
            Invoice.id,
            Invoice.amount,
            Customer.name,
            Customer.email,
            Customer.image_url,
        )
        .join(Customer, Invoice.customer_id == Customer.id)
        .order_by(Invoice.date.desc(), Invoice.id)
        .limit(limit)
    )
    return [dict(row._mapping) for row in rows]


def dashboard_context() -> Dict[str, Any]:
    """Aggregate metrics for the dashboard overview."""

    series = revenue_series()
    return {
        "cards": card_data(),
        "revenue": revenue_chart(series),
        "latest_invoices": latest_invoices(),
    }
