"""Jinja filters for money and dates shown on the dashboard."""

from __future__ import annotations

from datetime import date, datetime

from invoice_dashboard.utils.numeric import from_cents


def format_currency(cents) -> str:
    """Render an amount stored in cents as ``$1,234.56``."""

    value = from_cents(cents)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_date_to_local(value) -> str:
    """Render an ISO date string (or date) as ``Dec 6, 2022``."""

    if not value:
        return ""
    if isinstance(value, str):
        try:
            value = date.fromisoformat(value)
        except ValueError:
            return value
    if isinstance(value, datetime):
        value = value.date()
    # %-d is not portable, so the day is formatted by hand.
    return f"{value:%b} {value.day}, {value.year}"
