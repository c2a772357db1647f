"""Utility helpers shared across the test-suite."""

from __future__ import annotations

import re
from typing import Any

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASS = "adminpass"

_CSRF_RE = re.compile(r'name=["\']csrf_token["\'][^>]*value=["\']([^"\']+)["\']', re.IGNORECASE)
_INVOICE_ROW_RE = re.compile(r'<tr id="invoice-([0-9a-f-]+)"')


def extract_csrf_token(response: Any, *, required: bool = True) -> str:
    """Return the first CSRF token found in ``response`` HTML content."""

    html: str = response.data.decode("utf-8")
    match = _CSRF_RE.search(html)
    if not match:
        if required:
            raise AssertionError("CSRF token not found in response")
        return ""
    return match.group(1)


def invoice_row_ids(response: Any) -> list[str]:
    """Return the invoice ids rendered as table rows in ``response``."""

    return _INVOICE_ROW_RE.findall(response.data.decode("utf-8"))


def login(client, email: str = ADMIN_EMAIL, password: str = ADMIN_PASS):
    """Helper to login a user in tests, respecting CSRF protection."""

    login_page = client.get("/auth/login")
    token = extract_csrf_token(login_page, required=False)
    form_data = {"email": email, "password": password}
    if token:
        form_data["csrf_token"] = token
    return client.post(
        "/auth/login",
        data=form_data,
        follow_redirects=True,
    )
