from __future__ import annotations

import os

import pytest

from invoice_dashboard import create_admin_user, create_app, db
from invoice_dashboard.models import Customer, Invoice
from tests.utils import ADMIN_EMAIL, ADMIN_PASS


LEE_ID = "3958dc9e-742f-4377-85e9-fec4b6a6442a"
DELBA_ID = "3958dc9e-712f-4377-85e9-fec4b6a6442a"


@pytest.fixture
def app(tmp_path, monkeypatch):
    os.environ.setdefault("SECRET_KEY", "testsecret")
    monkeypatch.setenv("ADMIN_EMAIL", ADMIN_EMAIL)
    monkeypatch.setenv("ADMIN_PASS", ADMIN_PASS)
    monkeypatch.setenv("RATELIMIT_ENABLED", "false")
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("DATABASE_PATH", raising=False)

    # Each test gets its own database inside the temp directory
    cwd = os.getcwd()
    os.chdir(tmp_path)
    app, _ = create_app(["--demo"])
    os.chdir(cwd)

    app.config.update({"TESTING": True, "WTF_CSRF_ENABLED": False})

    with app.app_context():
        db.create_all()
        create_admin_user()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def customers(app):
    with app.app_context():
        db.session.add_all(
            [
                Customer(
                    id=LEE_ID,
                    name="Lee Robinson",
                    email="lee@robinson.com",
                    image_url="/customers/lee-robinson.png",
                ),
                Customer(
                    id=DELBA_ID,
                    name="Delba de Oliveira",
                    email="delba@oliveira.com",
                    image_url="/customers/delba-de-oliveira.png",
                ),
            ]
        )
        db.session.commit()
    return {"lee": LEE_ID, "delba": DELBA_ID}


@pytest.fixture
def add_invoice(app):
    """Insert an invoice row directly, bypassing the handlers."""

    def _add(customer_id, amount=1000, status="pending", date="2023-01-01"):
        invoice = Invoice(
            customer_id=customer_id, amount=amount, status=status, date=date
        )
        db.session.add(invoice)
        db.session.commit()
        return invoice.id

    return _add


@pytest.fixture
def invalidations(app, monkeypatch):
    """Record every route invalidation instead of touching the cache."""

    calls: list[str] = []
    monkeypatch.setattr(app.extensions["route_cache"], "invalidate", calls.append)
    return calls
