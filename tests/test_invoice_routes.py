from invoice_dashboard import INVOICES_ROUTE, db
from invoice_dashboard.models import Invoice
from tests.utils import invoice_row_ids, login


def test_invoices_require_login(client):
    response = client.get(INVOICES_ROUTE)

    assert response.status_code == 302
    assert "/auth/login" in response.headers["Location"]


def test_listing_shows_customer_amount_and_date(client, customers, add_invoice):
    add_invoice(customers["lee"], amount=15795, status="paid", date="2022-12-06")
    login(client)

    response = client.get(INVOICES_ROUTE)

    assert response.status_code == 200
    html = response.data.decode()
    assert "Lee Robinson" in html
    assert "lee@robinson.com" in html
    assert "$157.95" in html
    assert "Dec 6, 2022" in html
    assert "data-search-input" in html


def test_empty_listing(client, customers):
    login(client)

    response = client.get(INVOICES_ROUTE)

    assert b"No invoices found." in response.data


def test_search_filters_rows(client, customers, add_invoice):
    lee = add_invoice(customers["lee"])
    delba = add_invoice(customers["delba"])
    login(client)

    response = client.get(f"{INVOICES_ROUTE}?query=lee&page=1")

    assert invoice_row_ids(response) == [lee]
    assert delba not in response.data.decode()
    assert b'value="lee"' in response.data


def test_pagination_splits_rows(client, customers, add_invoice):
    for day in range(1, 9):
        add_invoice(customers["lee"], date=f"2023-01-0{day}")
    login(client)

    first = client.get(INVOICES_ROUTE)
    second = client.get(f"{INVOICES_ROUTE}?page=2")

    assert len(invoice_row_ids(first)) == 6
    assert len(invoice_row_ids(second)) == 2
    assert not set(invoice_row_ids(first)) & set(invoice_row_ids(second))
    assert b'aria-label="Pagination"' in first.data


def test_listing_is_served_from_cache_until_invalidated(
    client, app, customers, add_invoice
):
    add_invoice(customers["lee"])
    login(client)
    assert len(invoice_row_ids(client.get(INVOICES_ROUTE))) == 1

    # Written behind the handlers' back, so the cached listing stays.
    add_invoice(customers["delba"])
    assert len(invoice_row_ids(client.get(INVOICES_ROUTE))) == 1

    app.extensions["route_cache"].invalidate(INVOICES_ROUTE)
    assert len(invoice_row_ids(client.get(INVOICES_ROUTE))) == 2


def test_create_form_lists_customers(client, customers):
    login(client)

    response = client.get(f"{INVOICES_ROUTE}/create")

    assert response.status_code == 200
    assert b"Delba de Oliveira" in response.data
    assert b"Create Invoice" in response.data


def test_create_invoice_redirects_and_refreshes_listing(client, customers):
    login(client)
    client.get(INVOICES_ROUTE)

    response = client.post(
        f"{INVOICES_ROUTE}/create",
        data={"customer_id": customers["lee"], "amount": "42.50", "status": "pending"},
    )

    assert response.status_code == 302
    assert response.headers["Location"].endswith(INVOICES_ROUTE)
    listing = client.get(INVOICES_ROUTE)
    assert "$42.50" in listing.data.decode()
    assert Invoice.query.one().amount == 4250


def test_create_invoice_with_missing_fields(client, customers):
    login(client)

    response = client.post(
        f"{INVOICES_ROUTE}/create",
        data={"customer_id": "", "amount": "", "status": ""},
    )

    assert response.status_code == 400
    html = response.data.decode()
    assert "Missing Fields. Failed to Create Invoice." in html
    assert "Please select a customer." in html
    assert "Please enter an amount." in html
    assert Invoice.query.count() == 0


def test_edit_form_is_prefilled(client, customers, add_invoice):
    invoice_id = add_invoice(customers["delba"], amount=20348, status="paid")
    login(client)

    response = client.get(f"{INVOICES_ROUTE}/{invoice_id}/edit")

    assert response.status_code == 200
    html = response.data.decode()
    assert f'<option value="{customers["delba"]}" selected>' in html
    assert 'value="203.48"' in html
    assert "Edit Invoice" in html


def test_edit_unknown_invoice_is_not_found(client, customers):
    login(client)

    assert client.get(f"{INVOICES_ROUTE}/missing/edit").status_code == 404
    response = client.post(
        f"{INVOICES_ROUTE}/missing/edit",
        data={"customer_id": customers["lee"], "amount": "1", "status": "paid"},
    )
    assert response.status_code == 404


def test_edit_invoice_updates_row(client, customers, add_invoice):
    invoice_id = add_invoice(customers["lee"], amount=1000, date="2023-06-09")
    login(client)
    client.get(INVOICES_ROUTE)

    response = client.post(
        f"{INVOICES_ROUTE}/{invoice_id}/edit",
        data={"customer_id": customers["lee"], "amount": "12.34", "status": "paid"},
    )

    assert response.status_code == 302
    db.session.expire_all()
    invoice = db.session.get(Invoice, invoice_id)
    assert (invoice.amount, invoice.status, invoice.date) == (1234, "paid", "2023-06-09")
    assert "$12.34" in client.get(INVOICES_ROUTE).data.decode()


def test_edit_invoice_with_invalid_amount(client, customers, add_invoice):
    invoice_id = add_invoice(customers["lee"])
    login(client)

    response = client.post(
        f"{INVOICES_ROUTE}/{invoice_id}/edit",
        data={"customer_id": customers["lee"], "amount": "abc", "status": "paid"},
    )

    assert response.status_code == 400
    assert b"Failed to Update Invoice." in response.data


def test_delete_invoice_redirects_for_forms(client, customers, add_invoice):
    invoice_id = add_invoice(customers["lee"])
    login(client)
    client.get(INVOICES_ROUTE)

    response = client.post(f"{INVOICES_ROUTE}/{invoice_id}/delete")

    assert response.status_code == 302
    assert response.headers["Location"].endswith(INVOICES_ROUTE)
    assert invoice_row_ids(client.get(INVOICES_ROUTE)) == []


def test_delete_invoice_answers_json(client, customers, add_invoice):
    invoice_id = add_invoice(customers["lee"])
    login(client)

    for _ in range(2):
        response = client.post(
            f"{INVOICES_ROUTE}/{invoice_id}/delete",
            headers={"Accept": "application/json"},
        )
        assert response.status_code == 200
        assert response.get_json() == {"deleted": invoice_id}

    assert Invoice.query.count() == 0


def test_delete_requires_post(client, customers, add_invoice):
    invoice_id = add_invoice(customers["lee"])
    login(client)

    assert client.get(f"{INVOICES_ROUTE}/{invoice_id}/delete").status_code == 405


def test_listing_and_create_share_one_route_cache(client, app, customers):
    from flask_caching import Cache

    from invoice_dashboard import cache

    assert isinstance(cache, Cache)
    assert app.extensions["route_cache"]._cache is cache
    login(client)

    assert client.get(INVOICES_ROUTE).status_code == 200
    response = client.post(
        f"{INVOICES_ROUTE}/create",
        data={"customer_id": customers["delba"], "amount": "5", "status": "paid"},
    )
    assert response.status_code == 302
    listing = client.get(INVOICES_ROUTE)
    assert listing.status_code == 200
    assert len(invoice_row_ids(listing)) == 1


def test_create_invoice_with_oversized_amount(client, customers):
    login(client)

    response = client.post(
        f"{INVOICES_ROUTE}/create",
        data={"customer_id": customers["lee"], "amount": "1e30", "status": "paid"},
    )

    assert response.status_code == 400
    assert b"Amount is too large." in response.data
    assert Invoice.query.count() == 0


def test_create_invoice_for_unknown_customer(client, customers):
    login(client)

    response = client.post(
        f"{INVOICES_ROUTE}/create",
        data={"customer_id": "no-such-customer", "amount": "5", "status": "paid"},
    )

    assert response.status_code == 400
    assert b"Please select a customer." in response.data
    assert Invoice.query.count() == 0
