from invoice_dashboard.models import Customer, Invoice, Revenue
from seed_data import CUSTOMERS, INVOICES, REVENUE, seed_placeholder_data


def test_seed_placeholder_data_is_idempotent(app):
    seed_placeholder_data()
    seed_placeholder_data()

    assert Customer.query.count() == len(CUSTOMERS)
    assert Invoice.query.count() == len(INVOICES)
    assert Revenue.query.count() == len(REVENUE)
    assert {invoice.status for invoice in Invoice.query} <= {"pending", "paid"}
