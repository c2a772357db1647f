from flask import Blueprint, render_template, request
from flask_login import login_required

from invoice_dashboard.services.customer_store import fetch_filtered_customers

customers = Blueprint("customers", __name__)


@customers.route("/dashboard/customers")
@login_required
def view_customers():
    """List customers with their invoice totals."""
    query = request.args.get("query", "").strip()
    return render_template(
        "customers/view_customers.html",
        customers=fetch_filtered_customers(query),
        query=query,
    )
