from flask import Blueprint, redirect, render_template, url_for
from flask_login import current_user, login_required

from invoice_dashboard.services.dashboard_metrics import dashboard_context

main = Blueprint("main", __name__)


@main.route("/")
def home():
    """Send visitors to the dashboard (or the login page)."""
    return redirect(url_for("main.overview"))


@main.route("/dashboard")
@login_required
def overview():
    """Render the dashboard with summary cards, revenue and latest invoices."""

    return render_template(
        "dashboard/overview.html",
        user=current_user,
        context=dashboard_context(),
    )
