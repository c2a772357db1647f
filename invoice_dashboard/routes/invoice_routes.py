from flask import (
    Blueprint,
    abort,
    current_app,
    flash,
    jsonify,
    redirect,
    render_template,
    request,
    url_for,
)
from flask_login import login_required

from invoice_dashboard import INVOICES_ROUTE
from invoice_dashboard.errors import InvoiceNotFoundError, ValidationError
from invoice_dashboard.forms import DeleteForm, InvoiceForm
from invoice_dashboard.route_cache import get_route_cache
from invoice_dashboard.services import invoice_actions
from invoice_dashboard.services.customer_store import fetch_customer_choices
from invoice_dashboard.services.invoice_store import (
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoice_pages,
)
from invoice_dashboard.utils.pagination import (
    build_pagination_args,
    generate_pagination,
    get_page,
)

invoices = Blueprint("invoices", __name__)


def _load_listing(query: str, page: int, per_page: int) -> dict:
    return {
        "invoices": fetch_filtered_invoices(query, page, per_page),
        "total_pages": fetch_invoice_pages(query, per_page),
    }


def _wants_json() -> bool:
    best = request.accept_mimetypes.best_match(["application/json", "text/html"])
    return request.is_json or best == "application/json"


@invoices.route(INVOICES_ROUTE)
@login_required
def view_invoices():
    """List invoices matching the ``query`` parameter, one page at a time."""
    query = request.args.get("query", "").strip()
    page = get_page()
    per_page = current_app.config["INVOICES_PER_PAGE"]

    listing = get_route_cache().get_or_load(
        INVOICES_ROUTE,
        lambda: _load_listing(query, page, per_page),
        variant=f"{per_page}:{page}:{query}",
    )
    return render_template(
        "invoices/view_invoices.html",
        invoices=listing["invoices"],
        query=query,
        page=page,
        total_pages=listing["total_pages"],
        pages=generate_pagination(page, listing["total_pages"]),
        pagination_args=build_pagination_args(),
        delete_form=DeleteForm(),
    )


@invoices.route(f"{INVOICES_ROUTE}/create", methods=["GET", "POST"])
@login_required
def create_invoice():
    """Create an invoice from the submitted form."""
    form = InvoiceForm()
    form.customer_id.choices = fetch_customer_choices()
    errors = {}
    status_code = 200

    if request.method == "POST":
        try:
            return invoice_actions.create_invoice(request.form)
        except ValidationError as exc:
            errors = exc.errors
            status_code = 400
            flash("Missing Fields. Failed to Create Invoice.", "danger")

    return (
        render_template(
            "invoices/invoice_form.html",
            form=form,
            errors=errors,
            title="Create Invoice",
            action=url_for("invoices.create_invoice"),
        ),
        status_code,
    )


@invoices.route(f"{INVOICES_ROUTE}/<invoice_id>/edit", methods=["GET", "POST"])
@login_required
def edit_invoice(invoice_id):
    """Edit the customer, amount and status of an invoice."""
    form = InvoiceForm()
    form.customer_id.choices = fetch_customer_choices()
    form.submit.label.text = "Edit Invoice"
    errors = {}
    status_code = 200

    if request.method == "POST":
        try:
            return invoice_actions.update_invoice(invoice_id, request.form)
        except InvoiceNotFoundError:
            abort(404)
        except ValidationError as exc:
            errors = exc.errors
            status_code = 400
            flash("Missing Fields. Failed to Update Invoice.", "danger")
    else:
        invoice = fetch_invoice_by_id(invoice_id)
        if invoice is None:
            abort(404)
        form.customer_id.data = invoice.customer_id
        form.amount.data = invoice.amount
        form.status.data = invoice.status

    return (
        render_template(
            "invoices/invoice_form.html",
            form=form,
            errors=errors,
            title="Edit Invoice",
            action=url_for("invoices.edit_invoice", invoice_id=invoice_id),
        ),
        status_code,
    )


@invoices.route(f"{INVOICES_ROUTE}/<invoice_id>/delete", methods=["POST"])
@login_required
def delete_invoice(invoice_id):
    """Delete an invoice; deleting an unknown id succeeds silently."""
    form = DeleteForm()
    if not form.validate_on_submit():
        abort(400)
    invoice_actions.delete_invoice(invoice_id)
    if _wants_json():
        return jsonify({"deleted": invoice_id})
    flash("Invoice deleted.", "success")
    return redirect(url_for("invoices.view_invoices"))
