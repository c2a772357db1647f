from flask_wtf import FlaskForm
from wtforms import (
    DecimalField,
    PasswordField,
    RadioField,
    SelectField,
    StringField,
    SubmitField,
)
from wtforms.validators import DataRequired, Email

from invoice_dashboard.models import INVOICE_STATUSES


class LoginForm(FlaskForm):
    email = StringField("Email", validators=[DataRequired(), Email()])
    password = PasswordField("Password", validators=[DataRequired()])


class InvoiceForm(FlaskForm):
    """Renders the invoice fields.

    Submissions are checked by :func:`invoice_dashboard.validation.validate_invoice`
    inside the mutation handlers, so this form only carries the inputs and the
    CSRF token.
    """

    customer_id = SelectField("Choose customer", validate_choice=False)
    amount = DecimalField("Choose an amount", places=2)
    status = RadioField(
        "Set the invoice status",
        choices=[(status, status.title()) for status in INVOICE_STATUSES],
        validate_choice=False,
    )
    submit = SubmitField("Create Invoice")


class DeleteForm(FlaskForm):
    """Simple form used for CSRF protection on delete actions."""

    submit = SubmitField("Delete")
