"""Validation of submitted invoice fields.

Forms arrive as flat mappings of strings.  :func:`validate_invoice` binds them
to :class:`InvoiceSchema`, a plain WTForms form without CSRF, and returns a
:class:`ValidationResult` instead of raising so callers decide how to react.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from werkzeug.datastructures import MultiDict
from wtforms import DecimalField, Form, StringField
from wtforms.validators import (
    AnyOf,
    DataRequired,
    InputRequired,
    NumberRange,
    StopValidation,
)

from invoice_dashboard.models import INVOICE_STATUSES
from invoice_dashboard.utils.numeric import to_cents

CREATE = "create"
UPDATE = "update"

# Server-assigned fields dropped from the payload before binding.
_OMITTED_FIELDS = {
    CREATE: ("id", "date"),
    UPDATE: ("id", "date"),
}
_FIELD_ALIASES = {"customerId": "customer_id"}

# Largest amount whose cent value still fits a signed 64-bit INTEGER column.
MAX_AMOUNT = Decimal(2**63 - 1) / 100


def _strip(value):
    return value.strip() if isinstance(value, str) else value


def _finite_amount(form, field):
    # Coercion failures already carry their own message.
    if field.data is None:
        raise StopValidation()
    if not field.data.is_finite():
        raise StopValidation("Please enter a valid amount.")


class InvoiceSchema(Form):
    customer_id = StringField(
        "Customer",
        validators=[DataRequired(message="Please select a customer.")],
        filters=[_strip],
    )
    amount = DecimalField(
        "Amount",
        places=2,
        validators=[
            InputRequired(message="Please enter an amount."),
            _finite_amount,
            NumberRange(
                min=-MAX_AMOUNT,
                max=MAX_AMOUNT,
                message="Amount is too large.",
            ),
        ],
    )
    status = StringField(
        "Status",
        validators=[
            InputRequired(message="Please select an invoice status."),
            AnyOf(
                INVOICE_STATUSES,
                message="Status must be one of: pending, paid.",
            ),
        ],
        filters=[_strip],
    )


@dataclass(frozen=True)
class InvoiceInput:
    customer_id: str
    amount: Decimal
    status: str

    @property
    def amount_in_cents(self) -> int:
        return to_cents(self.amount)


@dataclass(frozen=True)
class ValidationResult:
    data: Optional[InvoiceInput] = None
    errors: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.data is not None and not self.errors


def _prepare_formdata(form_data: Mapping[str, Any], variant: str) -> MultiDict:
    omitted = _OMITTED_FIELDS[variant]
    if isinstance(form_data, MultiDict):
        items = form_data.items(multi=True)
    else:
        items = form_data.items()

    prepared: MultiDict = MultiDict()
    for key, value in items:
        key = _FIELD_ALIASES.get(key, key)
        if key in omitted or value is None:
            continue
        prepared.add(key, str(value))
    return prepared


def validate_invoice(
    form_data: Mapping[str, Any], variant: str = CREATE
) -> ValidationResult:
    """Validate ``form_data`` for the ``create`` or ``update`` variant.

    Both variants accept ``customer_id`` (or ``customerId``), ``amount`` and
    ``status``; any ``id`` or ``date`` supplied by the caller is ignored.
    """

    if variant not in _OMITTED_FIELDS:
        raise ValueError(f"Unknown validation variant: {variant!r}")

    schema = InvoiceSchema(formdata=_prepare_formdata(form_data, variant))
    if not schema.validate():
        return ValidationResult(errors=dict(schema.errors))

    return ValidationResult(
        data=InvoiceInput(
            customer_id=schema.customer_id.data,
            amount=schema.amount.data,
            status=schema.status.data,
        )
    )
