"""Exceptions raised by the invoice mutation handlers."""

from __future__ import annotations

from typing import Dict, List, Mapping


class ValidationError(ValueError):
    """Raised when submitted invoice fields fail validation.

    ``errors`` maps each failing field name to its messages so the form can
    display them next to the inputs.
    """

    def __init__(self, errors: Mapping[str, List[str]]):
        self.errors: Dict[str, List[str]] = {
            field: list(messages) for field, messages in errors.items()
        }
        fields = ", ".join(sorted(self.errors)) or "form"
        super().__init__(f"Invalid invoice fields: {fields}")


class InvoiceNotFoundError(LookupError):
    """Raised when an update targets an invoice id that does not exist."""

    def __init__(self, invoice_id: str):
        self.invoice_id = invoice_id
        super().__init__(f"Invoice {invoice_id} not found")
