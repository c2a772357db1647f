"""Utility functions for the invoice dashboard."""

from .activity import log_activity
from .numeric import from_cents, to_cents

__all__ = [
    "log_activity",
    "from_cents",
    "to_cents",
]
