"""Audit trail for invoice mutations and sign-ins."""

from __future__ import annotations

import logging
from typing import Optional

from flask import has_request_context
from flask_login import current_user

from invoice_dashboard import db
from invoice_dashboard.models import ActivityLog

logger = logging.getLogger(__name__)


def _acting_user_id() -> Optional[int]:
    if has_request_context() and current_user.is_authenticated:
        return current_user.id
    return None


def log_activity(activity: str, user_id: Optional[int] = None) -> ActivityLog:
    """Record ``activity`` for ``user_id``, defaulting to the signed-in user."""

    if user_id is None:
        user_id = _acting_user_id()
    entry = ActivityLog(user_id=user_id, activity=activity)
    db.session.add(entry)
    db.session.commit()
    logger.debug("Activity by user %s: %s", user_id, activity)
    return entry
