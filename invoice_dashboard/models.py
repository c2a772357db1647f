import uuid
from datetime import datetime

from flask_login import UserMixin
from sqlalchemy.orm import relationship

from invoice_dashboard import db

INVOICE_STATUSES = ("pending", "paid")


def _new_id() -> str:
    return str(uuid.uuid4())


class User(UserMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False, default="")
    email = db.Column(db.String(120), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    active = db.Column(db.Boolean, default=False, nullable=False)

    @property
    def is_active(self):
        return self.active


class Customer(db.Model):
    __tablename__ = "customers"

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    image_url = db.Column(db.String(255), nullable=False, default="")

    invoices = db.relationship("Invoice", backref="customer", lazy=True)


class Invoice(db.Model):
    """A billing record; ``amount`` is stored in cents."""

    __tablename__ = "invoices"

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    customer_id = db.Column(
        db.String(36), db.ForeignKey("customers.id"), nullable=False, index=True
    )
    amount = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(16), nullable=False)
    # ISO ``YYYY-MM-DD`` string assigned once on creation.
    date = db.Column(db.String(10), nullable=False, index=True)

    __table_args__ = (
        db.CheckConstraint(
            "status IN ('pending', 'paid')", name="ck_invoices_status"
        ),
    )


class Revenue(db.Model):
    __tablename__ = "revenue"

    month = db.Column(db.String(4), primary_key=True)
    revenue = db.Column(db.Integer, nullable=False)


class ActivityLog(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    activity = db.Column(db.String(255), nullable=False)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", backref="activity_logs")
