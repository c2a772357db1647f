"""Create users, customers, invoices, revenue and activity log tables."""

import sqlalchemy as sa
from alembic import op


def _has_table(table_name: str, bind) -> bool:
    inspector = sa.inspect(bind)
    return inspector.has_table(table_name)


# revision identifiers, used by Alembic.
revision = "202410010001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()

    if not _has_table("users", bind):
        op.create_table(
            "users",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("email", sa.String(length=120), nullable=False, unique=True),
            sa.Column("password", sa.String(length=255), nullable=False),
            sa.Column("active", sa.Boolean(), nullable=False),
        )

    if not _has_table("customers", bind):
        op.create_table(
            "customers",
            sa.Column("id", sa.String(length=36), primary_key=True),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("email", sa.String(length=255), nullable=False, unique=True),
            sa.Column("image_url", sa.String(length=255), nullable=False),
        )

    if not _has_table("invoices", bind):
        op.create_table(
            "invoices",
            sa.Column("id", sa.String(length=36), primary_key=True),
            sa.Column("customer_id", sa.String(length=36), nullable=False),
            sa.Column("amount", sa.Integer(), nullable=False),
            sa.Column("status", sa.String(length=16), nullable=False),
            sa.Column("date", sa.String(length=10), nullable=False),
            sa.ForeignKeyConstraint(
                ["customer_id"], ["customers.id"], name="fk_invoices_customer_id"
            ),
            sa.CheckConstraint(
                "status IN ('pending', 'paid')", name="ck_invoices_status"
            ),
        )
        op.create_index("ix_invoices_customer_id", "invoices", ["customer_id"])
        op.create_index("ix_invoices_date", "invoices", ["date"])

    if not _has_table("revenue", bind):
        op.create_table(
            "revenue",
            sa.Column("month", sa.String(length=4), primary_key=True),
            sa.Column("revenue", sa.Integer(), nullable=False),
        )

    if not _has_table("activity_log", bind):
        op.create_table(
            "activity_log",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("user_id", sa.Integer(), nullable=True),
            sa.Column("activity", sa.String(length=255), nullable=False),
            sa.Column("timestamp", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(
                ["user_id"], ["users.id"], name="fk_activity_log_user_id"
            ),
        )


def downgrade():
    bind = op.get_bind()
    for table_name in ("activity_log", "revenue", "invoices", "customers", "users"):
        if _has_table(table_name, bind):
            op.drop_table(table_name)
