# dashboard/db/schema.py

from uuid import uuid4

from sqlalchemy import (
    MetaData, Table, Column, Integer, String, Date, CheckConstraint, Text
)

metadata = MetaData()


def _new_id() -> str:
    return str(uuid4())


invoices = Table(
    "invoices",
    metadata,
    Column("id", String(36), primary_key=True, default=_new_id),
    Column("customer_id", String(255), nullable=False),
    Column("amount", Integer, nullable=False),  # cents
    Column("status", String(16), nullable=False),
    Column("date", Date, nullable=False),
    CheckConstraint("amount >= 0", name="ck_invoices_amount_nonneg"),
    CheckConstraint("status IN ('pending', 'paid')", name="ck_invoices_status"),
)

users = Table(
    "users",
    metadata,
    Column("id", String(36), primary_key=True, default=_new_id),
    Column("name", String(255), nullable=False),
    Column("email", Text, nullable=False, unique=True),
    Column("password", Text, nullable=False),
)
