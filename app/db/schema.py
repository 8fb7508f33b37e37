# app/db/schema.py

from sqlalchemy import (
    MetaData, Table, Column, Integer, Text,
    Float, Boolean, Date, ForeignKey, CheckConstraint, text
)

metadata = MetaData()

companies = Table(
    "companies",
    metadata,
    Column("code", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("description", Text),
)

invoices = Table(
    "invoices",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "comp_code",
        Text,
        ForeignKey("companies.code", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("amt", Float, nullable=False),
    Column("paid", Boolean, nullable=False, server_default=text("false")),
    Column("add_date", Date, nullable=False, server_default=text("CURRENT_DATE")),
    Column("paid_date", Date, nullable=True),
    CheckConstraint("amt > 0", name="ck_invoices_amt_positive"),
)
