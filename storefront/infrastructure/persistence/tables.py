"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import Boolean, Column, DateTime, Index, MetaData, String, Table

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# CUSTOMERS TABLE
# ============================================================================
customers_table = Table(
    "customers",
    metadata,
    Column("id", String, primary_key=True),  # UUID as string
    Column("email_address", String(255), nullable=True),
    Column("username", String(255), nullable=True, unique=True),
    Column("first_name", String(255), nullable=True),
    Column("last_name", String(255), nullable=True),
    Column("is_registered", Boolean, nullable=False, default=False),
    Column("password_hash", String(255), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=True),
)

Index("ix_customers_email_address", customers_table.c.email_address)
