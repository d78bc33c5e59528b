"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
)

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ACCOUNTS TABLE
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("firstname", String(100), nullable=False),
    Column("lastname", String(100), nullable=False),
    Column("username", String(50), nullable=False, unique=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("phone", String(32), nullable=False, unique=True),
    Column("role", Integer, nullable=False),  # Role level 1-5
    Column("status", String(16), nullable=False),  # AccountStatus as string
    Column("email_verified", Boolean, nullable=False, default=False),
    Column("phone_verified", Boolean, nullable=False, default=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=True),
)

Index("ix_accounts_status", accounts_table.c.status)
Index("ix_accounts_role", accounts_table.c.role)
Index("ix_accounts_created_at", accounts_table.c.created_at)


# ============================================================================
# ACCOUNT CREDENTIALS TABLE
# ============================================================================
account_credentials_table = Table(
    "account_credentials",
    metadata,
    Column(
        "account_id",
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("salted_hash", String(255), nullable=False),
    Column("salt", String(64), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)
