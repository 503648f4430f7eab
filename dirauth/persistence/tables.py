"""SQLAlchemy table definitions for dirauth.

These table definitions are used with SQLAlchemy Core. They match the
schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# PROFILES TABLE (one per distinct email)
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("email", String(255), nullable=False),
    Column("first_name", String(255), nullable=True),
    Column("last_name", String(255), nullable=True),
    Column("locale_code", String(32), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("email", name="uq_profiles_email"),
)

# ============================================================================
# ACCOUNTS TABLE (one per username)
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "profile_id",
        UUID,
        ForeignKey("profiles.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column("username", String(255), nullable=False),
    Column("username_canonical", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("email_canonical", String(255), nullable=False),
    Column("locked", Boolean, nullable=False, server_default="false"),
    Column("enabled", Boolean, nullable=False, server_default="true"),
    Column("password_hash", String(255), nullable=True),  # "!" prefix = unusable
    Column("last_login", TIMESTAMP(timezone=True), nullable=True),
    Column("verified_at", TIMESTAMP(timezone=True), nullable=True),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=True),
    Column("credentials_expire_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("username", name="uq_accounts_username"),
)

Index("idx_accounts_profile_id", accounts_table.c.profile_id)
Index("idx_accounts_username_canonical", accounts_table.c.username_canonical)
