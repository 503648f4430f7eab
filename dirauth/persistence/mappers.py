"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from dirauth.domain.model import Account, Profile
from dirauth.domain.value import AccountId, ProfileId


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_profile(row: Dict[str, Any]) -> Profile:
    """Convert database row to Profile domain model.

    Args:
        row: Database row as dict

    Returns:
        Profile domain model
    """
    return Profile(
        id=ProfileId(_uuid(row["id"])),
        email=row["email"],
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        locale_code=row.get("locale_code"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def profile_to_dict(profile: Profile) -> Dict[str, Any]:
    """Convert Profile domain model to database dict."""
    return profile.model_dump()


def row_to_account(row: Dict[str, Any]) -> Account:
    """Convert database row to Account domain model.

    Args:
        row: Database row as dict

    Returns:
        Account domain model
    """
    return Account(
        id=AccountId(_uuid(row["id"])),
        profile_id=ProfileId(_uuid(row["profile_id"])),
        username=row["username"],
        username_canonical=row["username_canonical"],
        email=row["email"],
        email_canonical=row["email_canonical"],
        locked=row["locked"],
        enabled=row["enabled"],
        password_hash=row.get("password_hash"),
        last_login=row.get("last_login"),
        verified_at=row.get("verified_at"),
        expires_at=row.get("expires_at"),
        credentials_expire_at=row.get("credentials_expire_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def account_to_dict(account: Account) -> Dict[str, Any]:
    """Convert Account domain model to database dict.

    Args:
        account: Account domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return account.model_dump()
