"""Domain value objects for the directory account bridge.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from typing import Any

from pydantic import Field, field_validator

from dirauth.domain.value.common import ValueObject

# Normalized directory attributes keyed by attribute name (email, locked, ...)
AttributeBag = dict[str, Any]

# Password hashes starting with this prefix can never match a password
UNUSABLE_PASSWORD_PREFIX = "!"

# Placeholder stored on accounts that may only authenticate via the directory
DIRECTORY_PASSWORD_PLACEHOLDER = f"{UNUSABLE_PASSWORD_PREFIX}directory"


class DirectoryIdentity(ValueObject):
    """Identity authenticated by the external directory.

    Only the username is guaranteed stable across calls. The distinguished
    name and raw attributes reflect the directory state at load time and
    may be absent on handles built from a local account.
    """

    username: str
    dn: str | None = None
    attributes: dict[str, list[Any]] = Field(default_factory=dict)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username is not blank."""
        if not v or not v.strip():
            raise ValueError("Username must not be empty")
        if len(v) > 255:
            raise ValueError("Username must be at most 255 characters")
        return v
