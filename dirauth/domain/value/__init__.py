"""Domain value objects for the directory account bridge."""

from dirauth.domain.value.identifiers import AccountId, ProfileId
from dirauth.domain.value.types import (
    DIRECTORY_PASSWORD_PLACEHOLDER,
    UNUSABLE_PASSWORD_PREFIX,
    AttributeBag,
    DirectoryIdentity,
)

__all__ = [
    # Identifiers
    "AccountId",
    "ProfileId",
    # Types
    "AttributeBag",
    "DirectoryIdentity",
    "DIRECTORY_PASSWORD_PLACEHOLDER",
    "UNUSABLE_PASSWORD_PREFIX",
]
