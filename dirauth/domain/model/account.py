"""Account aggregate root.

Accounts are the local authenticatable records. Directory-backed accounts
are created on first login and kept in sync with the directory afterwards.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from dirauth.domain.model.common import DomainModel
from dirauth.domain.value import AccountId, ProfileId, UNUSABLE_PASSWORD_PREFIX


class Account(DomainModel):
    """Local account tied 1:1 to a username.

    Uniqueness of the username is enforced by the store.

    ``locked`` records the directory lock state when the account was
    created and is not synchronized afterwards. A later lock in the
    directory shows up as ``enabled=False``, so check ``enabled`` to decide
    whether the account may log in.
    """

    id: AccountId
    profile_id: ProfileId
    username: str
    username_canonical: str
    email: str
    email_canonical: str
    locked: bool = False
    enabled: bool = True
    password_hash: Optional[str] = None
    last_login: Optional[datetime] = None
    verified_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    credentials_expire_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def has_usable_password(self) -> bool:
        """Whether a local password login could ever succeed."""
        return bool(self.password_hash) and not self.password_hash.startswith(
            UNUSABLE_PASSWORD_PREFIX
        )
