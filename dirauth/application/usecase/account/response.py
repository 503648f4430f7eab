"""Account response shared by account use cases."""

from datetime import datetime

from pydantic import BaseModel, Field

from dirauth.domain.model import Account


class AccountResponse(BaseModel):
    """Public view of a local account.

    The password hash is never exposed; only whether it is usable.
    """

    account_id: str
    profile_id: str
    username: str
    username_canonical: str
    email: str
    email_canonical: str
    locked: bool = Field(
        description="Directory lock state at account creation; not synchronized"
    )
    enabled: bool = Field(description="Whether the account may currently log in")
    has_usable_password: bool
    last_login: datetime | None
    verified_at: datetime | None
    expires_at: datetime | None
    credentials_expire_at: datetime | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_account(cls, account: Account) -> "AccountResponse":
        """Build the response from an account."""
        return cls(
            account_id=str(account.id),
            profile_id=str(account.profile_id),
            username=account.username,
            username_canonical=account.username_canonical,
            email=account.email,
            email_canonical=account.email_canonical,
            locked=account.locked,
            enabled=account.enabled,
            has_usable_password=account.has_usable_password,
            last_login=account.last_login,
            verified_at=account.verified_at,
            expires_at=account.expires_at,
            credentials_expire_at=account.credentials_expire_at,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )
