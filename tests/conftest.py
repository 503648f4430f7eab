"""Test configuration and fixtures."""

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

import logfire
import pytest

from dirauth.adapter.ldap import LdapAttributeFetcher, MockDirectoryIdentitySource
from dirauth.config import default_attribute_map
from dirauth.domain.model import Account, Profile
from dirauth.domain.service import AttributeSynchronizer, IdentityReconciler
from dirauth.domain.value import AccountId, ProfileId
from dirauth.persistence.repository.inmemory import (
    InMemoryAccountRepository,
    InMemoryProfileRepository,
)

# Keep spans local during tests
logfire.configure(send_to_logfire=False, console=False)


def make_profile(email: str = "someone@example.com", **overrides: Any) -> Profile:
    """Build a profile with sensible defaults."""
    return Profile(id=ProfileId(uuid4()), email=email, **overrides)


def make_account(
    username: str = "someone", profile: Profile | None = None, **overrides: Any
) -> Account:
    """Build an account with sensible defaults."""
    profile = profile or make_profile()
    fields: dict[str, Any] = {
        "id": AccountId(uuid4()),
        "profile_id": profile.id,
        "username": username,
        "username_canonical": username.lower(),
        "email": profile.email,
        "email_canonical": profile.email.lower(),
        "password_hash": "$argon2id$v=19$m=65536,t=3,p=4$c2FsdA$aGFzaA",
        "created_at": datetime(2020, 1, 1, tzinfo=timezone.utc),
        "updated_at": datetime(2020, 1, 1, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return Account(**fields)


class ReconcilerParts:
    """Reconciler wired to in-memory collaborators, with handles to each."""

    def __init__(
        self,
        directory: MockDirectoryIdentitySource | None = None,
        accounts: InMemoryAccountRepository | None = None,
        profiles: InMemoryProfileRepository | None = None,
        attribute_map: dict[str, str] | None = None,
    ) -> None:
        self.directory = directory or MockDirectoryIdentitySource()
        self.accounts = accounts or InMemoryAccountRepository()
        self.profiles = profiles or InMemoryProfileRepository()
        self.fetcher = LdapAttributeFetcher(
            attribute_map=attribute_map or default_attribute_map(),
            directory_source=self.directory,
        )
        self.reconciler = IdentityReconciler(
            directory_source=self.directory,
            attribute_fetcher=self.fetcher,
            account_repository=self.accounts,
            profile_repository=self.profiles,
            synchronizer=AttributeSynchronizer(),
        )


@pytest.fixture
def parts() -> ReconcilerParts:
    """Reconciler over the seeded in-memory directory and empty stores."""
    return ReconcilerParts()
