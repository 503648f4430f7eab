"""Unit tests for IdentityReconciler."""

from datetime import datetime, timezone
from typing import Optional

import pytest

from dirauth.adapter.ldap import MockDirectoryIdentitySource
from dirauth.config import default_attribute_map
from dirauth.domain.error import (
    IdentityNotFoundError,
    InvalidAttributeFormatError,
    MissingAttributeError,
    UnsupportedIdentityKindError,
    ValidationError,
)
from dirauth.domain.model import Account, Profile
from dirauth.domain.value import DIRECTORY_PASSWORD_PLACEHOLDER, DirectoryIdentity
from dirauth.persistence.repository.inmemory import (
    InMemoryAccountRepository,
    InMemoryProfileRepository,
)
from tests.conftest import ReconcilerParts, make_account, make_profile


class CountingDirectory(MockDirectoryIdentitySource):
    """Mock directory that records every call."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[str] = []

    async def load_by_username(self, username: str) -> DirectoryIdentity:
        self.calls.append(username)
        return await super().load_by_username(username)


class RacingAccountRepository(InMemoryAccountRepository):
    """Hides stored accounts from the next lookups, like a concurrent insert."""

    def __init__(self) -> None:
        super().__init__()
        self.hidden_lookups = 0

    async def find_by_username(self, username: str) -> Optional[Account]:
        if self.hidden_lookups > 0:
            self.hidden_lookups -= 1
            return None
        return await super().find_by_username(username)


class RacingProfileRepository(InMemoryProfileRepository):
    """Hides stored profiles from the next lookups."""

    def __init__(self) -> None:
        super().__init__()
        self.hidden_lookups = 0

    async def find_by_email(self, email: str) -> Optional[Profile]:
        if self.hidden_lookups > 0:
            self.hidden_lookups -= 1
            return None
        return await super().find_by_email(email)


class TestLoadByUsername:
    """Tests for IdentityReconciler.load_by_username()."""

    @pytest.mark.asyncio
    async def test_first_login_creates_profile_and_account(self, parts):
        """Should create one profile and one account for a new directory user."""
        # Act
        account = await parts.reconciler.load_by_username("jdoe")

        # Assert
        assert account.username == "jdoe"
        assert account.username_canonical == "jdoe"
        assert account.email == "j@x.com"
        assert account.enabled is True
        assert account.locked is False
        assert parts.accounts.count() == 1
        assert parts.profiles.count() == 1

        profile = await parts.profiles.find_by_id(account.profile_id)
        assert profile is not None
        assert profile.first_name == "Jane"
        assert profile.last_name == "Doe"
        assert profile.locale_code == "en_US"

    @pytest.mark.asyncio
    async def test_first_login_coerces_timestamps(self, parts):
        """Should store directory timestamps as aware datetimes."""
        # Act
        account = await parts.reconciler.load_by_username("jdoe")

        # Assert
        assert account.last_login == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert account.verified_at == datetime(2023, 6, 15, 12, tzinfo=timezone.utc)
        assert account.expires_at is None
        assert account.credentials_expire_at is None

    @pytest.mark.asyncio
    async def test_new_account_cannot_use_local_password(self, parts):
        """Should give directory accounts an unusable password placeholder."""
        # Act
        account = await parts.reconciler.load_by_username("jdoe")

        # Assert
        assert account.password_hash == DIRECTORY_PASSWORD_PLACEHOLDER
        assert account.has_usable_password is False

    @pytest.mark.asyncio
    async def test_unknown_username_raises_not_found(self, parts):
        """Should propagate IdentityNotFoundError and store nothing."""
        # Act & Assert
        with pytest.raises(IdentityNotFoundError) as exc_info:
            await parts.reconciler.load_by_username("nobody")

        assert exc_info.value.username == "nobody"
        assert parts.accounts.count() == 0
        assert parts.profiles.count() == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("username", ["", "   "])
    async def test_blank_username_rejected(self, parts, username):
        """Should reject blank usernames before asking the directory."""
        with pytest.raises(ValidationError):
            await parts.reconciler.load_by_username(username)

    @pytest.mark.asyncio
    async def test_second_login_returns_same_account(self, parts):
        """Should not create a second account or profile on repeat logins."""
        # Arrange
        first = await parts.reconciler.load_by_username("jdoe")

        # Act
        second = await parts.reconciler.load_by_username("jdoe")

        # Assert
        assert second.id == first.id
        assert second.profile_id == first.profile_id
        assert parts.accounts.count() == 1
        assert parts.profiles.count() == 1

    @pytest.mark.asyncio
    async def test_repeat_logins_are_idempotent(self, parts):
        """Should leave synchronized fields unchanged without directory changes."""
        # Arrange
        first = await parts.reconciler.load_by_username("jdoe")

        # Act
        second = await parts.reconciler.load_by_username("jdoe")
        third = await parts.reconciler.load_by_username("jdoe")

        # Assert
        for name in ("email", "enabled", "last_login", "verified_at", "expires_at"):
            assert getattr(second, name) == getattr(first, name)
            assert getattr(third, name) == getattr(first, name)
        assert third.updated_at == first.updated_at

    @pytest.mark.asyncio
    async def test_lock_in_directory_disables_existing_account(self, parts):
        """Should disable the existing account once the directory locks it."""
        # Arrange
        first = await parts.reconciler.load_by_username("jdoe")
        parts.directory.update_entry("jdoe", nsAccountLock="1")

        # Act
        account = await parts.reconciler.load_by_username("jdoe")

        # Assert
        assert account.id == first.id
        assert account.enabled is False
        assert parts.accounts.count() == 1
        assert parts.profiles.count() == 1

        stored = await parts.accounts.find_by_id(first.id)
        assert stored is not None
        assert stored.enabled is False

    @pytest.mark.asyncio
    async def test_locked_user_created_disabled(self, parts):
        """Should create accounts for locked users as disabled."""
        # Arrange
        parts.directory.update_entry("jdoe", nsAccountLock="TRUE")

        # Act
        account = await parts.reconciler.load_by_username("jdoe")

        # Assert
        assert account.locked is True
        assert account.enabled is False

    @pytest.mark.asyncio
    async def test_sync_keeps_local_identifiers_and_password(self, parts):
        """Should overwrite directory fields but never id or password hash."""
        # Arrange
        profile = await parts.profiles.save(make_profile("old@x.com"))
        existing = await parts.accounts.save(
            make_account("jdoe", profile=profile, enabled=False)
        )

        # Act
        account = await parts.reconciler.load_by_username("jdoe")

        # Assert
        assert account.id == existing.id
        assert account.password_hash == existing.password_hash
        assert account.profile_id == existing.profile_id
        assert account.created_at == existing.created_at
        assert account.email == "j@x.com"
        assert account.email_canonical == "j@x.com"
        assert account.enabled is True
        assert account.updated_at > existing.updated_at
        assert parts.accounts.count() == 1

    @pytest.mark.asyncio
    async def test_existing_profile_reused_by_email(self, parts):
        """Should link new accounts to the profile already holding the email."""
        # Arrange
        profile = await parts.profiles.save(make_profile("j@x.com", first_name="J"))

        # Act
        account = await parts.reconciler.load_by_username("jdoe")

        # Assert
        assert account.profile_id == profile.id
        assert parts.profiles.count() == 1

    @pytest.mark.asyncio
    async def test_email_change_keeps_existing_profile(self, parts):
        """Should not create another profile when a known user's mail changes."""
        # Arrange
        first = await parts.reconciler.load_by_username("jdoe")
        parts.directory.update_entry("jdoe", mail="new@x.com")

        # Act
        account = await parts.reconciler.load_by_username("jdoe")

        # Assert
        assert account.id == first.id
        assert account.email == "new@x.com"
        assert account.profile_id == first.profile_id
        assert parts.profiles.count() == 1
        assert await parts.profiles.find_by_email("new@x.com") is None

    @pytest.mark.asyncio
    async def test_missing_required_attribute_raises(self):
        """Should fail before persisting anything when the map lacks an attribute."""
        # Arrange
        attribute_map = default_attribute_map()
        del attribute_map["last_name"]
        parts = ReconcilerParts(attribute_map=attribute_map)

        # Act & Assert
        with pytest.raises(MissingAttributeError) as exc_info:
            await parts.reconciler.load_by_username("jdoe")

        assert exc_info.value.attribute == "last_name"
        assert parts.accounts.count() == 0
        assert parts.profiles.count() == 0

    @pytest.mark.asyncio
    async def test_entry_without_email_raises(self, parts):
        """Should treat an empty identifying attribute as missing."""
        # Arrange
        parts.directory.update_entry("jdoe", mail=None)

        # Act & Assert
        with pytest.raises(MissingAttributeError) as exc_info:
            await parts.reconciler.load_by_username("jdoe")

        assert exc_info.value.attribute == "email"
        assert parts.profiles.count() == 0

    @pytest.mark.asyncio
    async def test_malformed_lock_flag_leaves_store_untouched(self, parts):
        """Should raise on an unparseable flag without creating anything."""
        # Arrange
        parts.directory.update_entry("jdoe", nsAccountLock="maybe")

        # Act & Assert
        with pytest.raises(InvalidAttributeFormatError) as exc_info:
            await parts.reconciler.load_by_username("jdoe")

        assert exc_info.value.attribute == "locked"
        assert parts.accounts.count() == 0
        assert parts.profiles.count() == 0

    @pytest.mark.asyncio
    async def test_malformed_timestamp_does_not_partially_sync(self, parts):
        """Should leave the stored account as it was when a value is invalid."""
        # Arrange
        first = await parts.reconciler.load_by_username("jdoe")
        parts.directory.update_entry(
            "jdoe", nsAccountLock="1", krbLastSuccessfulAuth="yesterday"
        )

        # Act & Assert
        with pytest.raises(InvalidAttributeFormatError):
            await parts.reconciler.load_by_username("jdoe")

        stored = await parts.accounts.find_by_id(first.id)
        assert stored == first

    @pytest.mark.asyncio
    async def test_concurrent_account_creation_falls_back_to_sync(self):
        """Should synchronize onto the account a racing request created first."""
        # Arrange
        accounts = RacingAccountRepository()
        parts = ReconcilerParts(accounts=accounts)
        profile = await parts.profiles.save(make_profile("j@x.com"))
        winner = await accounts.save(make_account("jdoe", profile=profile))
        accounts.hidden_lookups = 1

        # Act
        account = await parts.reconciler.load_by_username("jdoe")

        # Assert
        assert account.id == winner.id
        assert account.password_hash == winner.password_hash
        assert accounts.count() == 1

    @pytest.mark.asyncio
    async def test_concurrent_profile_creation_reuses_winner(self):
        """Should link to the profile a racing request created first."""
        # Arrange
        profiles = RacingProfileRepository()
        parts = ReconcilerParts(profiles=profiles)
        winner = await profiles.save(make_profile("j@x.com"))
        profiles.hidden_lookups = 1

        # Act
        account = await parts.reconciler.load_by_username("jdoe")

        # Assert
        assert account.profile_id == winner.id
        assert profiles.count() == 1


class TestRefreshUser:
    """Tests for IdentityReconciler.refresh_user()."""

    @pytest.mark.asyncio
    async def test_refresh_applies_directory_changes(self, parts):
        """Should re-apply current directory values to the account."""
        # Arrange
        account = await parts.reconciler.load_by_username("jdoe")
        parts.directory.update_entry("jdoe", mail="Jane.Doe@X.com")

        # Act
        refreshed = await parts.reconciler.refresh_user(account)

        # Assert
        assert refreshed.id == account.id
        assert refreshed.email == "Jane.Doe@X.com"
        assert refreshed.email_canonical == "jane.doe@x.com"
        assert refreshed.password_hash == account.password_hash

        stored = await parts.accounts.find_by_id(account.id)
        assert stored == refreshed

    @pytest.mark.asyncio
    async def test_refresh_without_changes_returns_account(self, parts):
        """Should return the account unchanged when the directory is unchanged."""
        # Arrange
        account = await parts.reconciler.load_by_username("jdoe")

        # Act
        refreshed = await parts.reconciler.refresh_user(account)

        # Assert
        assert refreshed == account

    @pytest.mark.asyncio
    async def test_refresh_unknown_identity_kind_fails_fast(self):
        """Should reject non-account identities without calling the directory."""
        # Arrange
        directory = CountingDirectory()
        parts = ReconcilerParts(directory=directory)
        identity = DirectoryIdentity(username="jdoe")

        # Act & Assert
        with pytest.raises(UnsupportedIdentityKindError) as exc_info:
            await parts.reconciler.refresh_user(identity)

        assert exc_info.value.kind is DirectoryIdentity
        assert directory.calls == []

    @pytest.mark.asyncio
    async def test_refresh_after_removal_raises_not_found(self, parts):
        """Should propagate IdentityNotFoundError once the user left the directory."""
        # Arrange
        account = await parts.reconciler.load_by_username("jdoe")
        parts.directory.remove_entry("jdoe")

        # Act & Assert
        with pytest.raises(IdentityNotFoundError):
            await parts.reconciler.refresh_user(account)


class TestSupportsClass:
    """Tests for IdentityReconciler.supports_class()."""

    def test_delegates_to_directory(self, parts):
        """Should answer exactly like the directory source."""
        assert parts.reconciler.supports_class(DirectoryIdentity) is True
        assert parts.reconciler.supports_class(Account) is False
        assert parts.reconciler.supports_class(str) is False
