"""Identity reconciliation domain service.

Maps directory-authenticated identities onto local accounts: the first
login creates a linked profile/account pair, every later login overwrites
the directory-owned attributes of the existing account.
"""

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

import logfire

from dirauth.domain.error import (
    MissingAttributeError,
    StoreConflictError,
    UnsupportedIdentityKindError,
    ValidationError,
)
from dirauth.domain.model import Account, Profile
from dirauth.domain.repository import AccountRepository, ProfileRepository
from dirauth.domain.value import (
    DIRECTORY_PASSWORD_PLACEHOLDER,
    AccountId,
    AttributeBag,
    DirectoryIdentity,
    ProfileId,
)

from .attribute_fetcher import AttributeFetcher
from .attribute_sync import AttributeSynchronizer
from .base import Service
from .directory_source import DirectoryIdentitySource

# Attributes that must be present in every bag, even when their value is unset
REQUIRED_ATTRIBUTES: tuple[str, ...] = (
    "email",
    "email_canonical",
    "username_canonical",
    "first_name",
    "last_name",
    "locked",
    "expires_at",
    "last_login",
    "verified_at",
    "credentials_expire_at",
)

# Attributes that must also carry a non-empty value
IDENTIFYING_ATTRIBUTES: tuple[str, ...] = (
    "email",
    "email_canonical",
    "username_canonical",
)


class IdentityReconciler(Service):
    """Domain service keeping one canonical local account per directory user."""

    def __init__(
        self,
        directory_source: DirectoryIdentitySource,
        attribute_fetcher: AttributeFetcher,
        account_repository: AccountRepository,
        profile_repository: ProfileRepository,
        synchronizer: AttributeSynchronizer,
    ) -> None:
        """Initialize identity reconciler.

        Args:
            directory_source: Directory that authenticates identities
            attribute_fetcher: Fetcher for normalized identity attributes
            account_repository: Account repository
            profile_repository: Profile repository
            synchronizer: Attribute synchronizer
        """
        self.directory_source = directory_source
        self.attribute_fetcher = attribute_fetcher
        self.account_repository = account_repository
        self.profile_repository = profile_repository
        self.synchronizer = synchronizer

    async def load_by_username(self, username: str) -> Account:
        """Load the local account for a directory username.

        Steps:
        1. Resolve the identity in the directory
        2. Convert it to a directory-shaped account (creating one if needed)
        3. If another local account already holds the username, synchronize
           directory attributes into it and return it

        Args:
            username: Directory username

        Returns:
            The single local account for the username, synchronized with
            the directory

        Raises:
            ValidationError: If the username is empty
            IdentityNotFoundError: If the directory has no such username
            MissingAttributeError: If a required attribute is not supplied
        """
        if not username or not username.strip():
            raise ValidationError("Username must not be empty")

        with logfire.span("identity_reconciler.load_by_username", username=username):
            identity = await self.directory_source.load_by_username(username)
            directory_account = await self._convert(identity)

            existing = await self.account_repository.find_by_username(
                identity.username
            )
            if existing is None or existing.id == directory_account.id:
                return directory_account

            return await self._synchronize(directory_account, existing)

    async def refresh_user(self, account: object) -> Account:
        """Re-apply current directory attributes to a loaded account.

        Args:
            account: Previously loaded local account

        Returns:
            The account carrying the directory's current values

        Raises:
            UnsupportedIdentityKindError: If account is not a local Account
            IdentityNotFoundError: If the identity left the directory
        """
        # Non-local identities are immutable and cannot be synchronized
        if not isinstance(account, Account):
            logfire.error(
                "Refresh requested for unsupported identity kind",
                kind=type(account).__name__,
            )
            raise UnsupportedIdentityKindError(type(account))

        with logfire.span(
            "identity_reconciler.refresh_user",
            account_id=str(account.id),
            username=account.username,
        ):
            identity = await self.directory_source.refresh(
                DirectoryIdentity(username=account.username)
            )
            directory_account = await self._convert(identity)
            return await self._synchronize(directory_account, account)

    def supports_class(self, kind: type) -> bool:
        """Whether the directory can authenticate identities of this kind.

        Args:
            kind: Runtime class of an identity

        Returns:
            The directory source's answer, unchanged
        """
        return self.directory_source.supports_class(kind)

    async def _synchronize(self, source: Account, target: Account) -> Account:
        """Copy directory attributes onto target and persist the result."""
        synchronized = self.synchronizer.synchronize(source, target)
        if synchronized is target:
            return target

        saved = await self.account_repository.save(synchronized)
        logfire.info(
            "Account synchronized with directory",
            account_id=str(saved.id),
            username=saved.username,
            enabled=saved.enabled,
        )
        return saved

    async def _convert(self, identity: DirectoryIdentity) -> Account:
        """Convert a directory identity into a directory-shaped account.

        Creates and persists the profile and account on first sight.
        Otherwise returns a transient account linked to the stored
        account's profile, carrying the directory's current values and
        ready to be synchronized onto the stored one.
        """
        bag = await self.attribute_fetcher.fetch_attributes(identity)
        values = self._read_attributes(bag)

        existing = await self.account_repository.find_by_username(identity.username)
        if existing is not None:
            profile_id = existing.profile_id
        else:
            profile_id = (await self._resolve_profile(values)).id

        now = datetime.now(timezone.utc)
        directory_account = Account(
            id=AccountId(uuid4()),
            profile_id=profile_id,
            username=identity.username,
            username_canonical=values["username_canonical"],
            email=values["email"],
            email_canonical=values["email_canonical"],
            locked=values["locked"],
            enabled=not values["locked"],
            password_hash=DIRECTORY_PASSWORD_PLACEHOLDER,
            last_login=values["last_login"],
            verified_at=values["verified_at"],
            expires_at=values["expires_at"],
            credentials_expire_at=values["credentials_expire_at"],
            created_at=now,
            updated_at=now,
        )

        if existing is not None:
            return directory_account

        try:
            saved = await self.account_repository.save(directory_account)
        except StoreConflictError:
            # A concurrent login created the account first; synchronize onto it
            logfire.warn(
                "Account created concurrently, falling back to synchronize",
                username=identity.username,
            )
            return directory_account

        logfire.info(
            "New directory account created",
            account_id=str(saved.id),
            username=saved.username,
            profile_id=str(profile_id),
            locked=saved.locked,
        )
        return saved

    async def _resolve_profile(self, values: dict[str, Any]) -> Profile:
        """Find the profile for the directory email, creating it if absent."""
        email = values["email"]
        profile = await self.profile_repository.find_by_email(email)
        if profile:
            return profile

        now = datetime.now(timezone.utc)
        profile = Profile(
            id=ProfileId(uuid4()),
            email=email,
            first_name=values["first_name"],
            last_name=values["last_name"],
            locale_code=values["locale_code"],
            created_at=now,
            updated_at=now,
        )
        try:
            saved = await self.profile_repository.save(profile)
        except StoreConflictError:
            winner = await self.profile_repository.find_by_email(email)
            if winner is None:
                raise
            logfire.warn("Profile created concurrently, reusing it", email=email)
            return winner

        logfire.info("New profile created", profile_id=str(saved.id), email=email)
        return saved

    def _read_attributes(self, bag: AttributeBag) -> dict[str, Any]:
        """Read and coerce every attribute before anything is persisted.

        Raises:
            MissingAttributeError: If a required attribute is absent
            InvalidAttributeFormatError: If a value cannot be coerced
        """
        missing = [name for name in REQUIRED_ATTRIBUTES if name not in bag]
        missing += [
            name for name in IDENTIFYING_ATTRIBUTES if name in bag and not bag[name]
        ]
        if missing:
            logfire.error("Directory attributes missing", attributes=missing)
            raise MissingAttributeError(missing[0])

        fetcher = self.attribute_fetcher
        return {
            "email": bag["email"],
            "email_canonical": bag["email_canonical"],
            "username_canonical": bag["username_canonical"],
            "first_name": bag["first_name"],
            "last_name": bag["last_name"],
            "locale_code": bag.get("locale_code"),
            "locked": fetcher.to_bool(bag["locked"], "locked"),
            "expires_at": fetcher.to_datetime(bag["expires_at"], "expires_at"),
            "last_login": fetcher.to_datetime(bag["last_login"], "last_login"),
            "verified_at": fetcher.to_datetime(bag["verified_at"], "verified_at"),
            "credentials_expire_at": fetcher.to_datetime(
                bag["credentials_expire_at"], "credentials_expire_at"
            ),
        }
