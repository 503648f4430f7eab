"""Directory identity sources.

``LdapIdentitySource`` reads identities from an LDAP server.
``MockDirectoryIdentitySource`` serves them from memory for development
and tests.
"""

import asyncio
from typing import Any

import logfire

from dirauth.adapter.ldap.attributes import lookup_attribute
from dirauth.adapter.ldap.client import LdapClient
from dirauth.domain.error import IdentityNotFoundError
from dirauth.domain.service.directory_source import DirectoryIdentitySource
from dirauth.domain.value import DirectoryIdentity


class LdapIdentitySource(DirectoryIdentitySource):
    """Directory identity source backed by an LDAP server."""

    def __init__(self, client: LdapClient) -> None:
        """Initialize LDAP identity source.

        Args:
            client: Blocking LDAP client
        """
        self.client = client

    async def load_by_username(self, username: str) -> DirectoryIdentity:
        """Load an identity from the directory.

        The returned username is the directory's own spelling, so
        differently cased logins resolve to the same local account.

        Args:
            username: Username to look up

        Returns:
            Directory identity with raw LDAP attributes

        Raises:
            IdentityNotFoundError: If no entry matches the username
        """
        with logfire.span("ldap_identity_source.load_by_username", username=username):
            entry = await asyncio.to_thread(self.client.find_user, username)
            if entry is None:
                logfire.warn("Identity not found in directory", username=username)
                raise IdentityNotFoundError(username)

            values = lookup_attribute(
                entry.attributes, self.client.settings.username_attribute
            )
            directory_username = str(values[0]) if values else username

            logfire.info(
                "Identity loaded from directory",
                username=directory_username,
                dn=entry.dn,
            )
            return DirectoryIdentity(
                username=directory_username, dn=entry.dn, attributes=entry.attributes
            )

    async def refresh(self, identity: DirectoryIdentity) -> DirectoryIdentity:
        """Re-read an identity by username."""
        return await self.load_by_username(identity.username)

    def supports_class(self, kind: type) -> bool:
        """Only directory identities are authenticated by LDAP."""
        return isinstance(kind, type) and issubclass(kind, DirectoryIdentity)


class MockDirectoryIdentitySource(DirectoryIdentitySource):
    """In-memory directory for development and testing.

    Entries hold LDAP-style attributes (name -> list of values). Unless other
    entries are given, a ``jdoe`` entry is seeded.
    """

    def __init__(self, entries: dict[str, dict[str, Any]] | None = None) -> None:
        """Initialize mock directory.

        Args:
            entries: Optional username -> attributes map replacing the defaults
        """
        self._entries: dict[str, dict[str, list[Any]]] = {}
        if entries is None:
            entries = default_entries()
        for username, attributes in entries.items():
            self.add_entry(username, attributes)

    def add_entry(self, username: str, attributes: dict[str, Any]) -> None:
        """Add or replace a directory entry.

        Scalar values are wrapped in single-element lists; None becomes an
        empty list (attribute not set).
        """
        self._entries[username] = {
            name: _as_values(value) for name, value in attributes.items()
        }

    def update_entry(self, username: str, **attributes: Any) -> None:
        """Change some attributes of an existing entry."""
        if username not in self._entries:
            raise KeyError(username)
        for name, value in attributes.items():
            self._entries[username][name] = _as_values(value)

    def remove_entry(self, username: str) -> None:
        """Remove a directory entry if present."""
        self._entries.pop(username, None)

    async def load_by_username(self, username: str) -> DirectoryIdentity:
        """Load an identity from memory."""
        attributes = self._entries.get(username)
        if attributes is None:
            raise IdentityNotFoundError(username)
        return DirectoryIdentity(
            username=username,
            dn=f"uid={username},ou=people,dc=example,dc=com",
            attributes={name: list(values) for name, values in attributes.items()},
        )

    async def refresh(self, identity: DirectoryIdentity) -> DirectoryIdentity:
        """Re-read an identity from memory."""
        return await self.load_by_username(identity.username)

    def supports_class(self, kind: type) -> bool:
        """Only directory identities are served."""
        return isinstance(kind, type) and issubclass(kind, DirectoryIdentity)


def default_entries() -> dict[str, dict[str, Any]]:
    """Seed entries for the mock directory."""
    return {
        "jdoe": {
            "uid": "jdoe",
            "mail": "j@x.com",
            "givenName": "Jane",
            "sn": "Doe",
            "preferredLanguage": "en_US",
            "nsAccountLock": "0",
            "krbPrincipalExpiration": None,
            "krbLastSuccessfulAuth": "2024-01-01T00:00:00Z",
            "createTimestamp": "20230615120000Z",
            "krbPasswordExpiration": None,
        },
    }


def _as_values(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]
