"""LDAP directory adapter."""

from .attributes import LdapAttributeFetcher, lookup_attribute
from .client import DirectoryEntry, LdapClient
from .source import LdapIdentitySource, MockDirectoryIdentitySource

__all__ = [
    "DirectoryEntry",
    "LdapAttributeFetcher",
    "LdapClient",
    "LdapIdentitySource",
    "MockDirectoryIdentitySource",
    "lookup_attribute",
]
