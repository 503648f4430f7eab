"""LDAP attribute fetcher.

Maps raw LDAP attributes onto the normalized attribute bag consumed by the
identity reconciler.
"""

from typing import Any

import logfire

from dirauth.domain.service.attribute_fetcher import AttributeFetcher
from dirauth.domain.service.directory_source import DirectoryIdentitySource
from dirauth.domain.value import AttributeBag, DirectoryIdentity


class LdapAttributeFetcher(AttributeFetcher):
    """Attribute fetcher driven by a bag key -> LDAP attribute map.

    Every mapped key is present in the returned bag. Attributes the entry
    does not carry map to None, multi-valued attributes to their first
    value, and ``*_canonical`` values are lower-cased.
    """

    def __init__(
        self,
        attribute_map: dict[str, str],
        directory_source: DirectoryIdentitySource,
    ) -> None:
        """Initialize attribute fetcher.

        Args:
            attribute_map: Attribute bag key -> LDAP attribute name
            directory_source: Source used to re-read identities without attributes
        """
        self.attribute_map = attribute_map
        self.directory_source = directory_source

    async def fetch_attributes(self, identity: DirectoryIdentity) -> AttributeBag:
        """Build the attribute bag for an identity.

        Args:
            identity: Directory identity (re-read if it carries no attributes)

        Returns:
            Normalized attribute bag
        """
        if not identity.attributes:
            identity = await self.directory_source.refresh(identity)

        bag: AttributeBag = {}
        for key, ldap_name in self.attribute_map.items():
            values = lookup_attribute(identity.attributes, ldap_name)
            value = _first(values)
            if key.endswith("_canonical") and isinstance(value, str):
                value = value.strip().lower()
            bag[key] = value

        logfire.debug(
            "Directory attributes fetched",
            username=identity.username,
            unset=sorted(key for key, value in bag.items() if value is None),
        )
        return bag


def lookup_attribute(attributes: dict[str, list[Any]], name: str) -> list[Any]:
    """Case-insensitive attribute lookup (LDAP attribute names are).

    Args:
        attributes: Raw entry attributes
        name: LDAP attribute name

    Returns:
        Attribute values, empty if the attribute is absent
    """
    wanted = name.lower()
    for key, values in attributes.items():
        if key.lower() == wanted:
            return values
    return []


def _first(values: list[Any]) -> Any:
    if not values:
        return None
    value = values[0]
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value
