"""Directory attribute fetching and type coercion.

The coercion helpers are pure functions so they can be used outside of a
fetcher. Their failure behaviour is explicit:

- ``None`` means "attribute not set in the directory". Booleans treat it as
  False, datetimes as None.
- Any other value that cannot be interpreted raises
  ``InvalidAttributeFormatError``. Nothing is silently defaulted.
"""

from datetime import datetime, timezone
from typing import Any

from ldap3.protocol.formatters.formatters import format_time

from dirauth.domain.error import InvalidAttributeFormatError
from dirauth.domain.value import AttributeBag, DirectoryIdentity

TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
FALSE_VALUES = frozenset({"", "0", "false", "no", "off"})


def to_bool(value: Any, attribute: str = "value") -> bool:
    """Coerce a directory attribute to a boolean.

    Args:
        value: Raw attribute value
        attribute: Attribute name used in error messages

    Returns:
        Coerced boolean

    Raises:
        InvalidAttributeFormatError: If the value is not a recognised boolean
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in TRUE_VALUES:
            return True
        if normalized in FALSE_VALUES:
            return False
    raise InvalidAttributeFormatError(attribute, value, "boolean")


def to_datetime(value: Any, attribute: str = "value") -> datetime | None:
    """Coerce a directory attribute to a timezone-aware datetime.

    Accepts datetimes, LDAP GeneralizedTime strings (``YYYYMMDDHH[MM[SS]]``
    with an optional fraction, then ``Z`` or a ``+HH[MM]`` / ``-HH[MM]``
    offset) and ISO 8601 strings. Naive values are interpreted as UTC.

    Args:
        value: Raw attribute value
        attribute: Attribute name used in error messages

    Returns:
        Coerced datetime, or None when the attribute is not set

    Raises:
        InvalidAttributeFormatError: If the value is not a recognised timestamp
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    if not isinstance(value, str):
        raise InvalidAttributeFormatError(attribute, value, "datetime")

    text = value.strip()
    if not text:
        return None

    parsed = _parse_generalized_time(text)
    if parsed is not None:
        return parsed

    try:
        return _as_utc(datetime.fromisoformat(text))
    except ValueError:
        raise InvalidAttributeFormatError(attribute, value, "datetime") from None


def _parse_generalized_time(text: str) -> datetime | None:
    """Parse GeneralizedTime with ldap3's formatter, None if not one."""
    if not text.isascii():
        return None
    try:
        parsed = format_time(text.encode("ascii"))
    except (ValueError, IndexError):
        # format_time slices by position and trips over some malformed values
        return None
    if not isinstance(parsed, datetime):
        return None
    return parsed.replace(tzinfo=timezone(parsed.utcoffset()))


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class AttributeFetcher:
    """Generic interface for retrieving normalized identity attributes."""

    async def fetch_attributes(self, identity: DirectoryIdentity) -> AttributeBag:
        """Fetch the normalized attribute bag for an identity.

        Args:
            identity: Authenticated directory identity

        Returns:
            Attribute bag (email, names, lock status, timestamps)
        """
        raise NotImplementedError

    def to_bool(self, value: Any, attribute: str = "value") -> bool:
        """Coerce a raw attribute to bool. See module-level ``to_bool``."""
        return to_bool(value, attribute)

    def to_datetime(self, value: Any, attribute: str = "value") -> datetime | None:
        """Coerce a raw attribute to datetime. See module-level ``to_datetime``."""
        return to_datetime(value, attribute)
