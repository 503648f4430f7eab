"""Attribute synchronization domain service."""

from datetime import datetime, timezone
from typing import TypeVar

import logfire

from dirauth.domain.model.common import DomainModel

from .base import Service

M = TypeVar("M", bound=DomainModel)

# Directory-owned account fields, overwritten on every login
ACCOUNT_ATTRIBUTES: tuple[str, ...] = (
    "email",
    "expires_at",
    "last_login",
    "enabled",
    "verified_at",
    "email_canonical",
    "username",
    "username_canonical",
    "credentials_expire_at",
)

# Copied only when both sides carry person-level fields
PROFILE_ATTRIBUTES: tuple[str, ...] = (
    "last_name",
    "first_name",
    "locale_code",
)


class AttributeSynchronizer(Service):
    """Copies directory-sourced attributes onto a local record.

    Synchronization is a one-directional, field-by-field overwrite of a
    fixed attribute list. Fields outside the list (identifiers, password
    hash, profile link, creation time) are never touched.
    """

    def attributes_for(self, source: DomainModel, target: DomainModel) -> list[str]:
        """Get the attribute names synchronized between two models.

        Args:
            source: Directory-shaped model
            target: Local model to update

        Returns:
            Ordered list of attribute names
        """
        attributes = list(ACCOUNT_ATTRIBUTES)
        if _carries_profile(source) and _carries_profile(target):
            attributes.extend(PROFILE_ATTRIBUTES)
        return attributes

    def synchronize(self, source: DomainModel, target: M) -> M:
        """Overwrite the synchronized attributes of target with source values.

        All values are read before anything is applied, and the update is a
        single model copy, so a failure leaves the target untouched.

        Args:
            source: Directory-shaped model holding current values
            target: Existing local model

        Returns:
            Copy of target carrying the source values
        """
        attributes = self.attributes_for(source, target)
        with logfire.span(
            "attribute_synchronizer.synchronize",
            target=type(target).__name__,
            attribute_count=len(attributes),
        ):
            values = {name: getattr(source, name) for name in attributes}
            changed = sorted(
                name for name, value in values.items() if getattr(target, name) != value
            )

            if not changed:
                logfire.info("Attributes already in sync", target=type(target).__name__)
                return target

            if "updated_at" in type(target).model_fields:
                values["updated_at"] = datetime.now(timezone.utc)

            logfire.info(
                "Attributes synchronized",
                target=type(target).__name__,
                changed=changed,
            )
            return target.model_copy(update=values)


def _carries_profile(model: DomainModel) -> bool:
    return all(name in type(model).model_fields for name in PROFILE_ATTRIBUTES)
