"""Profile repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from dirauth.domain.model.profile import Profile
from dirauth.domain.value import ProfileId


class ProfileRepository(ABC):
    """Repository for Profile entity.

    Profiles are keyed by email. Implementations must enforce email
    uniqueness.
    """

    @abstractmethod
    async def find_by_id(self, profile_id: ProfileId) -> Optional[Profile]:
        """Find a profile by ID.

        Args:
            profile_id: The profile's unique identifier

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Profile]:
        """Find a profile by email.

        Args:
            email: The profile's email address

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, profile: Profile) -> Profile:
        """Save a profile (create or update).

        Args:
            profile: The profile to save

        Returns:
            The saved profile

        Raises:
            StoreConflictError: If another profile already uses the email
        """
        pass
