"""In-memory profile repository for testing."""

from typing import Optional

from dirauth.domain.error import StoreConflictError
from dirauth.domain.model.profile import Profile
from dirauth.domain.repository.profile import ProfileRepository
from dirauth.domain.value import ProfileId


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(self) -> None:
        self._profiles: dict[ProfileId, Profile] = {}

    async def find_by_id(self, profile_id: ProfileId) -> Optional[Profile]:
        """Find a profile by ID."""
        return self._profiles.get(profile_id)

    async def find_by_email(self, email: str) -> Optional[Profile]:
        """Find a profile by email."""
        for profile in self._profiles.values():
            if profile.email == email:
                return profile
        return None

    async def save(self, profile: Profile) -> Profile:
        """Save or update a profile."""
        holder = await self.find_by_email(profile.email)
        if holder is not None and holder.id != profile.id:
            raise StoreConflictError("Profile", profile.email)
        self._profiles[profile.id] = profile
        return profile

    def count(self) -> int:
        """Number of stored profiles."""
        return len(self._profiles)
