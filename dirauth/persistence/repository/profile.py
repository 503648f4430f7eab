"""PostgreSQL implementation of Profile repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dirauth.domain.error import StoreConflictError
from dirauth.domain.model import Profile
from dirauth.domain.repository import ProfileRepository
from dirauth.domain.value import ProfileId
from dirauth.persistence.mappers import profile_to_dict, row_to_profile
from dirauth.persistence.tables import profiles_table


class PostgresProfileRepository(ProfileRepository):
    """PostgreSQL implementation of ProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, profile_id: ProfileId) -> Optional[Profile]:
        """Find a profile by ID."""
        stmt = select(profiles_table).where(profiles_table.c.id == profile_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def find_by_email(self, email: str) -> Optional[Profile]:
        """Find a profile by email.

        Args:
            email: Email to search for

        Returns:
            Profile if found, None otherwise
        """
        stmt = select(profiles_table).where(profiles_table.c.email == email)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def save(self, profile: Profile) -> Profile:
        """Save a profile (create or update).

        Raises:
            StoreConflictError: If another profile already uses the email
        """
        existing = await self.find_by_id(profile.id)

        profile_dict = profile_to_dict(profile)

        try:
            async with self.session.begin_nested():
                if existing:
                    stmt = (
                        profiles_table.update()
                        .where(profiles_table.c.id == profile.id)
                        .values(**profile_dict)
                    )
                else:
                    stmt = profiles_table.insert().values(**profile_dict)
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise StoreConflictError("Profile", profile.email) from e

        await self.session.flush()
        return profile
