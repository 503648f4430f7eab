"""PostgreSQL implementation of Account repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dirauth.domain.error import StoreConflictError
from dirauth.domain.model import Account
from dirauth.domain.repository import AccountRepository
from dirauth.domain.value import AccountId
from dirauth.persistence.mappers import account_to_dict, row_to_account
from dirauth.persistence.tables import accounts_table


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID.

        Args:
            account_id: Account ID to look up

        Returns:
            Account if found, None otherwise
        """
        stmt = select(accounts_table).where(accounts_table.c.id == account_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def find_by_username(self, username: str) -> Optional[Account]:
        """Find an account by its username.

        Args:
            username: Username to search for

        Returns:
            Account if found, None otherwise
        """
        stmt = select(accounts_table).where(accounts_table.c.username == username)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def save(self, account: Account) -> Account:
        """Save an account (create or update).

        Inserts run inside a savepoint so a unique violation leaves the
        request transaction usable.

        Args:
            account: Account to save

        Returns:
            Saved account

        Raises:
            StoreConflictError: If another account already uses the username
        """
        existing = await self.find_by_id(account.id)

        account_dict = account_to_dict(account)

        try:
            async with self.session.begin_nested():
                if existing:
                    stmt = (
                        accounts_table.update()
                        .where(accounts_table.c.id == account.id)
                        .values(**account_dict)
                    )
                else:
                    stmt = accounts_table.insert().values(**account_dict)
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise StoreConflictError("Account", account.username) from e

        await self.session.flush()
        return account
