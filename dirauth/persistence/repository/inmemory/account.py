"""In-memory account repository for testing."""

from typing import Optional

from dirauth.domain.error import StoreConflictError
from dirauth.domain.model.account import Account
from dirauth.domain.repository.account import AccountRepository
from dirauth.domain.value import AccountId


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing.

    Enforces username uniqueness like the database does.
    """

    def __init__(self) -> None:
        self._accounts: dict[AccountId, Account] = {}

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID."""
        return self._accounts.get(account_id)

    async def find_by_username(self, username: str) -> Optional[Account]:
        """Find an account by its username."""
        for account in self._accounts.values():
            if account.username == username:
                return account
        return None

    async def save(self, account: Account) -> Account:
        """Save or update an account."""
        holder = await self.find_by_username(account.username)
        if holder is not None and holder.id != account.id:
            raise StoreConflictError("Account", account.username)
        self._accounts[account.id] = account
        return account

    def count(self) -> int:
        """Number of stored accounts."""
        return len(self._accounts)
