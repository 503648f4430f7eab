"""Account repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from dirauth.domain.model.account import Account
from dirauth.domain.value import AccountId


class AccountRepository(ABC):
    """Repository for Account aggregate.

    Defines the contract for account persistence operations.
    Implementations live in the infrastructure layer and must enforce
    username uniqueness.
    """

    @abstractmethod
    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID.

        Args:
            account_id: The account's unique identifier

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[Account]:
        """Find an account by its username.

        Args:
            username: The account's username

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, account: Account) -> Account:
        """Save an account (create or update).

        Args:
            account: The account to save

        Returns:
            The saved account

        Raises:
            StoreConflictError: If another account already uses the username
        """
        pass
