"""Refresh account use case."""

from pydantic import BaseModel

from dirauth.application.usecase.base import BaseUseCase
from dirauth.domain.error import NotFoundError
from dirauth.domain.repository import AccountRepository
from dirauth.domain.service import IdentityReconciler
from dirauth.domain.value import AccountId

from .response import AccountResponse


class RefreshAccountRequest(BaseModel):
    """Refresh account request."""

    account_id: AccountId


class RefreshAccountUseCase(BaseUseCase[RefreshAccountRequest, AccountResponse]):
    """Use case for re-applying directory attributes to a stored account."""

    def __init__(
        self,
        identity_reconciler: IdentityReconciler,
        account_repository: AccountRepository,
    ) -> None:
        """Initialize refresh account use case.

        Args:
            identity_reconciler: Identity reconciliation domain service
            account_repository: Account repository
        """
        self.identity_reconciler = identity_reconciler
        self.account_repository = account_repository

    async def execute(self, request: RefreshAccountRequest) -> AccountResponse:
        """Execute refresh account flow.

        Args:
            request: Request with the account ID

        Returns:
            The account carrying current directory values

        Raises:
            NotFoundError: If no account has the ID
            IdentityNotFoundError: If the username left the directory
        """
        account = await self.account_repository.find_by_id(request.account_id)
        if not account:
            raise NotFoundError("Account", str(request.account_id))

        refreshed = await self.identity_reconciler.refresh_user(account)
        return AccountResponse.from_account(refreshed)
