"""Load account use case."""

from pydantic import BaseModel

from dirauth.application.usecase.base import BaseUseCase
from dirauth.domain.service import IdentityReconciler

from .response import AccountResponse


class LoadAccountRequest(BaseModel):
    """Load account request."""

    username: str


class LoadAccountUseCase(BaseUseCase[LoadAccountRequest, AccountResponse]):
    """Use case for loading (and provisioning) the account of a directory user."""

    def __init__(self, identity_reconciler: IdentityReconciler) -> None:
        """Initialize load account use case.

        Args:
            identity_reconciler: Identity reconciliation domain service
        """
        self.identity_reconciler = identity_reconciler

    async def execute(self, request: LoadAccountRequest) -> AccountResponse:
        """Execute load account flow.

        Steps:
        1. Resolve the username in the directory
        2. Create or synchronize the local account
        3. Return the account view

        Args:
            request: Request with the directory username

        Returns:
            The synchronized local account

        Raises:
            IdentityNotFoundError: If the directory has no such username
        """
        account = await self.identity_reconciler.load_by_username(request.username)
        return AccountResponse.from_account(account)
