"""Application layer DI providers."""

from dishka import Scope, provide

from dirauth.application.usecase.account import (
    LoadAccountUseCase,
    RefreshAccountUseCase,
)
from dirauth.domain.repository import AccountRepository
from dirauth.domain.service import IdentityReconciler
from dirauth.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_load_account_use_case(
        self, identity_reconciler: IdentityReconciler
    ) -> LoadAccountUseCase:
        """Provide load account use case."""
        return LoadAccountUseCase(identity_reconciler=identity_reconciler)

    @provide(scope=Scope.REQUEST)
    def get_refresh_account_use_case(
        self,
        identity_reconciler: IdentityReconciler,
        account_repository: AccountRepository,
    ) -> RefreshAccountUseCase:
        """Provide refresh account use case."""
        return RefreshAccountUseCase(
            identity_reconciler=identity_reconciler,
            account_repository=account_repository,
        )
