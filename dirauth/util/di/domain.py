"""Domain layer DI providers."""

from dishka import Scope, provide

from dirauth.adapter.ldap import LdapAttributeFetcher
from dirauth.config import DirectorySettings
from dirauth.domain.repository import AccountRepository, ProfileRepository
from dirauth.domain.service import (
    AttributeFetcher,
    AttributeSynchronizer,
    DirectoryIdentitySource,
    IdentityReconciler,
)
from dirauth.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_attribute_synchronizer(self) -> AttributeSynchronizer:
        """Provide attribute synchronizer (stateless)."""
        return AttributeSynchronizer()

    @provide(scope=Scope.APP)
    def get_attribute_fetcher(
        self,
        directory_settings: DirectorySettings,
        directory_source: DirectoryIdentitySource,
    ) -> AttributeFetcher:
        """Provide attribute fetcher mapping LDAP attributes to the bag."""
        return LdapAttributeFetcher(
            attribute_map=directory_settings.attribute_map,
            directory_source=directory_source,
        )

    @provide
    def get_identity_reconciler(
        self,
        directory_source: DirectoryIdentitySource,
        attribute_fetcher: AttributeFetcher,
        account_repository: AccountRepository,
        profile_repository: ProfileRepository,
        synchronizer: AttributeSynchronizer,
    ) -> IdentityReconciler:
        """Provide identity reconciliation domain service."""
        return IdentityReconciler(
            directory_source=directory_source,
            attribute_fetcher=attribute_fetcher,
            account_repository=account_repository,
            profile_repository=profile_repository,
            synchronizer=synchronizer,
        )
