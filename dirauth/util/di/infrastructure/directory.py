"""Directory infrastructure providers."""

from dishka import Scope, provide
import logfire

from dirauth.adapter.ldap import LdapClient, LdapIdentitySource, MockDirectoryIdentitySource
from dirauth.config import Settings
from dirauth.domain.service import DirectoryIdentitySource
from dirauth.util.di.base import ProviderBase
from dirauth.util.error import ConfigurationError


class DirectoryProvider(ProviderBase):
    """Directory component base."""

    __mock_component__ = "directory"


class ProdDirectoryProvider(DirectoryProvider):
    """Production directory provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_directory_source(self, settings: Settings) -> DirectoryIdentitySource:
        """Provide the directory identity source.

        Serves the in-memory directory when USE_MOCK_DIRECTORY is set,
        otherwise binds to the configured LDAP server.

        Raises:
            ConfigurationError: If no LDAP server is configured
        """
        if settings.use_mock_directory:
            logfire.warn("Serving identities from the in-memory directory")
            return MockDirectoryIdentitySource()

        if not settings.directory.is_configured:
            raise ConfigurationError(
                "Directory is not configured: set DIRECTORY__SERVER_URL, "
                "DIRECTORY__BIND_DN and DIRECTORY__USER_BASE_DN"
            )

        return LdapIdentitySource(LdapClient(settings.directory))
