"""LDAP client for looking up single users.

Wraps ldap3 with connection retries, LDAPS / StartTLS support and escaped
user searches. All calls are blocking; async callers run them in a worker
thread.
"""

import ssl
import time
from dataclasses import dataclass, field
from typing import Any

import logfire
from ldap3 import SUBTREE, Connection, Server, Tls
from ldap3.core.exceptions import LDAPBindError, LDAPException, LDAPSocketOpenError
from ldap3.utils.conv import escape_filter_chars

from dirauth.adapter.error import DirectoryConnectionError, DirectoryQueryError
from dirauth.config import DirectorySettings

# Result codes that mean "search ran fine": success, noSuchObject
SEARCH_OK_CODES = frozenset({0, 32})


@dataclass
class DirectoryEntry:
    """A single user entry returned by the directory."""

    dn: str
    attributes: dict[str, list[Any]] = field(default_factory=dict)


class LdapClient:
    """Blocking LDAP client bound with a service account.

    A fresh connection is opened for every lookup so the client can be
    shared between worker threads.
    """

    def __init__(self, settings: DirectorySettings) -> None:
        """Initialize LDAP client.

        Args:
            settings: Directory configuration
        """
        self.settings = settings
        self._server: Server | None = None

    @property
    def search_attributes(self) -> list[str]:
        """LDAP attributes requested for every user entry."""
        names = set(self.settings.attribute_map.values())
        names.add(self.settings.username_attribute)
        return sorted(names)

    def build_filter(self, username: str) -> str:
        """Build the search filter for a username.

        Args:
            username: Raw username (escaped before use)

        Returns:
            LDAP filter string
        """
        return (
            f"(&{self.settings.user_filter}"
            f"({self.settings.username_attribute}={escape_filter_chars(username)}))"
        )

    def find_user(self, username: str) -> DirectoryEntry | None:
        """Find a single user entry by username.

        Args:
            username: Username to search for

        Returns:
            The entry if found, None otherwise

        Raises:
            DirectoryConnectionError: If the directory cannot be bound
            DirectoryQueryError: If the search fails or matches several entries
        """
        search_filter = self.build_filter(username)
        connection = self.connect()
        try:
            found = connection.search(
                search_base=self.settings.user_base_dn,
                search_filter=search_filter,
                search_scope=SUBTREE,
                attributes=self.search_attributes,
                size_limit=2,
            )
            result = connection.result or {}
            if not found and result.get("result", 0) not in SEARCH_OK_CODES:
                raise DirectoryQueryError(
                    f"Search failed for {username}: {result.get('description')}"
                )

            entries = list(connection.entries)
            if not entries:
                return None
            if len(entries) > 1:
                raise DirectoryQueryError(
                    f"Username {username} matches {len(entries)} directory entries"
                )

            entry = entries[0]
            logfire.debug("Directory entry found", username=username, dn=entry.entry_dn)
            return DirectoryEntry(
                dn=str(entry.entry_dn),
                attributes=dict(entry.entry_attributes_as_dict),
            )
        except LDAPException as e:
            raise DirectoryQueryError(f"LDAP search failed: {e}") from e
        finally:
            self._close(connection)

    def connect(self) -> Connection:
        """Open and bind a service connection, retrying transient failures.

        Returns:
            Bound connection

        Raises:
            DirectoryConnectionError: If binding fails after all retries
        """
        server = self._get_server()
        max_retries = max(1, self.settings.max_retries)
        last_error: Exception | None = None

        for attempt in range(1, max_retries + 1):
            connection = Connection(
                server,
                user=self.settings.bind_dn,
                password=self.settings.bind_password,
                receive_timeout=self.settings.receive_timeout,
            )
            try:
                if self.settings.start_tls and not self.settings.use_ssl:
                    connection.open()
                    if not connection.start_tls():
                        raise DirectoryConnectionError(
                            f"Failed to start TLS: {connection.result}"
                        )

                if not connection.bind():
                    raise LDAPBindError(f"Bind failed: {connection.result}")

                logfire.debug(
                    "Bound to directory",
                    server_url=self.settings.server_url,
                    attempt=attempt,
                )
                return connection

            except (LDAPSocketOpenError, LDAPBindError) as e:
                last_error = e
                logfire.warn(
                    "Directory connection attempt failed",
                    attempt=attempt,
                    max_retries=max_retries,
                    error=str(e),
                )
                self._close(connection)
                if attempt < max_retries:
                    time.sleep(self.settings.retry_wait_seconds)
            except LDAPException as e:
                self._close(connection)
                raise DirectoryConnectionError(
                    f"Unexpected LDAP error while connecting: {e}"
                ) from e
            except DirectoryConnectionError:
                self._close(connection)
                raise

        raise DirectoryConnectionError(
            f"Failed to bind to {self.settings.server_url} after "
            f"{max_retries} attempts: {last_error}"
        )

    def _get_server(self) -> Server:
        """Create the ldap3 server object once."""
        if self._server is None:
            self._server = Server(
                self.settings.server_url,
                use_ssl=bool(self.settings.use_ssl),
                tls=self._create_tls(),
                connect_timeout=self.settings.connect_timeout,
            )
        return self._server

    def _create_tls(self) -> Tls | None:
        """Create TLS configuration for LDAPS or StartTLS.

        Returns:
            Tls configuration, or None for plain connections
        """
        if not (self.settings.use_ssl or self.settings.start_tls):
            return None

        tls_options: dict[str, Any] = {}
        if not self.settings.verify_ssl:
            tls_options["validate"] = ssl.CERT_NONE
            logfire.warn("Directory certificate verification disabled")
        else:
            tls_options["validate"] = ssl.CERT_REQUIRED
            if self.settings.ca_cert_file:
                tls_options["ca_certs_file"] = self.settings.ca_cert_file

        return Tls(**tls_options)

    @staticmethod
    def _close(connection: Connection) -> None:
        if connection.closed:
            return
        try:
            connection.unbind()
        except LDAPException as e:
            logfire.warn("Error closing directory connection", error=str(e))
