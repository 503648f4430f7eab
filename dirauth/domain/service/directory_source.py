"""Directory identity source interface."""

from dirauth.domain.value import DirectoryIdentity


class DirectoryIdentitySource:
    """Generic interface for directories that authenticate identities."""

    async def load_by_username(self, username: str) -> DirectoryIdentity:
        """Load the authoritative identity for a username.

        Args:
            username: Directory username

        Returns:
            Directory identity with its raw attributes

        Raises:
            IdentityNotFoundError: If the directory has no such username
        """
        raise NotImplementedError

    async def refresh(self, identity: DirectoryIdentity) -> DirectoryIdentity:
        """Re-read an identity whose directory state may have changed.

        Args:
            identity: Previously loaded identity (only the username is relied on)

        Returns:
            Fresh directory identity

        Raises:
            IdentityNotFoundError: If the identity no longer exists
        """
        raise NotImplementedError

    def supports_class(self, kind: type) -> bool:
        """Whether this source can authenticate identities of the given kind.

        Args:
            kind: Runtime class of an identity

        Returns:
            True if supported, False otherwise
        """
        raise NotImplementedError
