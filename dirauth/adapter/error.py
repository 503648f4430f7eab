"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class DirectoryConnectionError(ProviderError):
    """Raised when the directory cannot be reached or bound."""

    pass


class DirectoryQueryError(ProviderError):
    """Raised when a directory search fails or is ambiguous."""

    pass
