"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class IdentityNotFoundError(NotFoundError):
    """Raised when the directory has no identity for a username.

    This is an expected outcome for unknown users, not an internal fault.
    """

    def __init__(self, username: str):
        self.username = username
        super().__init__("Directory identity", username)


class MissingAttributeError(DomainError):
    """Raised when a required directory attribute was not supplied.

    Signals a misconfigured attribute mapping. Never retried.
    """

    def __init__(self, attribute: str):
        self.attribute = attribute
        super().__init__(f"Required directory attribute missing: {attribute}")


class InvalidAttributeFormatError(DomainError):
    """Raised when a directory attribute cannot be coerced to its type."""

    def __init__(self, attribute: str, value: object, expected: str):
        self.attribute = attribute
        self.value = value
        self.expected = expected
        super().__init__(
            f"Directory attribute '{attribute}' is not a valid {expected}: {value!r}"
        )


class UnsupportedIdentityKindError(DomainError):
    """Raised when an identity that is not a local account is refreshed.

    Non-local identities are immutable here, so synchronizing onto them
    is a programming error.
    """

    def __init__(self, kind: type):
        self.kind = kind
        super().__init__(f"Cannot refresh identities of kind {kind.__name__}")


class StoreConflictError(DomainError):
    """Raised by repositories when a uniqueness constraint is violated.

    Usually means a concurrent request created the same record first.
    """

    def __init__(self, resource: str, key: str):
        self.resource = resource
        self.key = key
        super().__init__(f"{resource} already exists: {key}")
