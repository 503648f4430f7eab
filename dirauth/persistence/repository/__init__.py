"""PostgreSQL repository implementations."""

from dirauth.persistence.repository.account import PostgresAccountRepository
from dirauth.persistence.repository.profile import PostgresProfileRepository

__all__ = [
    "PostgresAccountRepository",
    "PostgresProfileRepository",
]
