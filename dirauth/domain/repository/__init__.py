"""Repository interfaces for the local account store.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from dirauth.domain.repository.account import AccountRepository
from dirauth.domain.repository.profile import ProfileRepository

__all__ = [
    "AccountRepository",
    "ProfileRepository",
]
