"""In-memory repository implementations for testing."""

from .account import InMemoryAccountRepository
from .profile import InMemoryProfileRepository

__all__ = [
    "InMemoryAccountRepository",
    "InMemoryProfileRepository",
]
