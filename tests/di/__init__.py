"""Mock providers for testing."""

from .directory import MockDirectoryProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockDirectoryProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
