"""Infrastructure providers."""

# Import bases
from .directory import DirectoryProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .directory import ProdDirectoryProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "DirectoryProvider",
    "PersistenceProvider",
    "ProdDirectoryProvider",
    "ProdPersistenceProvider",
]
