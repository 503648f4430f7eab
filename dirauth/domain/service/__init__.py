"""Domain services."""

from .attribute_fetcher import AttributeFetcher, to_bool, to_datetime
from .attribute_sync import AttributeSynchronizer
from .base import Service
from .directory_source import DirectoryIdentitySource
from .identity_reconciler import IdentityReconciler

__all__ = [
    "AttributeFetcher",
    "AttributeSynchronizer",
    "DirectoryIdentitySource",
    "IdentityReconciler",
    "Service",
    "to_bool",
    "to_datetime",
]
