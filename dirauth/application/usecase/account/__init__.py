"""Account use cases."""

from .load_account import LoadAccountRequest, LoadAccountUseCase
from .refresh_account import RefreshAccountRequest, RefreshAccountUseCase
from .response import AccountResponse

__all__ = [
    "AccountResponse",
    "LoadAccountRequest",
    "LoadAccountUseCase",
    "RefreshAccountRequest",
    "RefreshAccountUseCase",
]
