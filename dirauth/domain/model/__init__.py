"""Domain model entities for the directory account bridge."""

from dirauth.domain.model.account import Account
from dirauth.domain.model.profile import Profile

__all__ = [
    "Account",
    "Profile",
]
