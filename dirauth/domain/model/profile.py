"""Profile entity.

Person-level data (name, email, locale) owned by the local account store.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from dirauth.domain.model.common import DomainModel
from dirauth.domain.value import ProfileId


class Profile(DomainModel):
    """A person known to the local store, keyed by email.

    Several accounts may reference the same profile. Profiles are created
    once per distinct email and never deleted by directory reconciliation.
    """

    id: ProfileId
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    locale_code: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
