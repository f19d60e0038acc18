"""
Explicit per-request session.

Views build one MessSession from the authenticated user and hand it to
whatever needs to know who is asking and in which mess, instead of
reaching for the user's membership ad hoc.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from .models import MessRole


@dataclass(frozen=True)
class MessSession:
    uid: UUID
    email: str
    display_name: str
    role: Optional[str] = None
    mess_id: Optional[str] = None

    @property
    def is_manager(self) -> bool:
        return self.role == MessRole.MANAGER

    @property
    def has_mess(self) -> bool:
        return self.mess_id is not None


def build_session(user) -> MessSession:
    """Snapshot the user's identity, role and mess."""
    membership = user.mess_membership
    return MessSession(
        uid=user.id,
        email=user.email,
        display_name=user.get_display_name(),
        role=membership.role if membership else None,
        mess_id=membership.mess_id if membership else None,
    )
