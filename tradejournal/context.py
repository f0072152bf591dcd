from dataclasses import dataclass
from typing import Optional

from .enums import Role


@dataclass(frozen=True)
class Actor:
    """The authenticated user a request is acting as.

    Built once per request from the identity collaborator and passed
    explicitly to every function that gates on who is acting.
    """

    id: int
    role: str
    username: Optional[str] = None
    is_active: bool = True

    @classmethod
    def from_profile(cls, profile):
        return cls(
            id=profile.id,
            role=profile.role,
            username=profile.username,
            is_active=bool(profile.is_active),
        )

    @property
    def is_mentor(self):
        return self.role == Role.MENTOR.value

    def owns(self, trade):
        return trade.user_id == self.id
