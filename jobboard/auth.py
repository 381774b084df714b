"""
Identity resolution for actions that write.

Actions receive an AuthProvider instead of reading a global session, so
the caller decides how the current user is found.
"""

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True)
class AuthUser:
    id: str
    name: Optional[str] = None
    email: Optional[str] = None


class AuthProvider(Protocol):
    def current_user(self) -> Optional[AuthUser]: ...


class StaticAuthProvider:
    """Always resolves to the same user (or to nobody)."""

    def __init__(self, user: Optional[AuthUser] = None):
        self.user = user

    def current_user(self) -> Optional[AuthUser]:
        return self.user


ANONYMOUS = StaticAuthProvider(None)
