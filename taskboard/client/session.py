"""Explicit authentication state for API callers."""

from typing import Callable, List, Optional

from ..permissions import Capability, has_capability
from ..schemas.user import User


class SessionContext:
    """Holds the bearer token and user for one API consumer.

    Passed to ``create_http_client``; nothing reads auth state from anywhere
    else.
    """

    def __init__(self, token: Optional[str] = None, user: Optional[User] = None):
        self.token = token
        self.user = user
        self._expiry_listeners: List[Callable[["SessionContext"], None]] = []

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def can(self, capability: Capability) -> bool:
        """Capability check for the signed-in user; anonymous sessions can do nothing."""
        return self.user is not None and has_capability(self.user.role, capability)

    @property
    def is_admin(self) -> bool:
        return self.can(Capability.DELETE_ANY_TASK)

    def start(self, token: str, user: Optional[User] = None) -> None:
        self.token = token
        self.user = user

    def clear(self) -> None:
        self.token = None
        self.user = None

    def on_expired(self, listener: Callable[["SessionContext"], None]) -> None:
        """Register a callback run when the server rejects the token."""
        self._expiry_listeners.append(listener)

    def expire(self) -> None:
        was_authenticated = self.is_authenticated
        self.clear()
        if was_authenticated:
            for listener in self._expiry_listeners:
                listener(self)
