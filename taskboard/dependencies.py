from typing import Callable

from fastapi import Depends

from .models import User
from .permissions import Capability, ensure_capability
from .routers.auth import get_current_user


def require_capability(capability: Capability) -> Callable[..., User]:
    """FastAPI dependency factory yielding the current user if entitled."""

    def _dependency(current_user: User = Depends(get_current_user)) -> User:
        ensure_capability(current_user.role, capability)
        return current_user

    return _dependency
