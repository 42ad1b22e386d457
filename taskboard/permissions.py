"""Role-based capability checks.

Every mutating operation asks for the capability it needs instead of
inspecting roles itself. The FastAPI side lives in ``taskboard.dependencies``.
"""

import enum
from typing import Dict, FrozenSet, Union

from .errors import ForbiddenError
from .models.user import UserRole
from .utils.logging import get_logger

logger = get_logger(__name__)


class Capability(str, enum.Enum):
    CREATE_TASK = "create_task"
    UPDATE_OWN_TASK = "update_own_task"
    DELETE_ANY_TASK = "delete_any_task"


_USER_CAPABILITIES = frozenset({Capability.CREATE_TASK, Capability.UPDATE_OWN_TASK})

ROLE_CAPABILITIES: Dict[UserRole, FrozenSet[Capability]] = {
    UserRole.USER: _USER_CAPABILITIES,
    UserRole.ADMIN: _USER_CAPABILITIES | {Capability.DELETE_ANY_TASK},
}

_DENIED_MESSAGES = {
    Capability.DELETE_ANY_TASK: "Admin access required",
}


def has_capability(role: Union[UserRole, str, None], capability: Capability) -> bool:
    """Return True when ``role`` grants ``capability``. Unknown roles grant nothing."""
    try:
        role = UserRole(role)
    except ValueError:
        return False
    return capability in ROLE_CAPABILITIES.get(role, frozenset())


def ensure_capability(role: Union[UserRole, str, None], capability: Capability) -> None:
    if not has_capability(role, capability):
        logger.warning("Role %r denied capability %s", role, capability.value)
        raise ForbiddenError(_DENIED_MESSAGES.get(capability, "Not authorized"))
