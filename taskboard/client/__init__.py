from .api import ApiError, AuthAPI, TaskAPI
from .dashboard import TaskDashboard, TaskForm, Toast
from .http import create_http_client
from .session import SessionContext

__all__ = [
    "ApiError",
    "AuthAPI",
    "TaskAPI",
    "TaskDashboard",
    "TaskForm",
    "Toast",
    "create_http_client",
    "SessionContext",
]
