"""Typed wrappers around the Taskboard HTTP API."""

from typing import Any, Dict, Optional, Union

import httpx

from ..models.task import TaskStatus
from ..models.user import UserRole
from ..schemas.task import DeleteResponse, TaskPage, TaskResponse
from ..schemas.user import AuthResponse, User
from .session import SessionContext


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    try:
        body = response.json()
    except ValueError:
        body = None
    detail = body.get("detail") if isinstance(body, dict) else None
    if not isinstance(detail, str):
        detail = response.reason_phrase or "Request failed"
    raise ApiError(response.status_code, detail)


def _status_value(status: Union[TaskStatus, str, None]) -> Optional[str]:
    if isinstance(status, TaskStatus):
        return status.value
    return status


class AuthAPI:
    def __init__(self, http: httpx.Client, session: SessionContext):
        self.http = http
        self.session = session

    def _start_session(self, response: httpx.Response) -> AuthResponse:
        _raise_for_status(response)
        auth = AuthResponse.model_validate(response.json())
        self.session.start(auth.access_token, auth.user)
        return auth

    def signup(
        self,
        name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.USER,
    ) -> AuthResponse:
        payload = {"name": name, "email": email, "password": password, "role": role.value}
        return self._start_session(self.http.post("/auth/signup", json=payload))

    def signin(self, email: str, password: str) -> AuthResponse:
        payload = {"email": email, "password": password}
        return self._start_session(self.http.post("/auth/signin", json=payload))

    def signout(self) -> None:
        response = self.http.post("/auth/signout")
        self.session.clear()
        _raise_for_status(response)

    def me(self) -> User:
        response = self.http.get("/auth/me")
        _raise_for_status(response)
        return User.model_validate(response.json())


class TaskAPI:
    def __init__(self, http: httpx.Client):
        self.http = http

    def get_tasks(self, page: int = 1, limit: int = 10, status: str = "all") -> TaskPage:
        params: Dict[str, Any] = {"page": page, "limit": limit}
        status = _status_value(status)
        if status and status != "all":
            params["status"] = status
        response = self.http.get("/tasks", params=params)
        _raise_for_status(response)
        return TaskPage.model_validate(response.json())

    def get_task(self, task_id: str) -> TaskResponse:
        response = self.http.get(f"/tasks/{task_id}")
        _raise_for_status(response)
        return TaskResponse.model_validate(response.json())

    def create_task(
        self,
        title: str,
        description: str,
        status: Union[TaskStatus, str, None] = None,
    ) -> TaskResponse:
        payload: Dict[str, Any] = {"title": title, "description": description}
        if status is not None:
            payload["status"] = _status_value(status)
        response = self.http.post("/tasks", json=payload)
        _raise_for_status(response)
        return TaskResponse.model_validate(response.json())

    def update_task(self, task_id: str, **fields: Any) -> TaskResponse:
        payload = {
            name: _status_value(value) if name == "status" else value
            for name, value in fields.items()
            if value is not None
        }
        response = self.http.put(f"/tasks/{task_id}", json=payload)
        _raise_for_status(response)
        return TaskResponse.model_validate(response.json())

    def delete_task(self, task_id: str) -> DeleteResponse:
        response = self.http.delete(f"/tasks/{task_id}")
        _raise_for_status(response)
        return DeleteResponse.model_validate(response.json())
