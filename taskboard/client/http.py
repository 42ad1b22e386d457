from typing import Optional

import httpx

from .session import SessionContext
from ..utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api"


def create_http_client(
    session: SessionContext,
    base_url: str = DEFAULT_BASE_URL,
    transport: Optional[httpx.BaseTransport] = None,
    timeout: float = 10.0,
) -> httpx.Client:
    """Build the httpx client used by the API wrappers.

    The request hook attaches the session's bearer token; the response hook
    ends the session when the server answers 401.
    """

    def attach_token(request: httpx.Request) -> None:
        if session.token:
            request.headers["Authorization"] = f"Bearer {session.token}"

    def expire_on_unauthorized(response: httpx.Response) -> None:
        if response.status_code == 401 and session.is_authenticated:
            logger.info("Session rejected by %s, clearing credentials", response.request.url)
            session.expire()

    return httpx.Client(
        base_url=base_url,
        transport=transport,
        timeout=timeout,
        headers={"Content-Type": "application/json"},
        event_hooks={"request": [attach_token], "response": [expire_on_unauthorized]},
    )
