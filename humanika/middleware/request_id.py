"""Request ID middleware.

Forwards a client X-Request-ID (if safe) or generates one, exposes it as
request.state.request_id and echoes it on the response. Raw ASGI so
streaming responses are not buffered. The id is also placed in the request
context so log records and activity entries carry it.
"""

import re
import uuid
from typing import Any, Callable

from humanika.shared.context import clear_request_context, set_request_context

REQUEST_ID_MAX_LENGTH = 64
REQUEST_ID_ALLOWED_PATTERN = re.compile(
    r"^[a-zA-Z0-9_-]{1," + str(REQUEST_ID_MAX_LENGTH) + r"}$"
)


def _sanitize_request_id(raw: str | None) -> str:
    """Return raw when it is a safe token; otherwise a new UUID (no log injection)."""
    candidate = (raw or "").strip()
    if REQUEST_ID_ALLOWED_PATTERN.match(candidate):
        return candidate
    return str(uuid.uuid4())


class RequestIDMiddleware:
    """Add or forward the request id header on each HTTP request and response."""

    def __init__(self, app: Callable[..., Any], header_name: str = "X-Request-ID") -> None:
        self.app = app
        self.header_name = header_name
        self._header_key = header_name.lower().encode()

    async def __call__(self, scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        raw = next(
            (
                v.decode("utf-8", errors="replace")
                for k, v in scope.get("headers", [])
                if k.lower() == self._header_key
            ),
            None,
        )
        request_id = _sanitize_request_id(raw)
        scope.setdefault("state", {})["request_id"] = request_id
        set_request_context(request_id=request_id)

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((self.header_name.encode(), request_id.encode()))
                message["headers"] = headers
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            clear_request_context()
