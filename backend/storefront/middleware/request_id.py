"""
Storefront Backend - Request ID Middleware
===========================================

What:  Tags each request with an ID that is echoed in X-Request-ID and in
       every error body.
How:   Reuses the client's X-Request-ID when it looks like an identifier,
       otherwise generates 8 hex characters. The ID lives in a ContextVar for
       the duration of the request so exception handlers can read it.

Every log line and error body produced while handling a request carries the
same ID, so a client-reported error can be matched to server logs.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Client-supplied IDs end up in logs and headers: keep them short and plain
_CLIENT_ID_RE = re.compile(r"[A-Za-z0-9._\-]{1,64}")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(header_value: Optional[str]) -> str:
    """The client's ID if it is a plain token, a fresh one otherwise."""
    if header_value and _CLIENT_ID_RE.fullmatch(header_value):
        return header_value
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tags each request with an ID and echoes it in the response headers."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = rid
        # Left set after the response: the server-error handler runs outside
        # this middleware and still reports the ID
        request_id_var.set(rid)
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
