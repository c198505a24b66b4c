"""
Storefront Backend - CORS Middleware
=====================================

What:  Adds cross-origin headers to every response and answers preflights.
How:   Any OPTIONS request is short-circuited with an empty 204; every other
       response gets the same Access-Control-* headers on its way out.
Who:   Applied to every request via Starlette middleware.

Headers sent:
    Access-Control-Allow-Origin:   "*" (or the request Origin when it is in CORS_ORIGINS)
    Access-Control-Allow-Methods:  GET, POST, DELETE, OPTIONS
    Access-Control-Allow-Headers:  Content-Type, Authorization
    Access-Control-Expose-Headers: *

Starlette's CORSMiddleware answers preflights with "200 OK" and a body and
rejects preflights asking for unlisted headers; the storefront client expects
an empty 204 for every OPTIONS request, hence this small middleware.
"""

from typing import Dict, List, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

ALLOWED_METHODS = ["GET", "POST", "DELETE", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type", "Authorization"]


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """
    Permissive CORS for the storefront API.

    Args:
        allow_origins: Origins allowed to read responses. ["*"] (default)
            allows any origin.
    """

    def __init__(self, app, allow_origins: Optional[List[str]] = None, **kwargs):
        super().__init__(app, **kwargs)
        self.allow_origins = allow_origins or ["*"]
        self.allow_all = "*" in self.allow_origins

    def cors_headers(self, request: Request) -> Dict[str, str]:
        headers = {
            "Access-Control-Allow-Methods": ", ".join(ALLOWED_METHODS),
            "Access-Control-Allow-Headers": ", ".join(ALLOWED_HEADERS),
            "Access-Control-Expose-Headers": "*",
        }
        origin = request.headers.get("Origin")
        if self.allow_all:
            headers["Access-Control-Allow-Origin"] = "*"
        elif origin in self.allow_origins:
            headers["Access-Control-Allow-Origin"] = origin
            headers["Vary"] = "Origin"
        return headers

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        headers = self.cors_headers(request)

        if request.method == "OPTIONS":
            return Response(status_code=204, headers=headers)

        response = await call_next(request)
        response.headers.update(headers)
        return response
