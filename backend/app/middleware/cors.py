"""
TravelMap Backend - CORS Headers Middleware
============================================

What:  Stamps the same CORS headers on every response and answers preflight.
How:   OPTIONS requests for any path get 200 with an empty body without
       reaching the router; every other response passes through and gets
       the headers added on the way out.

Differs from Starlette's CORSMiddleware:
    That one only decorates responses to requests carrying an Origin header
    and only short-circuits OPTIONS when Access-Control-Request-Method is
    present. Here the headers are unconditional.

Headers on every response:
    Access-Control-Allow-Origin:  *
    Access-Control-Allow-Methods: GET, POST, OPTIONS, DELETE, PUT
    Access-Control-Allow-Headers: Content-Type
    Content-Type:                 application/json (unless already set)
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Outermost middleware: every response leaving the app passes through here."""

    def __init__(
        self,
        app,
        allow_origin: str = "*",
        allow_methods: str = "GET, POST, OPTIONS, DELETE, PUT",
        allow_headers: str = "Content-Type",
    ):
        super().__init__(app)
        self.cors_headers = {
            "Access-Control-Allow-Origin": allow_origin,
            "Access-Control-Allow-Methods": allow_methods,
            "Access-Control-Allow-Headers": allow_headers,
        }

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == "OPTIONS":
            response = Response(status_code=200)
        else:
            response = await call_next(request)

        response.headers.update(self.cors_headers)
        if "content-type" not in response.headers:
            response.headers["Content-Type"] = "application/json"
        return response
