"""
TravelMap Backend - Error Boundary Middleware
==============================================

What:  Last line of error handling for anything the exception handlers in
       main.py do not map (a bug, an unexpected driver exception, ...).
How:   Wraps the router; any exception escaping it is logged with its stack
       trace and turned into 500 {"error": "<message>"}.

Placed inside the CORS / request ID / logging middleware so that such
responses still get CORS headers, a request ID, and an access-log line.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class ErrorBoundaryMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "[%s] Unexpected error on %s %s: %s",
                request_id_var.get(""),
                request.method,
                request.url.path,
                str(exc),
                exc_info=True,
            )
            return JSONResponse(
                status_code=500,
                content={"error": str(exc) or type(exc).__name__},
            )
