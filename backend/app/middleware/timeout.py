"""
TravelMap Backend - Request Timeout Middleware
===============================================

What:  Bounds the wall-clock time of every request.
How:   Plain ASGI middleware running the downstream app under
       asyncio.wait_for. On expiry the handler task is cancelled (its session
       context exits, so the pooled connection is released) and the client
       gets 504 {"error": "request timed out"}.

Covers a stalled request body, a long wait for a pooled connection, and a
statement that never returns.
"""

import asyncio
import logging

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class RequestTimeoutMiddleware:

    def __init__(self, app: ASGIApp, timeout_seconds: float = 30.0):
        self.app = app
        self.timeout_seconds = timeout_seconds

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(
                self.app(scope, receive, send_wrapper),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "[%s] %s %s exceeded %.1fs",
                request_id_var.get(""),
                scope.get("method"),
                scope.get("path"),
                self.timeout_seconds,
            )
            if response_started:
                # Headers already went out; the connection is simply closed
                return
            response = JSONResponse(status_code=504, content={"error": "request timed out"})
            await response(scope, receive, send)
