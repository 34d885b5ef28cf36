"""
Request Context Middleware

Binds a request id and the caller's client id into the structlog
context so every log line emitted while handling a request carries them.

The request id is taken from an incoming X-Request-ID header when a
proxy already assigned one, otherwise generated, and is echoed back on
the response.

Usage:
======
    from ocwiki.api.middleware.request_context import setup_request_context

    app = FastAPI()
    setup_request_context(app)
"""

import uuid

from fastapi import FastAPI, Request

from ocwiki.api.dependencies.auth import get_client_id
from ocwiki.shared.core.logging import clear_log_context, log_context

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 64


def setup_request_context(app: FastAPI) -> None:
    """Register the request context middleware on the app."""

    @app.middleware("http")
    async def bind_request_context(request: Request, call_next):
        clear_log_context()
        request_id = (
            request.headers.get(REQUEST_ID_HEADER, "").strip()[:MAX_REQUEST_ID_LENGTH]
            or uuid.uuid4().hex
        )
        log_context(request_id=request_id, client_id=get_client_id(request))

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
