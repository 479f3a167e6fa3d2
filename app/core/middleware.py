"""
Purpose:
- Reject search calls without a GitHub token before the body is read or parsed.

FastAPI decodes the JSON body before it resolves dependencies, so a dependency
alone would answer "no token + broken body" with a validation error instead of
Unauthenticated. This pure ASGI middleware runs first.
"""

from __future__ import annotations
from typing import Iterable

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from .errors import Unauthenticated
from .logging import get_logger

logger = get_logger(__name__)


class CredentialGuardMiddleware:
    """Answer 401 for guarded paths whose token header is missing or blank."""

    def __init__(self, app: ASGIApp, *, header: str, paths: Iterable[str]) -> None:
        self.app = app
        self.header = header
        self.paths = frozenset(paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"] in self.paths:
            values = Headers(scope=scope).getlist(self.header)
            if not values or not values[0].strip():
                exc = Unauthenticated(f"{self.header} is required in metadata")
                logger.warning("search_failed", path=scope["path"], code=exc.code, error_message=exc.message)
                response = JSONResponse(status_code=exc.status_code, content=exc.to_dict())
                await response(scope, receive, send)
                return
        await self.app(scope, receive, send)
