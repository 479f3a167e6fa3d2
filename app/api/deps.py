"""
Purpose:
- FastAPI dependencies for the search route: the caller's GitHub token,
  an optional caller deadline, and the GitHub client.
- run_until_disconnected ties the outbound search to the caller's connection.
"""

from __future__ import annotations
import asyncio
from typing import Awaitable, Optional, TypeVar

from fastapi import Depends, Request
from starlette.datastructures import Headers

from ..core.errors import Cancelled, InvalidArgument, Unauthenticated
from ..core.logging import get_logger
from ..core.settings import Settings, get_settings
from ..search.github_client import GitHubClient

logger = get_logger(__name__)

DEADLINE_HEADER = "x-request-timeout"

T = TypeVar("T")

def first_credential(headers: Headers, header_name: str) -> str:
    """First value of the token header; Unauthenticated when missing or blank."""
    values = headers.getlist(header_name)
    if not values or not values[0].strip():
        raise Unauthenticated(f"{header_name} is required in metadata")
    return values[0]

def extract_credential(request: Request, cfg: Settings = Depends(get_settings)) -> str:
    """
    Return the first value of the token header; fail closed when it is missing.
    The value is handed back to the route as-is and never logged.
    """
    return first_credential(request.headers, cfg.token_header)

def caller_deadline(request: Request) -> Optional[float]:
    """Seconds the caller is willing to wait, from the optional x-request-timeout header."""
    raw = request.headers.get(DEADLINE_HEADER)
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise InvalidArgument(DEADLINE_HEADER, "must be a number of seconds") from None
    if value <= 0:
        raise InvalidArgument(DEADLINE_HEADER, "must be greater than 0")
    return value

def get_github_client(cfg: Settings = Depends(get_settings)) -> GitHubClient:
    return GitHubClient(cfg)

async def wait_for_disconnect(request: Request) -> None:
    # The body is already consumed, so the next ASGI message is the disconnect.
    while True:
        message = await request.receive()
        if message["type"] == "http.disconnect":
            return

async def run_until_disconnected(request: Request, work: Awaitable[T]) -> T:
    """
    Await `work`, cancelling it as soon as the caller disconnects.
    Errors raised by `work` propagate unchanged; a disconnect raises Cancelled.
    """
    task = asyncio.ensure_future(work)
    watcher = asyncio.ensure_future(wait_for_disconnect(request))
    try:
        await asyncio.wait({task, watcher}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        watcher.cancel()
        if not task.done():
            task.cancel()
            # let the outbound request unwind and close its connection
            await asyncio.wait({task})

    if task.cancelled():
        logger.info("search_cancelled", path=str(request.url.path))
        raise Cancelled("caller disconnected before the search finished")
    return task.result()
