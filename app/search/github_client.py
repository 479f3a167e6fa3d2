"""
Purpose:
- Query the GitHub code search API (GET /search/code) for one request.
- Decode the JSON envelope into explicit models; never hand back raw dicts.

Notes:
- One outbound call per invocation; no retries, no caching.
- The whole call (connect, send, body read) is bounded by one overall deadline;
  httpx's own timeout only bounds each phase.
- Cancelling the awaiting task (see app.api.deps.run_until_disconnected) aborts
  the request and releases the connection.
- The token only ever goes into the Authorization header; it is not logged.
"""

from __future__ import annotations
import asyncio
from typing import Dict, List, Mapping, Optional

import httpx
from pydantic import ValidationError

from ..core.errors import InternalError, ParsingError, UpstreamError
from ..core.logging import get_logger
from ..core.settings import Settings, settings as default_settings
from .params import ALLOWED_KEYS
from .schema import GitHubCodeSearchResponse, GitHubSearchItem

logger = get_logger(__name__)

SEARCH_CODE_PATH = "/search/code"
# Enough of an error body to diagnose a rejection without echoing megabytes back.
MAX_ERROR_BODY_CHARS = 2000


def build_query(search_term: str, user: Optional[str]) -> str:
    # GitHub's query language: qualifiers live inside q, space separated.
    if user:
        return f"{search_term} user:{user}"
    return search_term


def _api_params(search_term: str, user: Optional[str], github_params: Mapping[str, str]) -> Dict[str, str]:
    params = {"q": build_query(search_term, user)}
    for key, value in github_params.items():
        if key in ALLOWED_KEYS:
            params[key] = value
    return params


def _error_body(resp: httpx.Response) -> str:
    body = resp.text
    if len(body) > MAX_ERROR_BODY_CHARS:
        return body[:MAX_ERROR_BODY_CHARS] + "..."
    return body


class GitHubClient:
    """Thin async client for the GitHub code search endpoint.

    Example usage:
        client = GitHubClient(settings)
        items = await client.search_code("foo", "bar", token, {"sort": "indexed"})

    A fresh httpx.AsyncClient is opened per call, so instances hold no
    per-request state and can be shared between concurrent requests.
    """

    def __init__(
        self,
        cfg: Optional[Settings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        cfg = cfg or default_settings
        self.base_url = cfg.github_base_url.rstrip("/")
        self.timeout = cfg.github_timeout_seconds
        self.api_version = cfg.github_api_version
        self.accept = cfg.github_accept
        # Injected in tests (httpx.MockTransport)
        self._transport = transport

    def _headers(self, auth_token: str) -> Dict[str, str]:
        return {
            "Accept": self.accept,
            "Authorization": f"Bearer {auth_token}",
            "X-GitHub-Api-Version": self.api_version,
        }

    def _effective_timeout(self, deadline: Optional[float]) -> float:
        # The caller's deadline can only tighten the configured bound.
        if deadline is not None and deadline > 0:
            return min(self.timeout, deadline)
        return self.timeout

    async def search_code(
        self,
        search_term: str,
        user: Optional[str],
        auth_token: str,
        github_params: Mapping[str, str],
        *,
        deadline: Optional[float] = None,
    ) -> List[GitHubSearchItem]:
        """
        Search code on GitHub and return the decoded items, in GitHub's order.

        Raises:
            UpstreamError: GitHub answered with a non-2xx status.
            ParsingError: the 2xx body is not a code search envelope.
            InternalError: the request could not be made (connect error, timeout).
        """
        params = _api_params(search_term, user, github_params)
        timeout = self._effective_timeout(deadline)

        try:
            resp = await asyncio.wait_for(self._get(params, auth_token, timeout), timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise InternalError(f"failed to make request: timed out after {timeout:g}s") from e
        except httpx.HTTPError as e:
            raise InternalError(f"failed to make request: {e!r}") from e

        if not resp.is_success:
            body = _error_body(resp)
            logger.warning(
                "github_api_error",
                status_code=resp.status_code,
                reason=resp.reason_phrase,
            )
            raise UpstreamError(resp.status_code, resp.reason_phrase, body)

        return self._decode(resp)

    async def _get(self, params: Dict[str, str], auth_token: str, timeout: float) -> httpx.Response:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=self._transport,
        ) as client:
            return await client.get(SEARCH_CODE_PATH, params=params, headers=self._headers(auth_token))

    @staticmethod
    def _decode(resp: httpx.Response) -> List[GitHubSearchItem]:
        try:
            envelope = GitHubCodeSearchResponse.model_validate_json(resp.content)
        except ValidationError as e:
            raise ParsingError(
                f"failed to decode response: {e.error_count()} error(s): {e.errors(include_url=False)[:3]}"
            ) from e

        logger.debug(
            "github_search_decoded",
            total_count=envelope.total_count,
            incomplete_results=envelope.incomplete_results,
            items=len(envelope.items),
        )
        return envelope.items
