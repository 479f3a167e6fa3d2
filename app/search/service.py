"""
Purpose:
- The "service" orchestrates credential -> params -> GitHub call -> projection -> response.
- Linear and stateless: any stage's SearchError short-circuits the rest, class unchanged.
"""

from __future__ import annotations
from typing import Optional

from ..core.errors import SearchError
from ..core.logging import get_logger
from ..core.settings import settings
from .github_client import GitHubClient
from .params import build_query_params
from .projector import project_results
from .schema import SearchQuery, SearchResponse

logger = get_logger(__name__)

async def search_service(
    payload: SearchQuery,
    *,
    auth_token: str,
    client: GitHubClient,
    deadline: Optional[float] = None,
    web_url: Optional[str] = None,
) -> SearchResponse:
    # auth_token comes from app.api.deps.extract_credential; never log it.
    logger.info("search_request_received", search_term=payload.search_term, user=payload.user)

    github_params = build_query_params(
        sort=payload.sort,
        order=payload.order,
        page=payload.page,
        per_page=payload.per_page,
    )

    try:
        items = await client.search_code(
            payload.search_term,
            payload.user,
            auth_token,
            github_params,
            deadline=deadline,
        )
    except SearchError as e:
        e.add_context("failed to search files on GitHub")
        raise

    results = project_results(items, web_url or settings.github_web_url)
    logger.info("search_completed", items=len(items), results=len(results))
    return SearchResponse(results=results)
