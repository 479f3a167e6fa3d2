"""
Purpose:
- Expose /api/v1/search/* endpoints backing the GitHub code search orchestrator.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from ..core.settings import Settings, get_settings
from ..search.github_client import GitHubClient
from ..search.schema import SearchQuery, SearchResponse
from ..search.service import search_service
from .deps import caller_deadline, extract_credential, get_github_client, run_until_disconnected

router = APIRouter(prefix="/api/v1/search", tags=["search"])

QUERY_PATH = router.prefix + "/query"

@router.get("/status")
def search_status(cfg: Settings = Depends(get_settings)):
    # Provider config only; never echoes a credential.
    return {
        "ok": True,
        "provider": "github",
        "base_url": cfg.github_base_url,
        "api_version": cfg.github_api_version,
        "timeout_seconds": cfg.github_timeout_seconds,
        "token_header": cfg.token_header,
    }

@router.post("/query", response_model=SearchResponse)
async def search_query(
    request: Request,
    payload: SearchQuery,
    auth_token: str = Depends(extract_credential),
    deadline: Optional[float] = Depends(caller_deadline),
    client: GitHubClient = Depends(get_github_client),
    cfg: Settings = Depends(get_settings),
):
    # A caller that hangs up cancels the outbound GitHub call with it.
    return await run_until_disconnected(
        request,
        search_service(
            payload,
            auth_token=auth_token,
            client=client,
            deadline=deadline,
            web_url=cfg.github_web_url,
        ),
    )
