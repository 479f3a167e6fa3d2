"""
Purpose:
- Turn decoded GitHub items into the service's minimal {file_url, repo} records.
- Items missing either field are dropped silently; partial records are normal noise.
"""

from __future__ import annotations
from typing import Iterable, List

from .schema import GitHubSearchItem, SearchResult

DEFAULT_WEB_URL = "https://github.com"

def extract_file_url(item: GitHubSearchItem) -> str:
    return item.html_url or ""

def extract_repo_url(item: GitHubSearchItem, web_url: str = DEFAULT_WEB_URL) -> str:
    """Repository link built from the repo's full name ("owner/name")."""
    repo = item.repository
    if repo is None or not repo.full_name:
        return ""
    return f"{web_url.rstrip('/')}/{repo.full_name}"

def project_results(items: Iterable[GitHubSearchItem], web_url: str = DEFAULT_WEB_URL) -> List[SearchResult]:
    # Keeps GitHub's order; no dedupe, no cap (per_page already bounds the list).
    out: List[SearchResult] = []
    for it in items:
        file_url = extract_file_url(it)
        repo_url = extract_repo_url(it, web_url)
        if not file_url or not repo_url:
            continue
        out.append(SearchResult(file_url=file_url, repo=repo_url))
    return out
