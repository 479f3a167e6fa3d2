"""
Purpose:
- Pydantic models for search in/out so the API is self-documenting and stable.
- Explicit models for the GitHub code search envelope, validated at the decode boundary.
"""

from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

class SortOption(str, Enum):
    UNSPECIFIED = "unspecified"
    INDEXED = "indexed"

class OrderOption(str, Enum):
    UNSPECIFIED = "unspecified"
    ASC = "asc"
    DESC = "desc"

class SearchQuery(BaseModel):
    search_term: str = Field(..., min_length=1, description="Code search text")
    user: Optional[str] = Field(None, description="Restrict the search to one GitHub user/org")
    sort: SortOption = SortOption.UNSPECIFIED
    order: OrderOption = OrderOption.UNSPECIFIED
    # 0 / null means "not provided"; range checks happen in params.build_query_params
    page: Optional[int] = Field(None, description="Result page, >= 1")
    per_page: Optional[int] = Field(None, description="Results per page, 1..100")

class SearchResult(BaseModel):
    file_url: str
    repo: str

class SearchResponse(BaseModel):
    results: List[SearchResult] = []

# --- GitHub envelope (only the fields we read; everything else is ignored) ---

class GitHubRepository(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    node_id: Optional[str] = None
    name: Optional[str] = None
    full_name: Optional[str] = None
    private: bool = False
    html_url: Optional[str] = None
    description: Optional[str] = None

class GitHubSearchItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    path: Optional[str] = None
    html_url: Optional[str] = None
    repository: Optional[GitHubRepository] = None

class GitHubCodeSearchResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    total_count: int = 0
    incomplete_results: bool = False
    items: List[GitHubSearchItem]
