"""
Purpose:
- Error taxonomy for the search pipeline.
- Each class carries a stable code and the HTTP status the API answers with;
  app.main renders them as {"error": {"code", "message", "details"}}.
"""

from __future__ import annotations
from typing import Any, Dict, Optional


class SearchError(Exception):
    """Base class for every classified failure of a search call."""

    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def add_context(self, context: str) -> "SearchError":
        # Prefixes the message; the classification stays the same.
        self.message = f"{context}: {self.message}"
        self.args = (self.message,)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }

    def __str__(self) -> str:
        return self.message


class Unauthenticated(SearchError):
    code = "UNAUTHENTICATED"
    status_code = 401


class InvalidArgument(SearchError):
    code = "INVALID_ARGUMENT"
    status_code = 400

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"invalid value for '{field}': {reason}", {"field": field})
        self.field = field
        self.reason = reason


class UpstreamError(SearchError):
    """GitHub answered with a non-success status."""

    code = "UPSTREAM_ERROR"
    status_code = 502

    def __init__(self, status: int, reason: str, body: str) -> None:
        super().__init__(
            f"GitHub API returned an error: {status} {reason} "
            f"(status code: {status}, response: {body})",
            {"upstream_status": status},
        )
        self.upstream_status = status
        self.reason = reason
        self.body = body


class ParsingError(SearchError):
    """GitHub answered 2xx but the body is not a search envelope."""

    code = "PARSING_ERROR"
    status_code = 502


class InternalError(SearchError):
    code = "INTERNAL_ERROR"
    status_code = 500


class Cancelled(SearchError):
    """The caller went away before the search finished; nobody reads this reply."""

    code = "CANCELLED"
    status_code = 499
