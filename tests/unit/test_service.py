"""Tests for the search orchestrator with a recording stand-in for GitHubClient."""

import pytest

from app.core.errors import InvalidArgument, UpstreamError
from app.search.schema import GitHubRepository, GitHubSearchItem, SearchQuery
from app.search.service import search_service
from helpers import TEST_TOKEN


class RecordingClient:
    def __init__(self, items=None, error=None):
        self.items = items or []
        self.error = error
        self.calls = []

    async def search_code(self, search_term, user, auth_token, github_params, *, deadline=None):
        self.calls.append((search_term, user, auth_token, dict(github_params), deadline))
        if self.error is not None:
            raise self.error
        return self.items


def _item(html_url, full_name):
    return GitHubSearchItem(html_url=html_url, repository=GitHubRepository(full_name=full_name))


@pytest.mark.asyncio
async def test_threads_token_and_params_into_one_call():
    client = RecordingClient(items=[_item("https://x/y", "bar/baz")])
    payload = SearchQuery(search_term="foo", user="bar", sort="indexed", order="desc", page=2, per_page=10)

    resp = await search_service(payload, auth_token=TEST_TOKEN, client=client, deadline=3.0)

    assert client.calls == [
        ("foo", "bar", TEST_TOKEN, {"sort": "indexed", "order": "desc", "per_page": "10", "page": "2"}, 3.0)
    ]
    assert [r.model_dump() for r in resp.results] == [
        {"file_url": "https://x/y", "repo": "https://github.com/bar/baz"}
    ]


@pytest.mark.asyncio
async def test_invalid_params_short_circuit_before_call():
    client = RecordingClient()
    payload = SearchQuery(search_term="foo", per_page=101)
    with pytest.raises(InvalidArgument):
        await search_service(payload, auth_token=TEST_TOKEN, client=client)
    assert client.calls == []


@pytest.mark.asyncio
async def test_upstream_error_keeps_class_and_gains_context():
    client = RecordingClient(error=UpstreamError(403, "Forbidden", "{}"))
    with pytest.raises(UpstreamError) as exc:
        await search_service(SearchQuery(search_term="foo"), auth_token=TEST_TOKEN, client=client)
    assert exc.value.message.startswith("failed to search files on GitHub: GitHub API returned an error: 403 Forbidden")
    assert exc.value.status_code == 502


@pytest.mark.asyncio
async def test_custom_web_url():
    client = RecordingClient(items=[_item("https://ghe/x", "a/b")])
    resp = await search_service(
        SearchQuery(search_term="foo"), auth_token=TEST_TOKEN, client=client, web_url="https://ghe"
    )
    assert resp.results[0].repo == "https://ghe/a/b"
