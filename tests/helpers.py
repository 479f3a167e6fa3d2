"""Shared test helpers: canned GitHub payloads, a recording stub and a real socket upstream."""

import asyncio
import json
import time
from typing import Any

import httpx

from app.core.settings import Settings
from app.search.github_client import GitHubClient

TEST_TOKEN = "ghp_test-token-do-not-log"


def github_item(html_url: str | None, full_name: str | None) -> dict[str, Any]:
    """One code search item shaped like GitHub's, with optional holes."""
    item: dict[str, Any] = {"name": "main.go", "path": "cmd/main.go", "sha": "abc123", "score": 1.0}
    if html_url is not None:
        item["html_url"] = html_url
    if full_name is not None:
        item["repository"] = {
            "id": 1,
            "node_id": "R_1",
            "name": full_name.split("/")[-1],
            "full_name": full_name,
            "private": False,
            "html_url": f"https://github.com/{full_name}",
            "description": None,
            "fork": False,
        }
    return item


def envelope(*items: dict[str, Any]) -> dict[str, Any]:
    return {"total_count": len(items), "incomplete_results": False, "items": list(items)}


class GitHubStub:
    """Stands in for api.github.com: records requests, answers with a canned response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.json_body: Any = envelope()
        self.raw_body: bytes | None = None
        self.error: Exception | None = None

    def respond(self, status_code: int = 200, json_body: Any = None, raw_body: bytes | None = None) -> None:
        self.status_code = status_code
        self.json_body = json_body
        self.raw_body = raw_body

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def client(self, **overrides: Any) -> GitHubClient:
        cfg = Settings(github_base_url="https://api.github.test", **overrides)
        return GitHubClient(cfg, transport=httpx.MockTransport(self.handler))


class SocketUpstream:
    """A real TCP server on 127.0.0.1 answering one GET, for timeout and cancellation tests.

    - byte_delay: send a 200 envelope one byte at a time with this pause.
    - silent: read the request and never answer.

    `released` fires when the client side of the connection goes away.
    """

    def __init__(self, body: bytes = b"", *, byte_delay: float = 0.0, silent: bool = False) -> None:
        self.body = body
        self.byte_delay = byte_delay
        self.silent = silent
        self.connected = asyncio.Event()
        self.released = asyncio.Event()
        self.released_at: float | None = None
        self._handlers: set[asyncio.Task] = set()
        self._server: asyncio.AbstractServer | None = None
        self.port = 0

    @property
    def url(self) -> str:
        return f"http://127.0.0.1:{self.port}"

    def client(self, **overrides: Any) -> GitHubClient:
        # explicit transport: no proxy environment for a loopback server
        cfg = Settings(github_base_url=self.url, **overrides)
        return GitHubClient(cfg, transport=httpx.AsyncHTTPTransport())

    async def __aenter__(self) -> "SocketUpstream":
        self._server = await asyncio.start_server(self._handle, "127.0.0.1", 0)
        self.port = self._server.sockets[0].getsockname()[1]
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self._server.close()
        for task in list(self._handlers):
            task.cancel()
        if self._handlers:
            await asyncio.wait(self._handlers, timeout=2)

    async def _handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        task = asyncio.current_task()
        self._handlers.add(task)
        self.connected.set()
        try:
            await reader.readuntil(b"\r\n\r\n")
            if self.silent:
                # returns b"" once the client closes its side
                await reader.read()
                return
            writer.write(
                b"HTTP/1.1 200 OK\r\nContent-Type: application/json\r\n"
                b"Content-Length: %d\r\n\r\n" % len(self.body)
            )
            await writer.drain()
            for i in range(len(self.body)):
                if writer.is_closing():
                    break
                writer.write(self.body[i:i + 1])
                await writer.drain()
                await asyncio.sleep(self.byte_delay)
        except (ConnectionError, asyncio.IncompleteReadError):
            pass
        finally:
            self.released_at = time.monotonic()
            self.released.set()
            writer.close()
            self._handlers.discard(task)


def envelope_bytes(*items: dict[str, Any]) -> bytes:
    return json.dumps(envelope(*items)).encode()
