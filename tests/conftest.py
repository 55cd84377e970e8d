from __future__ import annotations

import httpx
import pytest
from loguru import logger

REPO_PAYLOAD = {
    "name": "cat",
    "full_name": "octo/cat",
    "description": "A cat",
    "stargazers_count": 42,
    "forks_count": 7,
    "open_issues_count": 3,
    "watchers_count": 42,
    "pushed_at": "2026-10-01T12:00:00Z",
}

CONTRIBUTORS_PAYLOAD = [
    {"login": "a", "avatar_url": "https://avatars.example/a", "contributions": 10},
    {"login": "b", "avatar_url": "https://avatars.example/b", "contributions": 5},
]

ACTIVITY_PAYLOAD = [
    {"total": 3, "week": 1759017600, "days": [0, 1, 0, 2, 0, 0, 0]},
    {"total": 100, "week": 1759622400, "days": [10, 20, 30, 40, 0, 0, 0]},
]


class FakeGitHub:
    """Serves canned ``(status, json)`` pairs per path and records requests."""

    def __init__(self, routes: dict[str, tuple[int, object]] | None = None) -> None:
        self.routes = {
            "/repos/octo/cat": (200, REPO_PAYLOAD),
            "/repos/octo/cat/contributors": (200, CONTRIBUTORS_PAYLOAD),
            "/repos/octo/cat/stats/commit_activity": (200, ACTIVITY_PAYLOAD),
        }
        self.routes.update(routes or {})
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if isinstance(route, Exception):
            raise route
        status, payload = route
        if payload is None:
            return httpx.Response(status)
        return httpx.Response(status, json=payload)

    def paths(self) -> list[str]:
        return sorted(r.url.path for r in self.requests)


@pytest.fixture
def fake_github():
    return FakeGitHub


@pytest.fixture
def log_records():
    records: list[dict] = []
    handler_id = logger.add(lambda msg: records.append(msg.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
