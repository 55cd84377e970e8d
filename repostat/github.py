from __future__ import annotations

from types import TracebackType

import httpx

DEFAULT_API_URL = "https://api.github.com"


class GitHubClient:
    """Issues the three repository lookups used by the analyzer.

    Methods return the raw ``httpx.Response``; interpreting status codes is
    left to the caller since each lookup has its own failure policy.
    """

    def __init__(
        self,
        token: str | None = None,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 30,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "Cache-Control": "no-cache",
            "User-Agent": "repostat",
        }
        if token:
            headers["Authorization"] = f"token {token}"

        self._client = httpx.Client(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    # -- context manager ---------------------------------------------------

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    # -- public API ---------------------------------------------------------

    def get_repository(self, owner: str, repo: str) -> httpx.Response:
        return self._client.get(f"/repos/{owner}/{repo}")

    def get_contributors(self, owner: str, repo: str) -> httpx.Response:
        """First page of contributors, as ordered by GitHub."""
        return self._client.get(f"/repos/{owner}/{repo}/contributors")

    def get_commit_activity(self, owner: str, repo: str) -> httpx.Response:
        """Last year of weekly commit counts.

        GitHub computes this lazily and answers ``202 Accepted`` until the
        data is ready.
        """
        return self._client.get(f"/repos/{owner}/{repo}/stats/commit_activity")

    def close(self) -> None:
        self._client.close()
