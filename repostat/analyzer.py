from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import httpx
from loguru import logger

from repostat.errors import InvalidUrlError, MissingUrlError, UpstreamError
from repostat.github import DEFAULT_API_URL, GitHubClient
from repostat.models import (
    AggregateStats,
    AnalysisResult,
    Contributor,
    RepositorySummary,
    WeeklyActivity,
)
from repostat.urls import parse_repo_url


def analyze(
    url: str | None,
    credential: str | None = None,
    *,
    base_url: str = DEFAULT_API_URL,
    timeout: float = 30,
    transport: httpx.BaseTransport | None = None,
) -> AnalysisResult:
    """Validate a repository URL and aggregate its statistics.

    Input problems raise before any request is made: ``MissingUrlError`` for
    an empty value, ``InvalidUrlError`` when no ``owner/repo`` path is found.
    """
    if not isinstance(url, str) or not url.strip():
        raise MissingUrlError()

    ident = parse_repo_url(url)
    if ident is None:
        raise InvalidUrlError()

    return aggregate(
        ident.owner,
        ident.name,
        credential,
        base_url=base_url,
        timeout=timeout,
        transport=transport,
    )


def aggregate(
    owner: str,
    repo: str,
    credential: str | None = None,
    *,
    base_url: str = DEFAULT_API_URL,
    timeout: float = 30,
    transport: httpx.BaseTransport | None = None,
) -> AnalysisResult:
    """Fetch metadata, contributors and commit activity and combine them.

    Only a failed metadata lookup is fatal (``UpstreamError``). Contributors
    and commit activity fall back to empty sequences; the reason is logged.
    """
    full_name = f"{owner}/{repo}"
    logger.info("Analyzing {}", full_name)

    with GitHubClient(
        credential, base_url=base_url, timeout=timeout, transport=transport
    ) as github, ThreadPoolExecutor(max_workers=3) as pool:
        repo_future = pool.submit(github.get_repository, owner, repo)
        contributors_future = pool.submit(
            _fetch_contributors, github, owner, repo
        )
        activity_future = pool.submit(_fetch_commit_activity, github, owner, repo)

        summary = _read_summary(repo_future.result(), full_name)
        contributors = contributors_future.result()
        activity = activity_future.result()

    stats = AggregateStats.from_contributors(contributors)
    logger.info(
        "{}: {} contributors, {} commits, {} weeks of activity",
        full_name,
        stats.total_contributors,
        stats.total_commits,
        len(activity),
    )
    return AnalysisResult(
        summary=summary,
        contributors=contributors,
        weekly_activity=activity,
        stats=stats,
    )


# -- per-endpoint reconciliation ---------------------------------------------


def _read_summary(resp: httpx.Response, full_name: str) -> RepositorySummary:
    if not resp.is_success:
        _note_rate_limit(resp, full_name)
        logger.warning(
            "Repository lookup for {} failed: {} {}",
            full_name, resp.status_code, resp.reason_phrase,
        )
        raise UpstreamError(
            resp.status_code, f"GitHub API Error: {_reason(resp)}"
        )
    return RepositorySummary.from_github(resp.json())


def _fetch_contributors(
    github: GitHubClient, owner: str, repo: str
) -> tuple[Contributor, ...]:
    full_name = f"{owner}/{repo}"
    try:
        resp = github.get_contributors(owner, repo)
    except httpx.HTTPError as exc:
        logger.warning("Contributors request for {} failed: {}", full_name, exc)
        return ()

    if resp.status_code == 204:
        logger.info("No contributors for {} (204 No Content)", full_name)
        return ()
    if not resp.is_success:
        _note_rate_limit(resp, full_name)
        logger.warning(
            "Contributors unavailable for {}: {} {}",
            full_name, resp.status_code, resp.reason_phrase,
        )
        return ()

    try:
        data = resp.json()
        if not isinstance(data, list):
            raise ValueError(f"expected a list, got {type(data).__name__}")
        return tuple(Contributor.from_github(raw) for raw in data)
    except (ValueError, KeyError, TypeError) as exc:
        logger.warning("Malformed contributors payload for {}: {}", full_name, exc)
        return ()


def _fetch_commit_activity(
    github: GitHubClient, owner: str, repo: str
) -> tuple[WeeklyActivity, ...]:
    """Weekly commit activity, or ``()`` when GitHub can't provide it yet.

    Every unavailable state yields the same empty tuple; they differ only in
    what gets logged.
    """
    full_name = f"{owner}/{repo}"
    try:
        resp = github.get_commit_activity(owner, repo)
    except httpx.HTTPError as exc:
        logger.error("Commit activity request for {} failed: {}", full_name, exc)
        return ()

    if resp.status_code == 202:
        logger.info(
            "Commit activity for {} is being computed by GitHub (202 Accepted)",
            full_name,
        )
        return ()
    if resp.status_code == 204:
        logger.info("Commit activity for {} has no content (204 No Content)", full_name)
        return ()
    if not resp.is_success:
        _note_rate_limit(resp, full_name)
        logger.error(
            "GitHub API error for commit activity {}: {} {}",
            full_name, resp.status_code, resp.reason_phrase,
        )
        return ()

    try:
        data = resp.json()
    except ValueError as exc:
        logger.error("Unreadable commit activity for {}: {}", full_name, exc)
        return ()

    if not isinstance(data, list):
        logger.info(
            "Commit activity for {} is still pending (got {} instead of a list)",
            full_name, type(data).__name__,
        )
        return ()

    try:
        return tuple(WeeklyActivity.from_github(raw) for raw in data)
    except (ValueError, KeyError, TypeError) as exc:
        logger.error("Malformed commit activity for {}: {}", full_name, exc)
        return ()


# -- helpers ------------------------------------------------------------------


def _reason(resp: httpx.Response) -> str:
    if resp.reason_phrase:
        return resp.reason_phrase
    try:
        return str(resp.json().get("message") or resp.status_code)
    except (ValueError, AttributeError):
        return str(resp.status_code)


def _note_rate_limit(resp: httpx.Response, full_name: str) -> None:
    if resp.headers.get("x-ratelimit-remaining") != "0":
        return
    reset = resp.headers.get("x-ratelimit-reset", "")
    if reset.isdigit():
        reset = datetime.fromtimestamp(int(reset), timezone.utc).isoformat()
    logger.warning(
        "GitHub rate limit exhausted while fetching {} (resets at {})",
        full_name, reset or "unknown",
    )
