from __future__ import annotations

import re

from repostat.models import RepoIdentifier

_REPO_URL_RE = re.compile(
    r"github\.com[/:]+([^/\s?#]+?)/(?!\.git(?:[/?#]|$))([^/\s?#]+?)(?:\.git)?(?:[/?#].*)?$",
    re.IGNORECASE,
)


def parse_repo_url(url: object) -> RepoIdentifier | None:
    """Extract ``owner/name`` from a GitHub repository URL.

    Only the first two path segments after the host count, so
    ``https://github.com/octo/cat/tree/main`` and ``git@github.com:octo/cat.git``
    both give ``octo/cat``. Returns ``None`` for anything else.
    """
    if not isinstance(url, str):
        return None
    match = _REPO_URL_RE.search(url.strip())
    if not match:
        return None
    return RepoIdentifier(owner=match.group(1), name=match.group(2))
