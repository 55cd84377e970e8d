from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RepoIdentifier:
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class RepositorySummary:
    """Repository metadata as reported by GitHub, without derived fields."""

    name: str
    description: str | None
    stars: int
    forks: int
    open_issues: int
    watchers: int
    last_push: str | None

    @classmethod
    def from_github(cls, raw: dict) -> RepositorySummary:
        return cls(
            name=raw["name"],
            description=raw.get("description"),
            stars=raw.get("stargazers_count", 0),
            forks=raw.get("forks_count", 0),
            open_issues=raw.get("open_issues_count", 0),
            watchers=raw.get("watchers_count", 0),
            last_push=raw.get("pushed_at"),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "stars": self.stars,
            "forks": self.forks,
            "openIssues": self.open_issues,
            "watchers": self.watchers,
            "lastPushTimestamp": self.last_push,
        }


@dataclass(frozen=True)
class Contributor:
    login: str
    avatar_url: str
    contributions: int

    @classmethod
    def from_github(cls, raw: dict) -> Contributor:
        return cls(
            login=raw["login"],
            avatar_url=raw.get("avatar_url") or "",
            contributions=int(raw["contributions"]),
        )

    def to_dict(self) -> dict:
        return {
            "login": self.login,
            "avatarUrl": self.avatar_url,
            "contributionCount": self.contributions,
        }


@dataclass(frozen=True)
class WeeklyActivity:
    """One week of the ``stats/commit_activity`` series.

    ``week`` is the Unix timestamp of the week's Sunday and ``days`` holds
    seven daily commit counts starting on that Sunday.
    """

    total: int
    week: int
    days: tuple[int, ...]

    @classmethod
    def from_github(cls, raw: dict) -> WeeklyActivity:
        days = tuple(int(d) for d in raw["days"])
        if len(days) != 7:
            raise ValueError(f"expected 7 daily counts, got {len(days)}")
        return cls(total=int(raw["total"]), week=int(raw["week"]), days=days)

    def to_dict(self) -> dict:
        return {
            "totalCommits": self.total,
            "weekStartTimestamp": self.week,
            "dailyCounts": list(self.days),
        }


@dataclass(frozen=True)
class AggregateStats:
    total_contributors: int
    total_commits: int
    average_commits: float

    @classmethod
    def from_contributors(cls, contributors: tuple[Contributor, ...]) -> AggregateStats:
        """Derive stats from the contributor list only.

        The commit total never comes from the weekly activity series, even
        when the two GitHub sources disagree.
        """
        total = sum(c.contributions for c in contributors)
        count = len(contributors)
        return cls(
            total_contributors=count,
            total_commits=total,
            average_commits=total / count if count else 0.0,
        )

    def to_dict(self) -> dict:
        return {
            "totalContributors": self.total_contributors,
            "totalCommits": self.total_commits,
            "averageCommitsPerContributor": f"{self.average_commits:.1f}",
        }


@dataclass(frozen=True)
class AnalysisResult:
    summary: RepositorySummary
    contributors: tuple[Contributor, ...]
    weekly_activity: tuple[WeeklyActivity, ...]
    stats: AggregateStats

    def to_dict(self) -> dict:
        return {
            "summary": self.summary.to_dict(),
            "contributors": [c.to_dict() for c in self.contributors],
            "weeklyActivity": [w.to_dict() for w in self.weekly_activity],
            "stats": self.stats.to_dict(),
        }
