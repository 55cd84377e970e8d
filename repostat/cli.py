from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime, timezone

import httpx
from loguru import logger

from repostat.analyzer import analyze
from repostat.config import Config
from repostat.errors import RepoStatError
from repostat.models import AnalysisResult


def cmd_analyze(config: Config, url: str, *, as_json: bool = False) -> None:
    """Analyze one repository and print the result."""
    try:
        result = analyze(
            url,
            config.github_token,
            base_url=config.github_api_url,
            timeout=config.request_timeout,
        )
    except RepoStatError as exc:
        logger.error("{}", exc.message)
        sys.exit(1)
    except httpx.HTTPError as exc:
        logger.opt(exception=True).debug("Request to GitHub failed")
        logger.error("Could not reach GitHub: {}", exc)
        sys.exit(1)
    except Exception as exc:
        logger.opt(exception=True).debug("Analysis of {} failed", url)
        logger.error("Could not analyze {}: {}", url, type(exc).__name__)
        sys.exit(1)

    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
        return

    _print_report(result)


def cmd_serve(config: Config, *, host: str | None = None, port: int | None = None) -> None:
    """Run the HTTP API."""
    import uvicorn

    from repostat.server import create_app

    uvicorn.run(
        create_app(config),
        host=host or config.host,
        port=port or config.port,
        log_config=None,
    )


def _print_report(result: AnalysisResult) -> None:
    summary, stats = result.summary, result.stats

    print(f"\n{'=' * 60}")
    print(f" {summary.name}")
    print(f"{'=' * 60}")
    if summary.description:
        print(f"  {summary.description}\n")
    print(f"  Stars             : {summary.stars}")
    print(f"  Forks             : {summary.forks}")
    print(f"  Open issues       : {summary.open_issues}")
    print(f"  Watchers          : {summary.watchers}")
    print(f"  Last push         : {summary.last_push or 'n/a'}")
    print(f"  Contributors      : {stats.total_contributors}")
    print(f"  Total commits     : {stats.total_commits}")
    print(f"  Avg / contributor : {stats.to_dict()['averageCommitsPerContributor']}")
    print(f"{'=' * 60}\n")

    if result.contributors:
        print("  [CONTRIBUTORS]")
        for c in result.contributors:
            print(f"    {c.login:<24} {c.contributions}")
        print()

    if result.weekly_activity:
        print("  [WEEKLY COMMITS]")
        for w in result.weekly_activity:
            week = datetime.fromtimestamp(w.week, timezone.utc).strftime("%Y-%m-%d")
            print(f"    {week}  {w.total:>5}  {' '.join(str(d) for d in w.days)}")
        print()
    else:
        print("  No weekly commit activity available yet.\n")


class _InterceptHandler(logging.Handler):
    """Route stdlib logging (httpx, uvicorn, etc.) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1
        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _setup_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> — "
            "<level>{message}</level>"
        ),
    )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).handlers = [_InterceptHandler()]
        logging.getLogger(name).propagate = False


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="repostat",
        description="Summarize a GitHub repository's contributors and commit activity",
    )
    sub = parser.add_subparsers(dest="command")

    analyze_p = sub.add_parser("analyze", help="Analyze a repository by URL")
    analyze_p.add_argument("url", help="Repository URL, e.g. https://github.com/owner/repo")
    analyze_p.add_argument(
        "--json",
        action="store_true",
        help="Print the raw result as JSON instead of a report",
    )

    serve_p = sub.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", default=None, help="Bind address (default: env HOST)")
    serve_p.add_argument(
        "--port",
        type=int,
        default=None,
        help="Listen port (default: env PORT or 5000)",
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = Config.from_env()
    _setup_logging(config.log_level)

    if args.command == "analyze":
        cmd_analyze(config, args.url, as_json=args.json)
    elif args.command == "serve":
        cmd_serve(config, host=args.host, port=args.port)
