from __future__ import annotations

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel

from repostat.analyzer import analyze
from repostat.config import Config
from repostat.errors import MissingUrlError, RepoStatError


class RepoStatsRequest(BaseModel):
    url: str | None = None


def create_app(
    config: Config | None = None,
    transport: httpx.BaseTransport | None = None,
) -> FastAPI:
    """Build the API app. ``transport`` replaces the network for GitHub calls."""
    config = config or Config.from_env()

    app = FastAPI(title="repostat", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RepoStatError)
    async def repostat_error_handler(request: Request, exc: RepoStatError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.debug("Rejected request body on {}: {}", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": MissingUrlError().message})

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.opt(exception=exc).error("Unhandled error on {}", request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.post("/api/repo-stats")
    def repo_stats(payload: RepoStatsRequest):
        """Summary, contributors, weekly activity and stats for one repository."""
        result = analyze(
            payload.url,
            config.github_token,
            base_url=config.github_api_url,
            timeout=config.request_timeout,
            transport=transport,
        )
        return JSONResponse(content=result.to_dict())

    return app
