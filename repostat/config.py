from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv


@dataclass
class Config:
    github_token: str | None = None
    github_api_url: str = "https://api.github.com"
    host: str = "127.0.0.1"
    port: int = 5000
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    request_timeout: float = 30.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Config:
        load_dotenv()

        origins = os.environ.get("CORS_ORIGINS", "*")
        return cls(
            github_token=os.environ.get("GITHUB_TOKEN") or None,
            github_api_url=os.environ.get(
                "GITHUB_API_URL", "https://api.github.com"
            ),
            host=os.environ.get("HOST", "127.0.0.1"),
            port=int(os.environ.get("PORT", "5000")),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            request_timeout=float(os.environ.get("REQUEST_TIMEOUT", "30")),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )
