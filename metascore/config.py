"""Centralised settings for metascore.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/74.0.3729.169 Safari/537.36"
)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Catalog site
    # ------------------------------------------------------------------
    base_url: str = field(
        default_factory=lambda: os.environ.get(
            "METASCORE_BASE_URL", "https://www.metacritic.com"
        ).rstrip("/")
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("METASCORE_USER_AGENT", DEFAULT_USER_AGENT)
    )

    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    concurrency: int = field(
        default_factory=lambda: int(os.environ.get("METASCORE_CONCURRENCY", "3"))
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("METASCORE_REQUEST_TIMEOUT", "10.0"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("METASCORE_LOG_LEVEL", "WARNING")
    )


# Module-level singleton — import this everywhere:
#   from metascore.config import settings
settings = Settings()
