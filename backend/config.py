"""
Insight service configuration — all environment variables in one place.

Read from environment at runtime.
"""

from __future__ import annotations

import os
from pathlib import Path

_REPO_ROOT = Path(__file__).resolve().parent.parent


class Settings:
    """Application settings from environment variables."""

    # Application
    ENVIRONMENT: str = os.environ.get("INSIGHT_ENVIRONMENT", "development")
    LOG_LEVEL: str = os.environ.get("INSIGHT_LOG_LEVEL", "INFO").upper()

    # Server
    HOST: str = os.environ.get("INSIGHT_HOST", "127.0.0.1")
    PORT: int = int(os.environ.get("INSIGHT_PORT", "4321"))

    # Uploads
    MAX_UPLOAD_BYTES: int = int(os.environ.get("INSIGHT_MAX_UPLOAD_BYTES", str(50 * 1024 * 1024)))

    # Static assets
    STATIC_DIR: Path = Path(os.environ.get("INSIGHT_STATIC_DIR", str(_REPO_ROOT / "frontend" / "public")))


# Singleton instance
settings = Settings()

if settings.MAX_UPLOAD_BYTES <= 0:
    raise RuntimeError("INSIGHT_MAX_UPLOAD_BYTES must be positive")
