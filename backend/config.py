"""Centralized configuration: every env var is read here.

A ``.env`` file (found by walking up from this module) is loaded first.
Variables already set in the process environment win over it.
"""

import os

from dotenv import load_dotenv


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")
        self.port: int = int(os.getenv("PORT", "3000"))
        self.public_dir: str = os.getenv("PUBLIC_DIR", "public")

        # World Air Quality Index (aqicn.org)
        self.aqicn_api_token: str | None = os.getenv("AQICN_API_TOKEN") or None
        self.aqicn_base_url: str = os.getenv("AQICN_BASE_URL", "https://api.waqi.info")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return list of missing required env vars for AQI lookups."""
        required = ["AQICN_API_TOKEN"]
        return [var for var in required if not getattr(self, var.lower())]


def load_settings(env_file: str | os.PathLike | None = None) -> Settings:
    """Load ``env_file`` (default: nearest ``.env``) into the environment, then read settings."""
    load_dotenv(env_file)
    return Settings()


settings = load_settings()
