"""Configuration for the homework assigner.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The token variable is `OAUTH_TOKEN`. Nothing else in the package reads the
environment; the client receives its credential from these settings or from
an explicit constructor argument.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from homework_assigner.logging import normalize_log_level

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_USER_AGENT = "homework-assigner"


class AssignerSettings(BaseSettings):
    """Settings for the homework assigner.

    Environment variables:
    - OAUTH_TOKEN
    - GITHUB_BASE_URL         (optional)
    - GITHUB_USER_AGENT       (optional)
    - GITHUB_TIMEOUT_SECONDS  (optional)
    - LOG_LEVEL               (optional)
    - LOG_FILE                (optional)

    Notes:
        Tests can point at a different env file via
        `AssignerSettings(_env_file=path_to_env)`.
    """

    github_token: str = Field(
        default="",
        validation_alias="OAUTH_TOKEN",
        description="GitHub token used for API authentication",
    )
    github_base_url: str = Field(
        default=DEFAULT_BASE_URL,
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        validation_alias="GITHUB_USER_AGENT",
        description="User-Agent header sent with every request",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        validation_alias="GITHUB_TIMEOUT_SECONDS",
        description="Per-request timeout in seconds",
    )

    # Prompts share the terminal with log output, so stay quiet by default.
    log_level: str = Field(
        default="WARNING",
        validation_alias="LOG_LEVEL",
        description="Root logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_file: Path | None = Field(
        default=None,
        validation_alias="LOG_FILE",
        description="Append JSON logs to this file instead of stderr",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_log_level(cls, value: object) -> object:
        return normalize_log_level(value) if isinstance(value, str) else value

    def require_token(self) -> str:
        """Return the configured token, raising if it is blank."""

        token = self.github_token.strip()
        if not token:
            raise ValueError("OAUTH_TOKEN is required")
        return token
