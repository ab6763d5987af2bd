"""Runtime configuration — env-driven, one settings object per process.

Reads from a ``.env`` file and ``FANFARE_*`` environment variables via
pydantic-settings.  Provider selectors choose between the real delivery
backends and their degraded-mode mocks; ``enforce_production_constraints``
rejects mocks and missing credentials in production.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FanfareConfig(BaseSettings):
    """Process configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export FANFARE_ENVIRONMENT=staging
        export FANFARE_BATCH_SIZE=25
        export FANFARE_EMAIL_PROVIDER=sendgrid
        export FANFARE_SENDGRID_API_KEY=SG.xxxxx

    Or via .env file::

        FANFARE_PARALLEL_THREADS=8
        FANFARE_BACKPRESSURE=reject
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FANFARE_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"
    debug: bool = False

    # Storage
    database_path: Path = Path(".fanfare/notifications.db")
    template_dir: Path | None = None

    # Fan-out
    batch_size: int = Field(default=15, ge=1)
    parallel_threads: int = Field(default=5, ge=1)
    queue_capacity: int = Field(default=100, ge=0)
    backpressure: Literal["block", "reject"] = "block"
    shutdown_timeout_seconds: float = Field(default=60.0, gt=0)
    request_timeout_seconds: float = Field(default=60.0, gt=0)

    # Provider selection
    email_provider: Literal["sendgrid", "mock"] = "mock"
    sms_provider: Literal["http", "mock"] = "mock"
    push_provider: Literal["gotify", "mock"] = "mock"
    in_app_provider: Literal["parent", "mock"] = "mock"

    # Email
    email_from: str = "noreply@fanfare.local"
    sendgrid_api_key: str = ""

    # SMS gateway
    sms_api_url: str = ""
    sms_api_key: str = ""
    sms_sender_id: str = "Fanfare"

    # Push (Gotify)
    gotify_url: str = ""
    gotify_token: str = ""

    # Parent service (in-app)
    parent_server_url: str = ""
    parent_api_key: str = ""
    parent_secret_key: str = ""

    @property
    def is_production(self) -> bool:
        """Whether running in production mode."""
        return self.environment == "production"

    @property
    def provider_selection(self) -> dict[str, str]:
        """Return the configured backend per provider kind."""
        return {
            "email": self.email_provider,
            "sms": self.sms_provider,
            "push": self.push_provider,
            "in_app": self.in_app_provider,
        }


# Module-level singleton — import as `from fanfare.config import config`
config = FanfareConfig()
