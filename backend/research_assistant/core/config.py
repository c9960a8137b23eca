"""Application configuration and settings management."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="RESEARCH_ASSISTANT_", extra="ignore")

    app_name: str = Field(default="Research Assistant API", description="Human readable application name.")
    environment: Literal["local", "development", "staging", "production"] = Field(
        default="local",
        description="Deployment environment name.",
    )
    database_url: str = Field(
        default="sqlite:///./research_assistant.db",
        description="SQLAlchemy URL of the users, history and submissions database.",
    )
    chat_webhook_url: str = Field(
        default="http://localhost:5678/webhook/chat",
        description="Workflow webhook answering chat messages.",
    )
    submission_webhook_url: str = Field(
        default="http://localhost:5678/webhook/submission",
        description="Workflow webhook receiving new source submissions.",
    )
    review_webhook_url: str = Field(
        default="http://localhost:5678/webhook/review",
        description="Workflow webhook receiving admin review decisions.",
    )
    webhook_timeout: float = Field(default=60.0, gt=0, description="Seconds to wait for a webhook reply.")
    history_limit: int = Field(default=10, ge=1, description="Number of past exchanges listed per user.")
    use_mock_history: bool = Field(
        default=True,
        description="Serve the built-in sample history to members without stored exchanges.",
    )
    render_strategy: Literal["lite", "markdown"] = Field(
        default="lite",
        description="How non-table text of chat responses is turned into HTML.",
    )
    cors_origins: list[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins.")


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()


settings = get_settings()
