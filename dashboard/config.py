"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central settings pulled from .env / environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Remote services
    data_service_url: str = "http://localhost:8080/api/stockDashboard"
    dcf_service_url: str = "http://localhost:8080/api"
    request_timeout_seconds: float = 30.0

    # App
    app_env: str = "development"
    log_level: str = "INFO"
    app_version: str = "0.1.0"

    # Rendering
    placeholder: str = "-"
    """Text shown in table cells and overview rows whose value is missing."""

    growth_rate_slots: int = 11
    """Ten yearly projections plus the terminal value."""

    # FastAPI
    fastapi_host: str = "0.0.0.0"
    fastapi_port: int = 8000

    allowed_origins: str = "*"
    """Comma-separated list of allowed CORS origins. Use '*' only in development."""


def parse_cors_origins(origins: str) -> list[str]:
    """Split the comma-separated ``allowed_origins`` setting into a list."""
    if origins.strip() == "*":
        return ["*"]
    return [origin.strip() for origin in origins.split(",") if origin.strip()]


settings = Settings()
