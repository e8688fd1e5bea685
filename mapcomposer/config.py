"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    google_places_api_key: str = ""
    mapbox_access_token: str = ""
    mapcomposer_env: str = "development"
    mapcomposer_log_level: str = "info"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # CORS
    cors_origins: list[str] = ["*"]

    # Upstream timeouts (seconds)
    map_fetch_timeout_seconds: float = 15.0
    upstream_timeout_seconds: float = 10.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def google_places_configured(self) -> bool:
        return bool(self.google_places_api_key)

    @property
    def mapbox_configured(self) -> bool:
        return bool(self.mapbox_access_token)
