"""
Shared configuration management for the movie metadata proxy.
"""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_TMDB_BASE_URL = "https://api.themoviedb.org/3"


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Environment
    env: str = Field(default="local", validation_alias="PROXY_ENV")
    log_level: str = Field(default="info", validation_alias="LOG_LEVEL")

    # Listening socket
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=3001, validation_alias="PORT")

    # Upstream API
    tmdb_base_url: str = Field(default=DEFAULT_TMDB_BASE_URL, validation_alias="TMDB_BASE_URL")
    tmdb_api_key: Optional[str] = Field(default=None, validation_alias="TMDB_API_KEY")
    # None keeps the httpx client default
    tmdb_timeout_seconds: Optional[float] = Field(default=None, validation_alias="TMDB_TIMEOUT_SECONDS")

    # Browser access
    cors_origin: str = Field(default="*", validation_alias="CORS_ORIGIN")

    @property
    def cors_origins(self) -> List[str]:
        """Allowed origins, split from the comma separated setting."""
        origins = [origin.strip() for origin in self.cors_origin.split(",")]
        return [origin for origin in origins if origin]


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str

    def __init__(self, service_name: str, **kwargs):
        super().__init__(service_name=service_name, **kwargs)


def get_config(service_name: str) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name)
