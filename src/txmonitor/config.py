"""Configuration management for the monitoring service."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PORT = 8082


class Settings(BaseSettings):
    """Service configuration, read from MONITORING_SERVICE_* variables."""

    model_config = SettingsConfigDict(
        env_prefix="MONITORING_SERVICE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    service_name: str = "monitoring-service"
    host: str = "localhost"
    port: int = Field(DEFAULT_PORT, ge=0, le=65535)
    log_level: str = "INFO"

    # Connection limits
    max_request_size: int = Field(64 * 1024, gt=0)
    io_timeout: float = Field(10.0, gt=0)
    max_connections: int = Field(256, gt=0)
