"""Application configuration."""

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings

from ctgov_mcp.constants import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from ctgov_mcp.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

KNOWN_ENVIRONMENTS = ("development", "production", "test")
LOG_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


class Settings(BaseSettings):
    """Server settings loaded from environment variables."""

    # Identity
    server_name: str = "ctgov-mcp"
    environment: str = "production"

    # Logging
    log_level: str = "info"

    # Transports (stdio when neither is set)
    use_http: bool = False
    use_sse: bool = False
    host: str = "127.0.0.1"
    port: int = 3000
    sse_path: str = "/mcp"
    cors_origins: str = "*"

    # Outbound HTTP
    request_timeout: float = DEFAULT_TIMEOUT  # 0 disables
    user_agent: str = DEFAULT_USER_AGENT

    # Tools
    enable_legacy_tools: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
        frozen = True

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def transport(self) -> str:
        if self.use_sse:
            return "sse"
        if self.use_http:
            return "http"
        return "stdio"

    @property
    def logging_level(self) -> int:
        return LOG_LEVELS.get(self.log_level.lower(), logging.INFO)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def validate_config(settings: Settings) -> None:
    """Raise ConfigurationError listing every hard error; log soft problems."""
    errors: list[str] = []

    if not settings.server_name:
        errors.append("Server name is required")

    if settings.environment not in KNOWN_ENVIRONMENTS:
        logger.warning(
            "Unknown ENVIRONMENT: %s. Expected: development, production, or test.",
            settings.environment,
        )

    if settings.log_level.lower() not in LOG_LEVELS:
        logger.warning(
            "Unknown LOG_LEVEL: %s. Expected: error, warn, info, or debug.",
            settings.log_level,
        )

    if settings.port <= 0 or settings.port > 65535:
        errors.append(f"Invalid port: {settings.port}. Must be between 1 and 65535.")

    if settings.request_timeout < 0:
        errors.append(
            f"Invalid request timeout: {settings.request_timeout}. Must be >= 0."
        )

    origins = settings.cors_origin_list
    if not origins:
        errors.append("At least one CORS origin must be specified")
    elif settings.environment == "production" and "*" in origins:
        if settings.transport != "stdio":
            logger.warning(
                "CORS allows all origins (*) in production. "
                "Consider restricting CORS_ORIGINS to specific domains."
            )

    if errors:
        raise ConfigurationError(errors)
