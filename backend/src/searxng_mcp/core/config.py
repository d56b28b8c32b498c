"""Configuration management for the SearXNG MCP launcher.

Uses Pydantic Settings for type-safe, environment-based configuration.
"""

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_LOG_FORMATS = ("text", "json")


class LauncherConfig(BaseSettings):
    """Launcher configuration with environment variable support."""

    # Context server identity, used to look up the user's settings in the host
    context_server_id: str = Field("mcp-server-searxng", alias="SEARXNG_MCP_CONTEXT_SERVER_ID")

    # npm package launched by the host (pinned version, update after review)
    package_name: str = Field("mcp-searxng", alias="SEARXNG_MCP_PACKAGE_NAME")
    package_version: str = Field("0.4.1", alias="SEARXNG_MCP_PACKAGE_VERSION")
    # Entry point relative to the extension working directory
    server_path: str = Field("node_modules/mcp-searxng/dist/index.js", alias="SEARXNG_MCP_SERVER_PATH")

    # Reject a trailing slash on searxng_url instead of stripping it
    strict_trailing_slash: bool = Field(False, alias="SEARXNG_MCP_STRICT_TRAILING_SLASH")

    # Logging configuration
    environment: str = Field("development", alias="SEARXNG_MCP_ENVIRONMENT")
    log_level: str = Field("INFO", alias="SEARXNG_MCP_LOG_LEVEL")
    log_format: str = Field("text", alias="SEARXNG_MCP_LOG_FORMAT")  # text or json

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        level = str(v).strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"Log level must be one of {', '.join(VALID_LOG_LEVELS)}; got '{v}'")
        return level

    @field_validator("log_format", mode="before")
    @classmethod
    def _validate_log_format(cls, v: str) -> str:
        fmt = str(v).strip().lower()
        if fmt not in VALID_LOG_FORMATS:
            raise ValueError(f"Log format must be one of {', '.join(VALID_LOG_FORMATS)}; got '{v}'")
        return fmt

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore unrelated environment variables
    )


def get_config() -> LauncherConfig:
    """Build a fresh configuration instance from the current environment."""
    return LauncherConfig()  # type: ignore[call-arg]


# Global config instance - will be created when first accessed
config = None


def get_config_instance() -> LauncherConfig:
    """Get the global configuration instance, creating it if necessary."""
    global config  # noqa: PLW0603
    if config is None:
        config = get_config()
    return config
