"""Settings and launch schemas for the SearXNG context server.

The length limits and character pattern declared here are advertised to the
host through the generated JSON schema. They are not enforced on parse; the
validators in ``searxng_mcp.services.settings_validator`` enforce them so that
each failure carries its specific error kind.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# User-Agent characters accepted by the validator, expressed for the UI schema
USER_AGENT_PATTERN = r"^[a-zA-Z0-9 /_.()-]+$"


class SearxngSettings(BaseModel):
    """User-supplied settings for the SearXNG context server."""

    model_config = ConfigDict(frozen=True, strict=True, extra="ignore")

    searxng_url: str = Field(
        ...,
        description="URL of the SearXNG instance (required)",
        json_schema_extra={
            "maxLength": 2048,
            "format": "uri",
            "examples": ["https://searx.be", "https://search.disroot.org"],
        },
    )
    auth_username: str | None = Field(
        None,
        description="HTTP Basic Auth username (optional)",
        json_schema_extra={"maxLength": 256},
    )
    auth_password: str | None = Field(
        None,
        description="HTTP Basic Auth password (optional)",
        json_schema_extra={"maxLength": 256},
    )
    user_agent: str | None = Field(
        None,
        description="Custom User-Agent header (optional)",
        json_schema_extra={"maxLength": 256, "pattern": USER_AGENT_PATTERN},
    )
    http_proxy: str | None = Field(
        None,
        description="HTTP proxy URL (optional)",
        json_schema_extra={"maxLength": 2048, "format": "uri"},
    )
    https_proxy: str | None = Field(
        None,
        description="HTTPS proxy URL (optional)",
        json_schema_extra={"maxLength": 2048, "format": "uri"},
    )
    no_proxy: str | None = Field(
        None,
        description="Comma-separated list of hosts to bypass proxy (optional)",
        json_schema_extra={"maxLength": 1024},
    )


@dataclass(frozen=True)
class LaunchDescriptor:
    """Process invocation handed back to the host.

    Attributes:
        executable: Path of the program to run, passed through from the host.
        arguments: Ordered argument list.
        environment: Ordered ``(name, value)`` pairs with unique names.

    """

    executable: str
    arguments: tuple[str, ...] = ()
    environment: tuple[tuple[str, str], ...] = ()

    def env_dict(self) -> dict[str, str]:
        return dict(self.environment)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary, preserving environment order."""
        return {
            "executable": self.executable,
            "arguments": list(self.arguments),
            "environment": [[name, value] for name, value in self.environment],
        }


@dataclass(frozen=True)
class ContextServerConfiguration:
    """Static configuration surface rendered by the host settings UI."""

    installation_instructions: str
    default_settings: str
    settings_schema: str
