"""Settings validation and launch command construction for the SearXNG MCP context server."""

from .core.exceptions import SchemaError, SettingsError, SettingsValidationError
from .extension import ContextServerHost, SearxngContextServerExtension
from .schemas.settings import ContextServerConfiguration, LaunchDescriptor, SearxngSettings
from .services.command_builder import build_launch_descriptor
from .services.settings_validator import validate_settings

__all__ = [
    "ContextServerConfiguration",
    "ContextServerHost",
    "LaunchDescriptor",
    "SchemaError",
    "SearxngContextServerExtension",
    "SearxngSettings",
    "SettingsError",
    "SettingsValidationError",
    "build_launch_descriptor",
    "validate_settings",
]
