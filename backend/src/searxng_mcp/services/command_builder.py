"""Launch descriptor construction for the SearXNG context server.

Turns a host-provided executable, entry point and raw settings payload into
a ``LaunchDescriptor``. Settings are parsed and validated before any of them
reach the environment; the first failure aborts the build.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from ..core.config import get_config_instance
from ..core.exceptions import SchemaError
from ..schemas.settings import LaunchDescriptor, SearxngSettings
from .settings_validator import validate_settings

logger = logging.getLogger(__name__)

# Optional settings fields and the environment variables that carry them, in output order
OPTIONAL_ENV_FIELDS: tuple[tuple[str, str], ...] = (
    ("auth_username", "AUTH_USERNAME"),
    ("auth_password", "AUTH_PASSWORD"),
    ("user_agent", "USER_AGENT"),
    ("http_proxy", "HTTP_PROXY"),
    ("https_proxy", "HTTPS_PROXY"),
    ("no_proxy", "NO_PROXY"),
)


def _describe_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "settings"
        problems.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(problems)


def parse_settings(raw: Mapping[str, Any] | Any) -> SearxngSettings:
    """Deserialize a raw settings payload into a ``SearxngSettings`` record.

    Raises:
        SchemaError: If the payload is not a mapping, ``searxng_url`` is
            missing, or a field has the wrong type.

    """
    try:
        return SearxngSettings.model_validate(raw)
    except ValidationError as exc:
        # Field locations only; pydantic's input echo could carry the password
        locations = [".".join(str(part) for part in error.get("loc", ())) for error in exc.errors()]
        raise SchemaError(_describe_validation_error(exc), details={"fields": locations}) from exc


def build_environment(settings: SearxngSettings) -> tuple[tuple[str, str], ...]:
    """Build the ordered environment for validated settings.

    ``SEARXNG_URL`` always comes first; optional variables follow in a fixed
    order and only when the corresponding field was supplied.
    """
    env: list[tuple[str, str]] = [("SEARXNG_URL", settings.searxng_url)]
    for field, name in OPTIONAL_ENV_FIELDS:
        value = getattr(settings, field)
        if value is not None:
            env.append((name, value))
    return tuple(env)


def build_launch_descriptor(
    executable: str,
    entry_point: str,
    raw_settings: Mapping[str, Any] | None,
    *,
    strict_trailing_slash: bool | None = None,
) -> LaunchDescriptor:
    """Assemble the launch descriptor for the context server process.

    Args:
        executable: Program to run (for example the node binary), passed through unchanged.
        entry_point: Script handed to the program as its only argument, passed through unchanged.
        raw_settings: The user's settings payload, or None when nothing is configured yet.
        strict_trailing_slash: Override the configured trailing-slash policy for searxng_url.

    Returns:
        A fresh ``LaunchDescriptor``. With no settings the environment is empty
        so the host can prompt for configuration instead of failing.

    Raises:
        SchemaError: If the payload shape is invalid.
        SettingsValidationError: If any field fails validation.

    """
    if raw_settings is None:
        logger.info("No context server settings configured; returning unconfigured launch command")
        return LaunchDescriptor(executable=executable, arguments=(entry_point,), environment=())

    if strict_trailing_slash is None:
        strict_trailing_slash = get_config_instance().strict_trailing_slash

    settings = validate_settings(parse_settings(raw_settings), strict_trailing_slash=strict_trailing_slash)
    environment = build_environment(settings)

    logger.debug(
        "Built context server launch command",
        extra={
            "executable": executable,
            "env_names": ",".join(name for name, _ in environment),
        },
    )
    return LaunchDescriptor(executable=executable, arguments=(entry_point,), environment=environment)
