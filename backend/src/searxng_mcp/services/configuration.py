"""Context server configuration surface for the host settings UI.

Installation instructions and default settings ship as package data; the
settings schema is generated from ``SearxngSettings``.
"""

from __future__ import annotations

import json
from importlib import resources
from typing import Any

from ..schemas.settings import ContextServerConfiguration, SearxngSettings

JSON_SCHEMA_DRAFT7 = "http://json-schema.org/draft-07/schema#"

_CONFIGURATION_PACKAGE = "searxng_mcp.configuration"


def _read_configuration_file(name: str) -> str:
    return resources.files(_CONFIGURATION_PACKAGE).joinpath(name).read_text(encoding="utf-8")


def settings_schema() -> dict[str, Any]:
    """Return the JSON schema describing the context server settings."""
    schema = SearxngSettings.model_json_schema()
    return {"$schema": JSON_SCHEMA_DRAFT7, **schema}


def load_installation_instructions() -> str:
    return _read_configuration_file("installation_instructions.md")


def load_default_settings() -> str:
    """Return the default settings document (JSON with ``//`` comments)."""
    return _read_configuration_file("default_settings.jsonc")


def build_context_server_configuration() -> ContextServerConfiguration:
    return ContextServerConfiguration(
        installation_instructions=load_installation_instructions(),
        default_settings=load_default_settings(),
        settings_schema=json.dumps(settings_schema(), indent=2),
    )
