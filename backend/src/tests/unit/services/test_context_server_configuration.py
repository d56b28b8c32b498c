"""Tests for the context server configuration surface (schema, instructions, defaults)."""

import json

import jsonschema
import pytest

from searxng_mcp.services.command_builder import build_launch_descriptor
from searxng_mcp.services.configuration import (
    JSON_SCHEMA_DRAFT7,
    build_context_server_configuration,
    load_default_settings,
    load_installation_instructions,
    settings_schema,
)


def _strip_jsonc_comments(text: str) -> str:
    return "\n".join(line for line in text.splitlines() if not line.lstrip().startswith("//"))


@pytest.fixture
def schema() -> dict:
    return settings_schema()


def test_schema_is_valid_draft7(schema: dict) -> None:
    assert schema["$schema"] == JSON_SCHEMA_DRAFT7
    jsonschema.Draft7Validator.check_schema(schema)


def test_schema_requires_only_url(schema: dict) -> None:
    assert schema["required"] == ["searxng_url"]
    assert set(schema["properties"]) == {
        "searxng_url",
        "auth_username",
        "auth_password",
        "user_agent",
        "http_proxy",
        "https_proxy",
        "no_proxy",
    }


def test_schema_advertises_limits(schema: dict) -> None:
    props = schema["properties"]
    assert props["searxng_url"]["maxLength"] == 2048
    assert props["user_agent"]["maxLength"] == 256
    assert props["no_proxy"]["maxLength"] == 1024
    assert props["searxng_url"]["description"] == "URL of the SearXNG instance (required)"


def test_schema_rejects_missing_url(schema: dict) -> None:
    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate({"user_agent": "x"}, schema)


def test_default_settings_validate_and_build(schema: dict, launcher_config) -> None:
    defaults = json.loads(_strip_jsonc_comments(load_default_settings()))
    jsonschema.validate(defaults, schema)
    descriptor = build_launch_descriptor("node", "index.js", defaults)
    assert descriptor.env_dict() == {"SEARXNG_URL": "https://searx.be"}


def test_installation_instructions_mention_settings_key() -> None:
    instructions = load_installation_instructions()
    assert instructions.startswith("# SearXNG MCP Server")
    assert "searxng_url" in instructions


def test_build_context_server_configuration() -> None:
    configuration = build_context_server_configuration()
    assert json.loads(configuration.settings_schema) == settings_schema()
    assert configuration.default_settings == load_default_settings()
    assert configuration.installation_instructions == load_installation_instructions()
