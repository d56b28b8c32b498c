"""Tests for SearxngContextServerExtension against a fake host."""

from pathlib import Path

import pytest

from searxng_mcp.core.config import LauncherConfig
from searxng_mcp.core.exceptions import ForbiddenHostError, MalformedUrlError, PackageInstallError, SchemaError
from searxng_mcp.extension import SearxngContextServerExtension
from searxng_mcp.testing import FakeHostBuilder

SERVER_ID = "mcp-server-searxng"


@pytest.fixture
def extension(launcher_config: LauncherConfig) -> SearxngContextServerExtension:
    return SearxngContextServerExtension(launcher_config)


class TestPackageInstallation:
    def test_pinned_version_already_installed(self, extension) -> None:
        host = FakeHostBuilder().with_installed_package("mcp-searxng", "0.4.1").build()
        extension.context_server_command(host)
        host.npm_install_package.assert_not_called()

    def test_missing_package_installed(self, extension) -> None:
        host = FakeHostBuilder().build()
        extension.context_server_command(host)
        host.npm_install_package.assert_called_once_with("mcp-searxng", "0.4.1")

    def test_other_version_replaced(self, extension) -> None:
        host = FakeHostBuilder().with_installed_package("mcp-searxng", "0.5.0").build()
        extension.context_server_command(host)
        host.npm_install_package.assert_called_once_with("mcp-searxng", "0.4.1")
        assert host.npm_package_installed_version("mcp-searxng") == "0.4.1"

    def test_install_failure_wrapped(self, extension) -> None:
        host = FakeHostBuilder().with_install_error(RuntimeError("registry unreachable")).build()
        with pytest.raises(PackageInstallError, match="registry unreachable") as exc_info:
            extension.context_server_command(host)
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_custom_pinned_version(self) -> None:
        ext = SearxngContextServerExtension(LauncherConfig(SEARXNG_MCP_PACKAGE_VERSION="0.6.0"))
        host = FakeHostBuilder().with_installed_package("mcp-searxng", "0.4.1").build()
        ext.context_server_command(host)
        host.npm_install_package.assert_called_once_with("mcp-searxng", "0.6.0")


class TestContextServerCommand:
    def test_unconfigured_returns_bare_command(self, extension) -> None:
        host = (
            FakeHostBuilder()
            .with_installed_package("mcp-searxng", "0.4.1")
            .with_node_path("/opt/node/bin/node")
            .with_working_directory("/work/ext")
            .build()
        )
        descriptor = extension.context_server_command(host)
        assert descriptor.executable == "/opt/node/bin/node"
        assert descriptor.arguments == (str(Path("/work/ext") / "node_modules/mcp-searxng/dist/index.js"),)
        assert descriptor.environment == ()
        host.context_server_settings.assert_called_once_with(SERVER_ID)

    def test_configured_command(self, extension) -> None:
        host = (
            FakeHostBuilder()
            .with_installed_package("mcp-searxng", "0.4.1")
            .with_settings(SERVER_ID, {"searxng_url": "https://searx.be/", "auth_username": "alice"})
            .build()
        )
        descriptor = extension.context_server_command(host)
        assert descriptor.environment == (
            ("SEARXNG_URL", "https://searx.be"),
            ("AUTH_USERNAME", "alice"),
        )

    def test_invalid_settings_surface_unchanged(self, extension) -> None:
        host = FakeHostBuilder().with_settings(SERVER_ID, {"searxng_url": "http://127.0.0.1:8888"}).build()
        with pytest.raises(ForbiddenHostError):
            extension.context_server_command(host)

    def test_schema_error(self, extension) -> None:
        host = FakeHostBuilder().with_settings(SERVER_ID, {"searxng_url": ["https://searx.be"]}).build()
        with pytest.raises(SchemaError):
            extension.context_server_command(host)

    def test_strict_config_applies(self) -> None:
        ext = SearxngContextServerExtension(LauncherConfig(SEARXNG_MCP_STRICT_TRAILING_SLASH=True))
        host = FakeHostBuilder().with_settings(SERVER_ID, {"searxng_url": "https://searx.be/"}).build()
        with pytest.raises(MalformedUrlError, match="trailing slash"):
            ext.context_server_command(host)

    def test_settings_looked_up_by_configured_server_id(self) -> None:
        ext = SearxngContextServerExtension(LauncherConfig(SEARXNG_MCP_CONTEXT_SERVER_ID="searxng-work"))
        host = FakeHostBuilder().with_settings("searxng-work", {"searxng_url": "https://searx.be"}).build()
        descriptor = ext.context_server_command(host)
        assert descriptor.env_dict() == {"SEARXNG_URL": "https://searx.be"}


def test_context_server_configuration(extension) -> None:
    configuration = extension.context_server_configuration()
    assert '"searxng_url"' in configuration.settings_schema
    assert "searx.be" in configuration.default_settings
