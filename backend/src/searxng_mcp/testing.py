"""Test scaffolding for code that drives ``SearxngContextServerExtension``.

Provides :class:`FakeHostBuilder`, a fluent factory for a mock host that
satisfies :class:`searxng_mcp.extension.ContextServerHost`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from unittest.mock import MagicMock


class FakeHostBuilder:
    """Fluent builder for constructing a mock host for extension tests.

    Usage::

        host = (
            FakeHostBuilder()
            .with_installed_package("mcp-searxng", "0.4.1")
            .with_settings("mcp-server-searxng", {"searxng_url": "https://searx.be"})
            .build()
        )
        command = SearxngContextServerExtension().context_server_command(host)
    """

    def __init__(self) -> None:
        self._installed: dict[str, str] = {}
        self._settings: dict[str, Mapping[str, Any]] = {}
        self._node_path = "/usr/local/bin/node"
        self._working_directory = "/extensions/mcp-server-searxng"
        self._install_error: Exception | None = None

    def build(self) -> MagicMock:
        """Build and return the configured mock host.

        Returns:
            A :class:`unittest.mock.MagicMock` whose host methods are wired to
            the configured state. ``npm_install_package`` records the installed
            version so later lookups see it.
        """
        host = MagicMock()
        installed = dict(self._installed)
        settings = dict(self._settings)
        install_error = self._install_error

        def _installed_version(package: str) -> str | None:
            return installed.get(package)

        def _install(package: str, version: str) -> None:
            if install_error is not None:
                raise install_error
            installed[package] = version

        def _context_server_settings(server_id: str) -> Mapping[str, Any] | None:
            return settings.get(server_id)

        host.npm_package_installed_version = MagicMock(side_effect=_installed_version)
        host.npm_install_package = MagicMock(side_effect=_install)
        host.context_server_settings = MagicMock(side_effect=_context_server_settings)
        host.node_binary_path = MagicMock(return_value=self._node_path)
        host.working_directory = MagicMock(return_value=self._working_directory)
        return host

    def with_installed_package(self, package: str, version: str) -> FakeHostBuilder:
        """Report *version* as the installed version of *package*.

        Returns:
            ``self`` for method chaining.
        """
        self._installed[package] = version
        return self

    def with_settings(self, server_id: str, settings: Mapping[str, Any]) -> FakeHostBuilder:
        """Configure the settings payload returned for *server_id*.

        Returns:
            ``self`` for method chaining.
        """
        self._settings[server_id] = settings
        return self

    def with_node_path(self, path: str) -> FakeHostBuilder:
        self._node_path = path
        return self

    def with_working_directory(self, path: str) -> FakeHostBuilder:
        self._working_directory = path
        return self

    def with_install_error(self, exc: Exception) -> FakeHostBuilder:
        """Make ``npm_install_package`` raise *exc*.

        Returns:
            ``self`` for method chaining.
        """
        self._install_error = exc
        return self
