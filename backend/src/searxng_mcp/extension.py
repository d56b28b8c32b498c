"""Host-facing entry point for the SearXNG context server.

The host (an editor runtime) owns settings storage, npm package installation
and process launching. ``ContextServerHost`` is the narrow slice of it this
extension needs; everything else is delegated to the command builder.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol

from .core.config import LauncherConfig, get_config_instance
from .core.exceptions import PackageInstallError
from .schemas.settings import ContextServerConfiguration, LaunchDescriptor
from .services.command_builder import build_launch_descriptor
from .services.configuration import build_context_server_configuration

logger = logging.getLogger(__name__)


class ContextServerHost(Protocol):
    """Host services used to prepare the context server launch."""

    def npm_package_installed_version(self, package: str) -> str | None: ...

    def npm_install_package(self, package: str, version: str) -> None: ...

    def node_binary_path(self) -> str: ...

    def working_directory(self) -> str: ...

    def context_server_settings(self, server_id: str) -> Mapping[str, Any] | None: ...


class SearxngContextServerExtension:
    """Builds the launch command and configuration for the SearXNG context server."""

    def __init__(self, config: LauncherConfig | None = None) -> None:
        self.config = config or get_config_instance()

    def ensure_package_installed(self, host: ContextServerHost) -> None:
        """Install the pinned npm package when a different (or no) version is present."""
        package = self.config.package_name
        version = self.config.package_version
        try:
            installed = host.npm_package_installed_version(package)
            if installed == version:
                return
            logger.info(
                "Installing pinned npm package",
                extra={"package": package, "version": version, "installed_version": installed},
            )
            host.npm_install_package(package, version)
        except PackageInstallError:
            raise
        except Exception as e:
            raise PackageInstallError(package, version, str(e)) from e

    def server_entry_point(self, host: ContextServerHost) -> str:
        return str(Path(host.working_directory()) / self.config.server_path)

    def context_server_command(self, host: ContextServerHost) -> LaunchDescriptor:
        """Return the command the host should run to start the context server.

        Raises:
            PackageInstallError: If the host cannot install the pinned package.
            SettingsError: If the user's settings are invalid.

        """
        self.ensure_package_installed(host)
        node_path = host.node_binary_path()
        entry_point = self.server_entry_point(host)
        raw_settings = host.context_server_settings(self.config.context_server_id)
        return build_launch_descriptor(
            node_path,
            entry_point,
            raw_settings,
            strict_trailing_slash=self.config.strict_trailing_slash,
        )

    def context_server_configuration(self) -> ContextServerConfiguration:
        return build_context_server_configuration()
