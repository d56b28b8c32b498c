"""
Shared pytest fixtures and path setup for unit tests.
"""

import os
import sys
from pathlib import Path

# Drop launcher overrides from the developer's shell so defaults are predictable.
for _name in [name for name in os.environ if name.startswith("SEARXNG_MCP_")]:
    del os.environ[_name]

# Add backend/src to sys.path so searxng_mcp.* imports work when running pytest from repo root.
PROJECT_SRC = Path(__file__).resolve().parents[2]
if str(PROJECT_SRC) not in sys.path:
    sys.path.insert(0, str(PROJECT_SRC))

import pytest

from searxng_mcp.core import config as config_module
from searxng_mcp.core.config import LauncherConfig


@pytest.fixture(autouse=True)
def reset_config_instance():
    """Make every test start from a freshly built launcher configuration."""
    config_module.config = None
    yield
    config_module.config = None


@pytest.fixture
def launcher_config():
    """Install and return a default LauncherConfig as the global instance."""
    cfg = LauncherConfig()
    config_module.config = cfg
    return cfg


@pytest.fixture
def strict_launcher_config():
    """Install a LauncherConfig that rejects trailing slashes on searxng_url."""
    cfg = LauncherConfig(SEARXNG_MCP_STRICT_TRAILING_SLASH=True)
    config_module.config = cfg
    return cfg


@pytest.fixture
def full_settings_payload():
    """Settings payload with every optional field populated."""
    return {
        "searxng_url": "https://searx.be",
        "auth_username": "alice",
        "auth_password": "s3cr3t-pass",
        "user_agent": "Mozilla/5.0 (X11)",
        "http_proxy": "http://proxy.internal:3128",
        "https_proxy": "https://10.0.0.2:3129",
        "no_proxy": "example.com, *.internal.net, 10.0.0.1",
    }
