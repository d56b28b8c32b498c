"""
Print the SearXNG context server launch command for a settings file.

Usage:
    searxng-mcp-command [--settings FILE] [--node PATH] [--server-path PATH]
                        [--strict-trailing-slash] [--redact]
    searxng-mcp-command --print-schema
    searxng-mcp-command --print-instructions

Exit codes:
    0    launch descriptor printed
    1    settings file unreadable or not valid JSON
    2    settings rejected by validation
"""

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from .core.config import get_config_instance
from .core.exceptions import SettingsError
from .core.logging import setup_logging
from .schemas.settings import LaunchDescriptor
from .services.command_builder import build_launch_descriptor
from .services.configuration import load_installation_instructions, settings_schema

logger = logging.getLogger(__name__)

REDACTED_ENV_NAMES = frozenset({"AUTH_PASSWORD"})


def _build_parser() -> argparse.ArgumentParser:
    config = get_config_instance()
    parser = argparse.ArgumentParser(
        prog="searxng-mcp-command",
        description="Validate SearXNG context server settings and print the launch command as JSON.",
    )
    parser.add_argument(
        "--settings",
        help="JSON settings file ('-' for stdin). Omit to print the unconfigured command.",
    )
    parser.add_argument("--node", default="node", help="Node.js executable (default: %(default)s)")
    parser.add_argument(
        "--server-path",
        default=config.server_path,
        help="Server entry point passed to node (default: %(default)s)",
    )
    parser.add_argument(
        "--strict-trailing-slash",
        action="store_true",
        default=config.strict_trailing_slash,
        help="Reject a trailing slash on searxng_url instead of removing it",
    )
    parser.add_argument("--redact", action="store_true", help="Mask AUTH_PASSWORD in the output")
    parser.add_argument("--print-schema", action="store_true", help="Print the settings JSON schema and exit")
    parser.add_argument(
        "--print-instructions", action="store_true", help="Print the installation instructions and exit"
    )
    return parser


def _load_settings(source: str | None) -> Any:
    if source is None:
        return None
    text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    return json.loads(text)


def _descriptor_output(descriptor: LaunchDescriptor, redact: bool) -> dict[str, Any]:
    output = descriptor.to_dict()
    if redact:
        output["environment"] = [
            [name, "***" if name in REDACTED_ENV_NAMES else value] for name, value in output["environment"]
        ]
    return output


def main(argv: Sequence[str] | None = None) -> int:
    setup_logging()
    args = _build_parser().parse_args(argv)

    if args.print_schema:
        print(json.dumps(settings_schema(), indent=2))
        return 0
    if args.print_instructions:
        print(load_installation_instructions())
        return 0

    try:
        raw_settings = _load_settings(args.settings)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Could not read settings", extra={"source": args.settings, "error": str(e)})
        print(f"Could not read settings from {args.settings}: {e}", file=sys.stderr)
        return 1

    try:
        descriptor = build_launch_descriptor(
            args.node,
            args.server_path,
            raw_settings,
            strict_trailing_slash=args.strict_trailing_slash,
        )
    except SettingsError as e:
        print(f"Failed to configure MCP Server: SearXNG\n\n{e.message}", file=sys.stderr)
        return 2

    print(json.dumps(_descriptor_output(descriptor, args.redact), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
