from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys

from project_browser.commands import CommandError, dispatch
from project_browser.config import AppConfig, ConfigError, load_config
from project_browser.log_setup import setup_logging

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Project browser directory scanner")
    parser.add_argument("--config", default=None,
                        help="Path to YAML config file (default: built-in defaults)")
    parser.add_argument("--debug", action="store_true",
                        help="Enable debug mode (verbose logging)")
    parser.add_argument("--trace", action="store_true",
                        help="Enable trace mode (writes trace file to debug/)")
    parser.add_argument("--verbose", action="store_true",
                        help="With --trace, also send trace output to terminal")

    sub = parser.add_subparsers(dest="command", required=True)
    scan = sub.add_parser("scan", help="Print the directory tree of a project folder")
    scan.add_argument("path", nargs="?", default=None)
    status = sub.add_parser("git-status", help="Report git availability for a folder")
    status.add_argument("path", nargs="?", default=None)
    branches = sub.add_parser("branches", help="List local git branches")
    branches.add_argument("path", nargs="?", default=None)
    create = sub.add_parser("create-branch", help="Create and check out a git branch")
    create.add_argument("path")
    create.add_argument("name")
    return parser.parse_args(argv)


def _command_call(args: argparse.Namespace, config: AppConfig) -> tuple[str, dict]:
    """Translate parsed CLI arguments into a command name and its arguments."""
    path = args.path or config.browser.root or os.getcwd()
    if args.command == "scan":
        return "scan_directory", {"root": path}
    if args.command == "git-status":
        return "git_status", {"path": path}
    if args.command == "branches":
        return "git_branches", {"path": path}
    return "git_create_branch", {"path": path, "name": args.name}


async def main(argv: list[str] | None = None) -> int:
    """Entry point for the project browser CLI.

    Returns:
        Process exit status: 0 on success, 1 on a config or command error.
    """
    args = _parse_args(argv)
    root_logger = setup_logging(
        debug=args.debug, trace=args.trace, verbose=args.verbose
    )

    try:
        config = load_config(args.config) if args.config else AppConfig()
    except ConfigError as exc:
        root_logger.error("Config error: %s", exc)
        return 1

    if args.debug:
        config.debug.enabled = True
    if args.trace:
        config.debug.trace = True
    if args.verbose:
        config.debug.verbose = True

    name, command_args = _command_call(args, config)
    try:
        result = await dispatch(name, command_args, config=config)
    except CommandError as exc:
        root_logger.error("%s failed: %s", name, exc)
        return 1

    print(json.dumps(result, indent=2))
    return 0


def run() -> None:
    """Console script wrapper around :func:`main`."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
