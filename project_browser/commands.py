from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable

from project_browser.config import AppConfig
from project_browser.git_info import (
    GitError,
    create_branch,
    current_branch,
    get_git_status,
    list_branches,
)
from project_browser.tree_scanner import scan_directory

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Raised when a command cannot be dispatched or its handler fails."""

    pass


async def handle_scan_directory(config: AppConfig, root: str) -> dict:
    """Scan ``root`` for the project browser. Never fails."""
    return scan_directory(root).to_dict()


async def handle_git_status(config: AppConfig, path: str) -> dict:
    status = await get_git_status(path, git=config.git.command)
    return status.to_dict()


async def handle_git_branches(config: AppConfig, path: str) -> dict:
    """Report the current branch and all local branches of ``path``."""
    git = config.git.command
    return {
        "current": await current_branch(path, git=git),
        "branches": await list_branches(path, git=git),
    }


async def handle_git_create_branch(config: AppConfig, path: str, name: str) -> dict:
    branch = await create_branch(path, name, git=config.git.command)
    return {"branch": branch}


COMMANDS: dict[str, Callable[..., Awaitable[Any]]] = {
    "scan_directory": handle_scan_directory,
    "git_status": handle_git_status,
    "git_branches": handle_git_branches,
    "git_create_branch": handle_git_create_branch,
}


async def dispatch(
    name: str, args: dict[str, Any] | None = None, config: AppConfig | None = None
) -> Any:
    """Invoke the command registered under ``name`` with keyword ``args``.

    Args:
        name: Registered command name (e.g. ``"scan_directory"``).
        args: Keyword arguments for the command handler.
        config: Application configuration; defaults are used when omitted.

    Returns:
        The JSON-ready result of the handler.

    Raises:
        CommandError: If the command is unknown, the arguments do not
            match the handler, or the handler reports a git or
            validation failure.
    """
    handler = COMMANDS.get(name)
    if handler is None:
        raise CommandError(f"Unknown command: {name}")

    config = config or AppConfig()
    args = args or {}
    try:
        inspect.signature(handler).bind(config, **args)
    except TypeError as exc:
        raise CommandError(f"Bad arguments for {name}: {exc}") from exc

    logger.debug("Dispatching %s args=%s", name, args)
    try:
        return await handler(config, **args)
    except (GitError, ValueError) as exc:
        logger.warning("Command %s failed: %s", name, exc)
        raise CommandError(str(exc)) from exc
