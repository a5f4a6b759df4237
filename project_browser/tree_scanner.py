from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from project_browser import log_setup  # noqa: F401  installs Logger.trace

logger = logging.getLogger(__name__)

MAX_DEPTH = 4

SKIP_DIRS = frozenset({
    "node_modules",
    "target",
    "dist",
    ".git",
    ".svn",
    ".hg",
    "__pycache__",
    ".next",
    ".nuxt",
    "build",
})


@dataclass
class DirectoryNode:
    """A directory in the project browser tree with its sorted subdirectories."""

    name: str
    path: str
    children: list[DirectoryNode] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert the node and its descendants to plain JSON-ready data."""
        return {
            "name": self.name,
            "path": self.path,
            "children": [child.to_dict() for child in self.children],
        }


def _display(text: str) -> str:
    """Re-decode an OS string, replacing undecodable bytes with U+FFFD."""
    return os.fsencode(text).decode("utf-8", errors="replace")


def _is_skipped(name: str) -> bool:
    return name.startswith(".") or name in SKIP_DIRS


def scan_recursive(directory: str, depth: int, max_depth: int) -> list[DirectoryNode]:
    """Collect the visible subdirectories of ``directory``, depth first.

    Unreadable directories and entries whose type cannot be determined
    contribute nothing; errors never propagate to the caller.

    Args:
        directory: Directory whose immediate entries are listed.
        depth: Depth of ``directory`` relative to the scan root.
        max_depth: Depth at which expansion stops.

    Returns:
        Child nodes sorted by case-insensitive name.
    """
    if depth >= max_depth:
        return []

    result: list[DirectoryNode] = []
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                except OSError as exc:
                    logger.trace("Skipping %s (type unknown: %s)", entry.path, exc)
                    continue
                if not is_dir:
                    logger.trace("Skipping %s (not a directory)", entry.path)
                    continue

                name = _display(entry.name)
                if _is_skipped(name):
                    logger.trace("Skipping %s (hidden or excluded)", entry.path)
                    continue

                children = scan_recursive(entry.path, depth + 1, max_depth)
                result.append(DirectoryNode(name=name, path=_display(entry.path), children=children))
    except (OSError, ValueError) as exc:
        # Entries gathered before a mid-listing failure are kept
        logger.debug("Cannot list %s: %s", directory, exc)

    result.sort(key=lambda node: node.name.lower())
    return result


def _root_name(root: str) -> str:
    name = Path(root).name if root else ""
    if name in ("", ".", ".."):
        return root
    return _display(name)


def scan_directory(root: str) -> DirectoryNode:
    """Scan ``root`` into a directory tree bounded at ``MAX_DEPTH`` levels.

    The root node is always returned, even when ``root`` is missing, is not
    a directory, or cannot be read; its children are empty in that case.
    """
    logger.debug("Scanning directory tree root=%s max_depth=%d", root, MAX_DEPTH)
    children = scan_recursive(root, 0, MAX_DEPTH) if root else []
    node = DirectoryNode(name=_root_name(root), path=root, children=children)
    logger.debug("Found %d top-level directories in %s", len(children), root)
    return node
