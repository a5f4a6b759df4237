from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration loading or validation fails."""

    pass


@dataclass
class BrowserConfig:
    """Project browser settings."""

    root: str | None = None


@dataclass
class GitConfig:
    """Git executable used by the repository commands."""

    command: str = "git"


@dataclass
class DebugConfig:
    """Debug mode settings."""

    enabled: bool = False
    trace: bool = False
    verbose: bool = False


@dataclass
class AppConfig:
    """Top-level application configuration aggregating all subsections."""

    browser: BrowserConfig = field(default_factory=BrowserConfig)
    git: GitConfig = field(default_factory=GitConfig)
    debug: DebugConfig = field(default_factory=DebugConfig)


def _section(raw: dict, name: str) -> dict:
    # `or {}` fallback handles YAML null values for optional sections
    value = raw.get(name, {}) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"{name} must be a mapping")
    return value


def load_config(path: str) -> AppConfig:
    """Load and validate application configuration from a YAML file.

    Every section is optional; missing keys fall back to the dataclass
    defaults. The scan depth and the excluded directory names are fixed
    and cannot be set here.

    Args:
        path: Filesystem path to the YAML configuration file.

    Returns:
        A fully populated AppConfig instance.

    Raises:
        ConfigError: If the file does not exist, is not valid YAML, or
            holds values of the wrong type.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError("Config document must be a mapping")

    browser_raw = _section(raw, "browser")
    git_raw = _section(raw, "git")
    debug_raw = _section(raw, "debug")

    root = browser_raw.get("root")
    if root is not None and not isinstance(root, str):
        raise ConfigError("browser.root must be a string")
    if root is not None:
        root = os.path.expanduser(root)

    command = git_raw.get("command", "git")
    if not isinstance(command, str) or not command:
        raise ConfigError("git.command must be a non-empty string")

    logger.debug("Loaded config from %s", path)
    logger.debug("Browser root=%s git=%s", root, command)

    return AppConfig(
        browser=BrowserConfig(root=root),
        git=GitConfig(command=command),
        debug=DebugConfig(
            enabled=bool(debug_raw.get("enabled", False)),
            trace=bool(debug_raw.get("trace", False)),
            verbose=bool(debug_raw.get("verbose", False)),
        ),
    )
