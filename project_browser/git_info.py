from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import asdict, dataclass

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Raised when a git command cannot be run or exits non-zero."""

    def __init__(self, cmd: list[str], returncode: int | None, stderr: str = "") -> None:
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr or "no output"
        super().__init__(f"{' '.join(cmd)} failed (exit {returncode}): {detail}")


class GitNotInstalledError(GitError):
    """Raised when the git executable cannot be found."""


@dataclass
class GitStatus:
    """Git availability for a project folder."""

    git_installed: bool = False
    is_repo: bool = False
    user_configured: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


async def _run_command(cmd: list[str], cwd: str | None = None) -> tuple[int, str, str]:
    """Run a command asynchronously and capture its output.

    Args:
        cmd: Command and arguments to execute (e.g. ["git", "status"]).
        cwd: Working directory in which to run the command.

    Returns:
        Tuple of exit code, stripped stdout and stripped stderr.

    Raises:
        GitNotInstalledError: If the executable does not exist.
        GitError: If the process cannot be started for another reason.
    """
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
        )
    except FileNotFoundError as exc:
        raise GitNotInstalledError(cmd, None, str(exc)) from exc
    except (OSError, ValueError) as exc:
        raise GitError(cmd, None, str(exc)) from exc
    stdout, stderr = await proc.communicate()
    return (
        proc.returncode,
        stdout.decode(errors="replace").strip(),
        stderr.decode(errors="replace").strip(),
    )


async def _git(args: list[str], cwd: str | None, git: str = "git") -> str:
    """Run ``git`` with ``args`` and return stdout, raising on failure."""
    if cwd is not None and not os.path.isdir(cwd):
        raise GitError([git, *args], None, f"not a directory: {cwd}")
    cmd = [git, *args]
    logger.debug("Running %s in %s", cmd, cwd)
    returncode, out, err = await _run_command(cmd, cwd=cwd)
    if returncode != 0:
        raise GitError(cmd, returncode, err)
    return out


async def get_git_status(path: str, git: str = "git") -> GitStatus:
    """Probe whether git is usable for the project folder at ``path``.

    Each probe that fails degrades to ``False`` so the caller always
    receives a valid GitStatus.
    """
    try:
        await _git(["--version"], cwd=None, git=git)
    except GitError as exc:
        logger.debug("git unavailable: %s", exc)
        return GitStatus()

    try:
        is_repo = await _git(["rev-parse", "--is-inside-work-tree"], cwd=path, git=git) == "true"
    except GitError as exc:
        logger.debug("Not a git repository %s: %s", path, exc)
        is_repo = False

    user_configured = False
    if os.path.isdir(path):
        try:
            name = await _git(["config", "user.name"], cwd=path, git=git)
            email = await _git(["config", "user.email"], cwd=path, git=git)
            user_configured = bool(name and email)
        except GitError as exc:
            # git config exits 1 when the key is unset
            logger.debug("git user not configured: %s", exc)

    return GitStatus(git_installed=True, is_repo=is_repo, user_configured=user_configured)


async def current_branch(path: str, git: str = "git") -> str | None:
    """Return the checked-out branch name, or None on a detached HEAD."""
    branch = await _git(["branch", "--show-current"], cwd=path, git=git)
    return branch or None


async def list_branches(path: str, git: str = "git") -> list[str]:
    """List local branch names in the order git reports them."""
    out = await _git(["branch", "--format=%(refname:short)"], cwd=path, git=git)
    return [line.strip() for line in out.splitlines() if line.strip()]


async def create_branch(path: str, name: str, git: str = "git", checkout: bool = True) -> str:
    """Create a local branch and optionally switch to it.

    Args:
        path: Repository working directory.
        name: New branch name; must be non-empty without whitespace.
        git: Git executable.
        checkout: Switch to the new branch after creating it.

    Returns:
        The created branch name.

    Raises:
        ValueError: If ``name`` is empty or contains whitespace.
        GitError: If git rejects the branch.
    """
    if not name or any(ch.isspace() for ch in name):
        raise ValueError(f"Invalid branch name: {name!r}")
    args = ["checkout", "-b", name] if checkout else ["branch", name]
    await _git(args, cwd=path, git=git)
    logger.info("Created branch %s in %s", name, path)
    return name
