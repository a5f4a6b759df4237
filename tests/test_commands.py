from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from project_browser.commands import COMMANDS, CommandError, dispatch
from project_browser.config import AppConfig, GitConfig
from project_browser.git_info import GitError, GitStatus


class TestRegistry:
    def test_registered_commands(self):
        assert set(COMMANDS) == {
            "scan_directory",
            "git_status",
            "git_branches",
            "git_create_branch",
        }


class TestDispatch:
    @pytest.mark.asyncio
    async def test_scan_directory(self, proj_tree):
        result = await dispatch("scan_directory", {"root": str(proj_tree)})
        assert result["name"] == "proj"
        assert result["path"] == str(proj_tree)
        assert [c["name"] for c in result["children"]] == ["src"]
        src = result["children"][0]
        assert [c["name"] for c in src["children"]] == ["components", "utils"]

    @pytest.mark.asyncio
    async def test_scan_missing_root_never_fails(self):
        result = await dispatch("scan_directory", {"root": "/nonexistent/dir"})
        assert result == {"name": "dir", "path": "/nonexistent/dir", "children": []}

    @pytest.mark.asyncio
    async def test_scan_nul_byte_root_never_fails(self):
        result = await dispatch("scan_directory", {"root": "a\x00b"})
        assert result == {"name": "a\x00b", "path": "a\x00b", "children": []}

    @pytest.mark.asyncio
    async def test_unknown_command(self):
        with pytest.raises(CommandError, match="Unknown command"):
            await dispatch("rm_rf", {})

    @pytest.mark.asyncio
    async def test_missing_argument(self):
        with pytest.raises(CommandError, match="Bad arguments"):
            await dispatch("scan_directory", {})

    @pytest.mark.asyncio
    async def test_unexpected_argument(self):
        with pytest.raises(CommandError, match="Bad arguments"):
            await dispatch("scan_directory", {"root": "/tmp", "depth": 9})

    @pytest.mark.asyncio
    async def test_git_status(self, tmp_path):
        with patch(
            "project_browser.commands.get_git_status",
            new_callable=AsyncMock,
            return_value=GitStatus(git_installed=True, is_repo=True),
        ) as mock_status:
            config = AppConfig(git=GitConfig(command="/usr/local/bin/git"))
            result = await dispatch("git_status", {"path": str(tmp_path)}, config=config)
        assert result == {"git_installed": True, "is_repo": True, "user_configured": False}
        mock_status.assert_awaited_once_with(str(tmp_path), git="/usr/local/bin/git")

    @pytest.mark.asyncio
    async def test_git_branches(self, tmp_path):
        with patch("project_browser.commands.current_branch", new_callable=AsyncMock, return_value="main"), \
                patch("project_browser.commands.list_branches", new_callable=AsyncMock, return_value=["dev", "main"]):
            result = await dispatch("git_branches", {"path": str(tmp_path)})
        assert result == {"current": "main", "branches": ["dev", "main"]}

    @pytest.mark.asyncio
    async def test_git_error_wrapped(self, tmp_path):
        err = GitError(["git", "branch"], 128, "fatal: not a git repository")
        with patch("project_browser.commands.current_branch", new_callable=AsyncMock, side_effect=err):
            with pytest.raises(CommandError, match="not a git repository"):
                await dispatch("git_branches", {"path": str(tmp_path)})

    @pytest.mark.asyncio
    async def test_invalid_branch_name_wrapped(self, tmp_path):
        with pytest.raises(CommandError, match="Invalid branch name"):
            await dispatch("git_create_branch", {"path": str(tmp_path), "name": "bad name"})

    @pytest.mark.asyncio
    async def test_create_branch(self, tmp_path):
        with patch("project_browser.commands.create_branch", new_callable=AsyncMock, return_value="feat"):
            result = await dispatch("git_create_branch", {"path": str(tmp_path), "name": "feat"})
        assert result == {"branch": "feat"}
