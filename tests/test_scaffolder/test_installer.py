"""Tests for the external command wrapper (PackageInstaller).

Covers:
- Install command per package manager
- git init and shadcn initializer commands
- Non-zero exit and missing binaries raise ExternalProcessError
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from create_appx_app.config import PackageManager
from create_appx_app.errors import ExternalProcessError
from create_appx_app.scaffolder.installer import (
    GIT_INIT_COMMAND,
    INSTALL_COMMANDS,
    SHADCN_INIT_COMMAND,
    PackageInstaller,
)

pytestmark = pytest.mark.unit

RUN_COMMAND = "create_appx_app.scaffolder.installer.run_command"


class TestInstallCommands:
    def test_every_manager_has_a_command(self):
        assert set(INSTALL_COMMANDS) == set(PackageManager)

    @pytest.mark.parametrize(
        "manager, command",
        [
            (PackageManager.NPM, ["npm", "install"]),
            (PackageManager.YARN, ["yarn"]),
            (PackageManager.PNPM, ["pnpm", "install"]),
            (PackageManager.BUN, ["bun", "install"]),
        ],
    )
    @pytest.mark.asyncio
    async def test_install_runs_manager_in_project(self, tmp_path: Path, manager, command):
        with patch(RUN_COMMAND, new=AsyncMock(return_value=(0, "", ""))) as mock_run:
            await PackageInstaller().install(manager, tmp_path)
        mock_run.assert_awaited_once_with(command, cwd=tmp_path, capture=True)


class TestInitCommands:
    @pytest.mark.asyncio
    async def test_git_init(self, tmp_path: Path):
        with patch(RUN_COMMAND, new=AsyncMock(return_value=(0, "", ""))) as mock_run:
            await PackageInstaller().init_repository(tmp_path)
        mock_run.assert_awaited_once_with(GIT_INIT_COMMAND, cwd=tmp_path, capture=True)
        assert GIT_INIT_COMMAND == ["git", "init", "-b", "main"]

    @pytest.mark.asyncio
    async def test_shadcn_inherits_terminal(self, tmp_path: Path):
        with patch(RUN_COMMAND, new=AsyncMock(return_value=(0, "", ""))) as mock_run:
            await PackageInstaller().init_shadcn(tmp_path)
        mock_run.assert_awaited_once_with(SHADCN_INIT_COMMAND, cwd=tmp_path, capture=False)


class TestFailures:
    @pytest.mark.asyncio
    async def test_non_zero_exit(self, tmp_path: Path):
        with patch(RUN_COMMAND, new=AsyncMock(return_value=(1, "", "ERR! network"))):
            with pytest.raises(ExternalProcessError) as exc_info:
                await PackageInstaller().install(PackageManager.NPM, tmp_path)
        err = exc_info.value
        assert err.command == ["npm", "install"]
        assert err.returncode == 1
        assert "ERR! network" in str(err)
        assert err.exit_code == 1

    @pytest.mark.asyncio
    async def test_missing_binary(self, tmp_path: Path):
        with patch(RUN_COMMAND, new=AsyncMock(side_effect=FileNotFoundError("bun"))):
            with pytest.raises(ExternalProcessError) as exc_info:
                await PackageInstaller().install(PackageManager.BUN, tmp_path)
        assert exc_info.value.returncode == 127
        assert "bun not found" in str(exc_info.value)
