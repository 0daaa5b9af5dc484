"""External commands run against the generated project.

``PackageInstaller`` wraps the three collaborators the generator shells out
to: ``git`` for the repository, the chosen package manager for the install
and ``npx shadcn-ui`` for the Shadcn UI initializer.  Every command blocks
until it exits; a non-zero status raises ``ExternalProcessError``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from create_appx_app.config import PackageManager
from create_appx_app.errors import ExternalProcessError
from create_appx_app.utils import create_progress, run_command

logger = logging.getLogger(__name__)

GIT_INIT_COMMAND: list[str] = ["git", "init", "-b", "main"]

SHADCN_INIT_COMMAND: list[str] = ["npx", "shadcn-ui@latest", "init"]

INSTALL_COMMANDS: dict[PackageManager, list[str]] = {
    PackageManager.NPM: ["npm", "install"],
    PackageManager.YARN: ["yarn"],
    PackageManager.PNPM: ["pnpm", "install"],
    PackageManager.BUN: ["bun", "install"],
}

DEV_COMMANDS: dict[PackageManager, str] = {
    PackageManager.NPM: "npm run dev",
    PackageManager.YARN: "yarn dev",
    PackageManager.PNPM: "pnpm dev",
    PackageManager.BUN: "bun dev",
}


class PackageInstaller:
    """Runs git, the package manager and the Shadcn initializer."""

    async def init_repository(self, cwd: Path) -> None:
        """Initialise a git repository with ``main`` as the default branch."""
        await self._run(GIT_INIT_COMMAND, cwd)

    async def init_shadcn(self, cwd: Path) -> None:
        """Run the Shadcn UI initializer.

        The initializer asks its own questions, so it inherits the terminal.
        """
        await self._run(SHADCN_INIT_COMMAND, cwd, capture=False)

    async def install(self, manager: PackageManager, cwd: Path) -> None:
        """Install the project's dependencies with *manager*.

        There is no timeout: a hung package manager hangs the run.
        """
        with create_progress() as progress:
            progress.add_task(f"Installing packages with {manager.value}...", total=None)
            await self._run(INSTALL_COMMANDS[manager], cwd)

    async def _run(self, cmd: list[str], cwd: Path, capture: bool = True) -> None:
        try:
            returncode, stdout, stderr = await run_command(cmd, cwd=cwd, capture=capture)
        except FileNotFoundError as exc:
            raise ExternalProcessError(cmd, 127, f"{cmd[0]} not found") from exc

        if returncode != 0:
            raise ExternalProcessError(cmd, returncode, stderr)
        logger.debug("%s finished: %s", " ".join(cmd), stdout)
