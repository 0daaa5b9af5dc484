"""Shared pytest fixtures for the create-appx-app test suite.

Provides reusable fixtures for:
- Preference sets (defaults and the documented ``demo`` scenario)
- A fake installer that records external commands instead of running them
- A scripted prompter that answers prompts from a queue
- argparse namespaces built through the real parser
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from create_appx_app.config import (
    AnimationLibrary,
    Language,
    PackageManager,
    Preferences,
    RunConfig,
    Router,
    Style,
    UILibrary,
)
from create_appx_app.pipeline import build_parser


# ---------------------------------------------------------------------------
# Preferences
# ---------------------------------------------------------------------------


@pytest.fixture
def default_preferences() -> Preferences:
    return Preferences()


@pytest.fixture
def demo_preferences() -> Preferences:
    """The end-to-end ``demo`` scenario: TypeScript + SCSS + ESLint + src/."""
    return Preferences(
        name="demo",
        language=Language.TYPESCRIPT,
        style=Style.SCSS,
        eslint=True,
        src_dir=True,
        router=Router.APP,
        unit_testing=False,
        e2e_testing=False,
        ui_library=UILibrary.NONE,
        animation_library=AnimationLibrary.NONE,
        package_manager=PackageManager.NPM,
        import_alias="@/*",
    )


@pytest.fixture
def js_preferences() -> Preferences:
    """JavaScript + CSS, no src/ directory, everything optional turned on."""
    return Preferences(
        name="js-app",
        language=Language.JAVASCRIPT,
        style=Style.CSS,
        eslint=False,
        src_dir=False,
        unit_testing=True,
        e2e_testing=True,
        ui_library=UILibrary.ANTD,
        animation_library=AnimationLibrary.FRAMER_MOTION,
        package_manager=PackageManager.PNPM,
    )


# ---------------------------------------------------------------------------
# External commands
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_installer() -> MagicMock:
    """Installer double: every external command is an ``AsyncMock``."""
    installer = MagicMock()
    installer.init_repository = AsyncMock()
    installer.init_shadcn = AsyncMock()
    installer.install = AsyncMock()
    return installer


@pytest.fixture
def run_config(tmp_path: Path) -> RunConfig:
    """RunConfig rooted at a temporary directory."""
    return RunConfig(cwd=tmp_path)


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


class ScriptedPrompter:
    """Answers prompts from a list, recording every question asked."""

    def __init__(self, answers: list[Any]) -> None:
        self.answers = list(answers)
        self.asked: list[str] = []

    def _next(self, message: str) -> Any:
        self.asked.append(message)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {message}")
        return self.answers.pop(0)

    async def text(self, message: str, default: str) -> str:
        return self._next(message)

    async def confirm(self, message: str, default: bool) -> bool:
        return self._next(message)

    async def select(self, message: str, choices: Any, default: Any) -> Any:
        return choices(self._next(message))


@pytest.fixture
def scripted_prompter():
    """Factory: ``scripted_prompter([answer, ...])``."""
    return ScriptedPrompter


# ---------------------------------------------------------------------------
# CLI arguments
# ---------------------------------------------------------------------------


@pytest.fixture
def parse_args():
    """Parse a command line with the real parser, ignoring unknown options."""

    def _parse(*argv: str):
        args, _unknown = build_parser().parse_known_args(list(argv))
        return args

    return _parse
