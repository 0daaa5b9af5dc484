"""Preference resolution: command-line flags first, interactive prompts second.

``FlagResolver`` turns the parsed argparse namespace into a partial mapping
of preferences.  ``PromptResolver`` walks the fixed resolution order and asks
for every preference the flags left open, one awaited prompt at a time, then
returns a validated ``Preferences`` instance.
"""

from __future__ import annotations

import argparse
import logging
import os
import signal
import sys
import threading
from collections.abc import Callable
from typing import Any

from rich.console import Console
from rich.prompt import Confirm, Prompt

from create_appx_app.config import (
    DEFAULT_IMPORT_ALIAS,
    AnimationLibrary,
    Choice,
    Language,
    PackageManager,
    Preferences,
    Router,
    Style,
    UILibrary,
    is_valid_import_alias,
)
from create_appx_app.errors import (
    AliasValidationError,
    InvalidProjectNameError,
    NonInteractiveError,
)
from create_appx_app.utils import console as default_console

logger = logging.getLogger(__name__)

# Order in which preferences are resolved.  Later prompts never run before
# earlier ones have been answered.
RESOLUTION_ORDER: list[str] = [
    "name",
    "language",
    "style",
    "eslint",
    "src_dir",
    "router",
    "unit_testing",
    "e2e_testing",
    "ui_library",
    "animation_library",
    "package_manager",
    "import_alias",
]

# Flag that answers each preference, quoted in non-interactive errors.
FIELD_FLAGS: dict[str, str] = {
    "name": "<project-directory>",
    "language": "--ts/--js",
    "style": "--css/--scss/--tailwind/--styled-components",
    "eslint": "--eslint/--no-eslint",
    "src_dir": "--src-dir/--no-src-dir",
    "router": "--app/--page",
    "unit_testing": "--unit/--no-unit",
    "e2e_testing": "--e2e/--no-e2e",
    "ui_library": "--ui",
    "animation_library": "--gsap/--framer-motion/--no-animation",
    "package_manager": "--use-npm/--use-yarn/--use-pnpm/--use-bun",
    "import_alias": "--import-alias",
}

_CI_ENV_VARS = [
    "CI",
    "GITHUB_ACTIONS",
    "JENKINS_HOME",
    "GITLAB_CI",
    "CIRCLECI",
    "TRAVIS",
    "BUILDKITE",
]


def is_interactive() -> bool:
    """Return ``True`` when prompts can be answered by a person.

    Stdin must be a TTY and none of the common CI environment variables may
    be set.
    """
    if not sys.stdin.isatty():
        return False
    return not any(os.getenv(var) for var in _CI_ENV_VARS)


def default_for(field: str) -> Any:
    """Return the default value of a ``Preferences`` field."""
    return Preferences.model_fields[field].default


def normalize_name(name: str) -> str:
    """Strip surrounding whitespace from a project name.

    Raises:
        InvalidProjectNameError: If nothing is left.
    """
    stripped = name.strip()
    if not stripped:
        raise InvalidProjectNameError(name)
    return stripped


# ---------------------------------------------------------------------------
# Flags
# ---------------------------------------------------------------------------


class FlagResolver:
    """Pre-fill preferences from the parsed command line.

    Only options the user actually passed end up in the result; everything
    else is left for the prompt resolver.
    """

    # argparse dest -> (preference field, converter)
    _FLAG_FIELDS: dict[str, tuple[str, Callable[[Any], Any]]] = {
        "language": ("language", Language),
        "style": ("style", Style),
        "eslint": ("eslint", bool),
        "src_dir": ("src_dir", bool),
        "router": ("router", Router),
        "unit": ("unit_testing", bool),
        "e2e": ("e2e_testing", bool),
        "ui": ("ui_library", UILibrary),
        "animation": ("animation_library", AnimationLibrary),
        "package_manager": ("package_manager", PackageManager),
    }

    def resolve(self, args: argparse.Namespace) -> dict[str, Any]:
        """Return ``{field: value}`` for every preference given as a flag.

        Raises:
            AliasValidationError: If ``--import-alias`` is malformed.
        """
        resolved: dict[str, Any] = {}

        name = getattr(args, "project_directory", None)
        if isinstance(name, str) and name.strip():
            resolved["name"] = name.strip()

        for dest, (field, convert) in self._FLAG_FIELDS.items():
            value = getattr(args, dest, None)
            if value is not None:
                resolved[field] = convert(value)

        alias = getattr(args, "import_alias", None)
        if alias is not None:
            if not is_valid_import_alias(alias):
                raise AliasValidationError(alias)
            resolved["import_alias"] = alias

        logger.debug("Preferences from flags: %s", resolved)
        return resolved


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


class Prompter:
    """Rich prompts, asked on the calling thread.

    Prompts are strictly sequential, so nothing else runs on the event loop
    while one is open.  ``asyncio.run`` only acts on SIGINT at the next
    await, which a blocked ``input()`` never reaches, so the default handler
    is restored for the duration of each prompt.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or default_console

    async def text(self, message: str, default: str) -> str:
        return _interruptible(Prompt.ask, message, default=default, console=self.console)

    async def confirm(self, message: str, default: bool) -> bool:
        return _interruptible(Confirm.ask, message, default=default, console=self.console)

    async def select(self, message: str, choices: type[Choice], default: Choice) -> Choice:
        for member in choices:
            marker = "[bold cyan]>[/bold cyan]" if member is default else " "
            self.console.print(f" {marker} {member.value:<18} [dim]{member.title}[/dim]")
        answer = _interruptible(
            Prompt.ask,
            message,
            choices=choices.values(),
            default=default.value,
            show_choices=False,
            console=self.console,
        )
        return choices(answer)


def _interruptible(ask: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Call *ask* with Ctrl-C raising ``KeyboardInterrupt`` immediately."""
    if threading.current_thread() is not threading.main_thread():
        return ask(*args, **kwargs)

    previous = signal.signal(signal.SIGINT, signal.default_int_handler)
    try:
        return ask(*args, **kwargs)
    finally:
        signal.signal(signal.SIGINT, previous if previous is not None else signal.SIG_DFL)


class PromptResolver:
    """Ask for every preference the flags did not provide.

    Args:
        prompter: Source of answers (a ``Prompter`` or a test double).
        assume_defaults: Take the default for every open preference
            without asking.
        interactive: Whether a person can answer prompts.  Defaults to
            ``is_interactive()``.
    """

    def __init__(
        self,
        prompter: Prompter | None = None,
        *,
        assume_defaults: bool = False,
        interactive: bool | None = None,
    ) -> None:
        self.prompter = prompter or Prompter()
        self.assume_defaults = assume_defaults
        self.interactive = is_interactive() if interactive is None else interactive

    async def resolve(
        self,
        prefilled: dict[str, Any],
        on_name: Callable[[str], None] | None = None,
    ) -> Preferences:
        """Resolve all preferences in ``RESOLUTION_ORDER``.

        Args:
            prefilled: Values already known from flags; never asked again.
            on_name: Called with the project name once it is known, so the
                target can be validated before the remaining prompts.

        Raises:
            NonInteractiveError: A prompt is needed but nobody can answer it.
            AliasValidationError: A customised import alias is malformed.
            InvalidProjectNameError: The project name is blank.
        """
        answers: dict[str, Any] = dict(prefilled)

        for field in RESOLUTION_ORDER:
            if field not in answers:
                answers[field] = await self._resolve_field(field)
            if field == "name":
                answers["name"] = normalize_name(answers["name"])
                if on_name is not None:
                    on_name(answers["name"])

        return Preferences(**answers)

    async def _resolve_field(self, field: str) -> Any:
        if self.assume_defaults:
            return default_for(field)
        if not self.interactive:
            raise NonInteractiveError(field, FIELD_FLAGS[field])

        ask = getattr(self, f"_ask_{field}")
        return await ask()

    # -- Individual questions -----------------------------------------------

    async def _ask_name(self) -> str:
        return await self.prompter.text("What is your project name?", default_for("name"))

    async def _ask_language(self) -> Language:
        return await self.prompter.select(
            "What is your preferred language?", Language, default_for("language")
        )

    async def _ask_style(self) -> Style:
        return await self.prompter.select(
            "Choose your styling option", Style, default_for("style")
        )

    async def _ask_eslint(self) -> bool:
        return await self.prompter.confirm("Do you want to use ESLint?", default_for("eslint"))

    async def _ask_src_dir(self) -> bool:
        return await self.prompter.confirm(
            "Do you want to use a src/ directory?", default_for("src_dir")
        )

    async def _ask_router(self) -> Router:
        return await self.prompter.select(
            "What is your preferred router?", Router, default_for("router")
        )

    async def _ask_unit_testing(self) -> bool:
        return await self.prompter.confirm(
            "Do you want to use unit testing?", default_for("unit_testing")
        )

    async def _ask_e2e_testing(self) -> bool:
        return await self.prompter.confirm(
            "Do you want to use e2e testing?", default_for("e2e_testing")
        )

    async def _ask_ui_library(self) -> UILibrary:
        return await self.prompter.select(
            "What is your preferred UI library?", UILibrary, default_for("ui_library")
        )

    async def _ask_animation_library(self) -> AnimationLibrary:
        return await self.prompter.select(
            "What is your preferred animation library?",
            AnimationLibrary,
            default_for("animation_library"),
        )

    async def _ask_package_manager(self) -> PackageManager:
        return await self.prompter.select(
            "Choose a package manager to work with",
            PackageManager,
            default_for("package_manager"),
        )

    async def _ask_import_alias(self) -> str:
        customize = await self.prompter.confirm(
            f"Do you want to customize the import alias? (default: {DEFAULT_IMPORT_ALIAS})",
            False,
        )
        if not customize:
            return DEFAULT_IMPORT_ALIAS

        alias = (await self.prompter.text("What is your import alias?", DEFAULT_IMPORT_ALIAS)).strip()
        if not is_valid_import_alias(alias):
            raise AliasValidationError(alias)
        return alias
