"""create-appx-app pipeline orchestrator.

Runs the scaffolding pipeline end to end:

1. Validate the target directory named on the command line (fail fast).
2. Resolve preferences: flags first, interactive prompts for the rest.
3. Generate the project tree.
4. Install dependencies with the chosen package manager.

Usage::

    create-appx-app my-app --ts --tailwind --use-pnpm
    python -m create_appx_app my-app --yes
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path
from typing import Any

from create_appx_app import __version__
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
from create_appx_app.errors import DirectoryExistsError, PackageJsonExistsError, ScaffoldError
from create_appx_app.resolver import FlagResolver, Prompter, PromptResolver
from create_appx_app.scaffolder import PackageInstaller, ProjectGenerator
from create_appx_app.scaffolder.installer import DEV_COMMANDS, INSTALL_COMMANDS
from create_appx_app.utils import (
    configure_logging,
    console,
    format_duration,
    print_banner,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)

logger = logging.getLogger(__name__)


def validate_target(path: Path) -> None:
    """Refuse targets that already hold a project or other files.

    Raises:
        PackageJsonExistsError: *path* contains a ``package.json``.
        DirectoryExistsError: *path* is a file or a non-empty directory.
    """
    if (path / "package.json").exists():
        raise PackageJsonExistsError(path)
    if path.is_file() or (path.is_dir() and any(path.iterdir())):
        raise DirectoryExistsError(path)


# ---------------------------------------------------------------------------
# Pipeline Orchestrator
# ---------------------------------------------------------------------------


class Pipeline:
    """Drives one scaffolding run.

    Attributes:
        run_config: Run-level switches (cwd, install, git, defaults).
        prompter: Source of interactive answers.
        installer: Runner for git, the initializer and the package manager.
        interactive: Override for terminal detection; ``None`` auto-detects.
    """

    def __init__(
        self,
        run_config: RunConfig,
        prompter: Prompter | None = None,
        interactive: bool | None = None,
        installer: PackageInstaller | None = None,
    ) -> None:
        self.run_config = run_config
        self.prompter = prompter
        self.installer = installer
        self.interactive = interactive
        self.preferences: Preferences | None = None

    async def run(self, args: argparse.Namespace) -> Path:
        """Resolve preferences from *args* and generate the project.

        Returns:
            Path to the generated project root.
        """
        started = time.monotonic()

        name = getattr(args, "project_directory", None)
        if isinstance(name, str) and name.strip():
            self._check_target(name.strip())

        prefilled = FlagResolver().resolve(args)
        resolver = PromptResolver(
            self.prompter,
            assume_defaults=self.run_config.assume_defaults,
            interactive=self.interactive,
        )
        on_name = None if "name" in prefilled else self._check_target
        self.preferences = await resolver.resolve(prefilled, on_name=on_name)

        print_summary_table(self.preferences.summary(), title="Project preferences")

        generator = ProjectGenerator(self.preferences, self.run_config, self.installer)
        root = await generator.generate()

        elapsed = format_duration(time.monotonic() - started)
        self._print_done(root, elapsed)
        return root

    def _check_target(self, name: str) -> None:
        validate_target(self.run_config.project_path(name))

    def _print_done(self, root: Path, elapsed: str) -> None:
        assert self.preferences is not None
        print_success(f"Project created successfully in {root} ({elapsed})")
        console.print()
        console.print("Next steps:")
        console.print(f"  cd {self.preferences.name}")
        if not self.run_config.install:
            install = " ".join(INSTALL_COMMANDS[self.preferences.package_manager])
            console.print(f"  {install}")
        console.print(f"  {DEV_COMMANDS[self.preferences.package_manager]}")
        console.print()
        console.print("[bold magenta]Happy Hacking![/bold magenta]")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _const_flag(
    group: argparse._ArgumentGroup, *flags: str, dest: str, const: Any, help: str
) -> None:
    group.add_argument(*flags, dest=dest, action="store_const", const=const, help=help)


def build_parser() -> argparse.ArgumentParser:
    """Build the ``create-appx-app`` argument parser.

    Every preference option defaults to ``None`` so the resolver can tell
    "not given" apart from an explicit choice.
    """
    parser = argparse.ArgumentParser(
        prog="create-appx-app",
        description="Create a Next.js starter project.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-appx-app my-app\n"
            "  create-appx-app my-app --ts --tailwind --eslint --use-pnpm\n"
            "  create-appx-app my-app --js --css --no-src-dir --yes\n"
        ),
    )
    parser.add_argument("project_directory", nargs="?", help="Project directory / name")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    language = parser.add_argument_group("language")
    _const_flag(language, "--ts", "--typescript", dest="language",
                const=Language.TYPESCRIPT.value, help="TypeScript project (default)")
    _const_flag(language, "--js", "--javascript", dest="language",
                const=Language.JAVASCRIPT.value, help="JavaScript project")

    style = parser.add_argument_group("styling")
    _const_flag(style, "--css", dest="style", const=Style.CSS.value, help="Plain CSS")
    _const_flag(style, "--scss", dest="style", const=Style.SCSS.value, help="SCSS (default)")
    _const_flag(style, "--tailwind", "--tailwindcss", dest="style",
                const=Style.TAILWINDCSS.value, help="Tailwind CSS")
    _const_flag(style, "--styled-components", dest="style",
                const=Style.STYLED_COMPONENTS.value, help="Styled Components")

    structure = parser.add_argument_group("structure")
    structure.add_argument("--eslint", action=argparse.BooleanOptionalAction, default=None,
                           help="ESLint config")
    structure.add_argument("--src", "--src-dir", dest="src_dir",
                           action=argparse.BooleanOptionalAction, default=None,
                           help="Put sources in a src/ directory")
    _const_flag(structure, "--app", "--app-router", dest="router",
                const=Router.APP.value, help="App Router project (default)")
    _const_flag(structure, "--page", "--page-router", dest="router",
                const=Router.PAGE.value, help="Page Router project")
    structure.add_argument("--import-alias", default=None, metavar="ALIAS",
                           help='Import alias, e.g. "@/*"')

    testing = parser.add_argument_group("testing")
    testing.add_argument("--unit", action=argparse.BooleanOptionalAction, default=None,
                         help="Jest + React Testing Library")
    testing.add_argument("--e2e", action=argparse.BooleanOptionalAction, default=None,
                         help="Cypress")

    libraries = parser.add_argument_group("libraries")
    libraries.add_argument("--ui", choices=UILibrary.values(), default=None,
                           help="UI library")
    _const_flag(libraries, "--gsap", dest="animation",
                const=AnimationLibrary.GSAP.value, help="GSAP")
    _const_flag(libraries, "--framer-motion", dest="animation",
                const=AnimationLibrary.FRAMER_MOTION.value, help="Framer Motion")
    _const_flag(libraries, "--no-animation", dest="animation",
                const=AnimationLibrary.NONE.value, help="No animation library")

    managers = parser.add_argument_group("package manager")
    for manager in PackageManager:
        _const_flag(managers, f"--use-{manager.value}", dest="package_manager",
                    const=manager.value, help=f"Bootstrap with {manager.value}")

    run = parser.add_argument_group("run")
    run.add_argument("-y", "--yes", action="store_true",
                     help="Use defaults for every preference not given as a flag")
    run.add_argument("--skip-install", action="store_true",
                     help="Do not run the package manager")
    run.add_argument("--no-git", action="store_true",
                     help="Do not initialise a git repository")
    run.add_argument("-v", "--verbose", action="store_true", help="Debug output")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``create-appx-app``."""
    parser = build_parser()
    args, unknown = parser.parse_known_args(argv)

    configure_logging(args.verbose)
    if unknown:
        logger.debug("Ignoring unknown options: %s", " ".join(unknown))

    run_config = RunConfig(
        install=not args.skip_install,
        git=not args.no_git,
        assume_defaults=args.yes,
        verbose=args.verbose,
    )

    print_banner("create-appx-app", f"v{__version__}")

    try:
        asyncio.run(Pipeline(run_config).run(args))
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        sys.exit(exc.exit_code)
    except KeyboardInterrupt:
        print_warning("Aborted.")
        sys.exit(130)


if __name__ == "__main__":
    main()
