"""Main scaffolding orchestrator.

Takes resolved ``Preferences`` and generates a Next.js project directory:
root config files, ``package.json``, the source skeleton with layout and UI
components, global styles, and finally installs the dependencies.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from pathlib import Path
from typing import Any

from create_appx_app.config import Preferences, RunConfig, Router, Style, UILibrary
from create_appx_app.errors import FilesystemError, PackageJsonExistsError
from create_appx_app.utils import append_line, dump_json, write_text

from .installer import DEV_COMMANDS, PackageInstaller
from .manifest import build_jsconfig, build_manifest, build_tsconfig, package_name
from .templates import TemplateRenderer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Static layout
# ---------------------------------------------------------------------------

# Template -> output path, written for every project.
ROOT_FILES: dict[str, str] = {
    "root/prettierrc.j2": ".prettierrc",
    "root/gitignore.j2": ".gitignore",
    "root/README.md.j2": "README.md",
    "root/next.config.mjs.j2": "next.config.mjs",
}

APP_FOLDERS: list[str] = ["components", "hooks", "utils", "context", "data", "styles"]

# Folders that never get an index stub.
NO_INDEX_FOLDERS: frozenset[str] = frozenset({"styles", "components"})

COMPONENT_FOLDERS: list[str] = ["card", "form", "layout", "list", "ui"]

# Components shipped with real template content.  Each lives under
# ``components/<group>/<name>/`` with an ``index.j2`` and, where the component
# has them, ``styles.scss.j2`` and ``types.ts.j2``.
COMPONENT_ASSETS: dict[str, list[str]] = {
    "layout": ["Header", "Footer"],
    "ui": ["AppxGroupSignature", "Button", "Icons", "Section"],
}

SCSS_PARTIALS: list[str] = ["_mixins.scss", "_normalizers.scss", "_variables.scss"]


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Writes a project tree for one set of preferences.

    Generation is a single pass with no rollback: any error leaves the
    partially written tree in place.  Running it against a directory that
    already holds a ``package.json`` fails before anything is written.
    """

    def __init__(
        self,
        preferences: Preferences,
        run_config: RunConfig | None = None,
        installer: PackageInstaller | None = None,
    ) -> None:
        self.preferences = preferences
        self.run_config = run_config or RunConfig()
        self.renderer = TemplateRenderer()
        self.installer = installer or PackageInstaller()
        self.written: list[Path] = []

    # -- Public API --------------------------------------------------------

    async def generate(self, output_dir: str | Path | None = None) -> Path:
        """Generate the complete project structure.

        Args:
            output_dir: Parent directory of the project folder.  Defaults
                to ``RunConfig.cwd``.

        Returns:
            Path to the generated project root.

        Raises:
            FilesystemError: The project directory cannot be created.
            PackageJsonExistsError: The project directory is already a project.
            ExternalProcessError: git, the initializer or the install failed.
        """
        prefs = self.preferences
        parent = Path(output_dir) if output_dir is not None else self.run_config.cwd
        root = parent / prefs.name

        # 1. Target directory
        await self._mkdir(root)

        # 2. Never overwrite an existing project
        if (root / "package.json").exists():
            raise PackageJsonExistsError(root)

        context = self._build_context()

        # 3. Version control
        if self.run_config.git:
            await self.installer.init_repository(root)

        # 4. Fixed root files
        for template_name, output_name in ROOT_FILES.items():
            await self._render(template_name, root / output_name, context)

        # 5-9. Language, lint, styling and test configs
        await self._write_project_configs(root, context)

        # 11. Manifest
        manifest = build_manifest(prefs)
        await self._write(root / "package.json", dump_json(manifest))

        # 10. Deliberately after step 11: the shadcn initializer reads
        # package.json, so the manifest must already be on disk.
        if prefs.ui_library is UILibrary.SHADCN:
            await self.installer.init_shadcn(root)

        # 12. Source skeleton
        source_root = root / "src" if prefs.src_dir else root
        await self._mkdir(root / "public")
        await self._mkdir(source_root)
        if prefs.router is Router.APP:
            await self._render_app_router(source_root, context)
        await self._create_app_folders(source_root, context)

        # 13. Global styles
        await self._render_global_styles(source_root / "styles", context)

        # 14. Dependencies
        if self.run_config.install:
            await self.installer.install(prefs.package_manager, root)

        logger.debug("Generated %d files under %s", len(self.written), root)
        return root

    # -- Context building --------------------------------------------------

    def _build_context(self) -> dict[str, Any]:
        """Build the Jinja2 template context from the preferences."""
        prefs = self.preferences
        return {
            "project_name": package_name(prefs),
            "typescript": prefs.is_typescript,
            "style": prefs.style.value,
            "scss": prefs.style is Style.SCSS,
            "src_dir": prefs.src_dir,
            "eslint": prefs.eslint,
            "unit_testing": prefs.unit_testing,
            "e2e_testing": prefs.e2e_testing,
            "ui_library": prefs.ui_library.value,
            "animation_library": prefs.animation_library.value,
            "package_manager": prefs.package_manager.value,
            "dev_command": DEV_COMMANDS[prefs.package_manager],
            "import_alias": prefs.import_alias,
            "jest_alias_pattern": json.dumps(_alias_pattern(prefs.import_alias)),
            "jest_alias_target": json.dumps(_alias_replacement(prefs)),
        }

    # -- Project configs ---------------------------------------------------

    async def _write_project_configs(self, root: Path, ctx: dict[str, Any]) -> None:
        prefs = self.preferences

        if prefs.is_typescript:
            await self._render("root/next-env.d.ts.j2", root / "next-env.d.ts", ctx)
            await self._write(root / "tsconfig.json", dump_json(build_tsconfig(prefs)))
        else:
            await self._write(root / "jsconfig.json", dump_json(build_jsconfig(prefs)))

        if prefs.eslint:
            await self._render("root/eslintrc.json.j2", root / ".eslintrc.json", ctx)

        if prefs.style is Style.TAILWINDCSS:
            await self._render(
                "root/tailwind.config.j2", root / f"tailwind.config.{prefs.script_ext}", ctx
            )
            await self._render("root/postcss.config.js.j2", root / "postcss.config.js", ctx)

        if prefs.unit_testing:
            await self._render("root/jest.config.js.j2", root / "jest.config.js", ctx)
            await self._render("root/jest.setup.js.j2", root / "jest.setup.js", ctx)

        if prefs.e2e_testing:
            await self._render("root/cypress.config.js.j2", root / "cypress.config.js", ctx)

    # -- App router --------------------------------------------------------

    async def _render_app_router(self, source_root: Path, ctx: dict[str, Any]) -> None:
        prefs = self.preferences
        app = source_root / "app"
        home = app / "(home)"
        jsx = prefs.component_ext

        await self._mkdir(home / "sections")
        await self._write(home / "sections" / f"index.{prefs.script_ext}", "")
        await self._render("app/layout.j2", app / f"layout.{jsx}", ctx)
        await self._render("app/providers.j2", app / f"providers.{jsx}", ctx)
        await self._render("app/(home)/page.j2", home / f"page.{jsx}", ctx)
        if prefs.is_typescript:
            await self._render("app/types.ts.j2", app / "types.ts", ctx)

    # -- Folders and components --------------------------------------------

    async def _create_app_folders(self, source_root: Path, ctx: dict[str, Any]) -> None:
        ext = self.preferences.script_ext
        for folder in APP_FOLDERS:
            path = source_root / folder
            await self._mkdir(path)
            if folder not in NO_INDEX_FOLDERS:
                await self._write(path / f"index.{ext}", "")

        components = source_root / "components"
        for folder in COMPONENT_FOLDERS:
            path = components / folder
            await self._mkdir(path)
            index = path / f"index.{ext}"
            await self._write(index, "")

            assets = COMPONENT_ASSETS.get(folder, [])
            for name in assets:
                await self._render_component(f"components/{folder}/{name}", path / name, ctx)
            for name in assets:
                await asyncio.to_thread(append_line, index, f"export {{ {name} }} from './{name}'")

    async def _render_component(self, prefix: str, target: Path, ctx: dict[str, Any]) -> None:
        prefs = self.preferences
        styles = f"{prefix}/styles.scss.j2"
        types = f"{prefix}/types.ts.j2"
        with_styles = prefs.style is Style.SCSS and self.renderer.has_template(styles)
        component_ctx = {**ctx, "component": target.name, "with_styles": with_styles}

        await self._mkdir(target)
        await self._render(f"{prefix}/index.j2", target / f"index.{prefs.component_ext}", component_ctx)
        if with_styles:
            await self._render(styles, target / "styles.scss", component_ctx)
        if prefs.is_typescript and self.renderer.has_template(types):
            await self._render(types, target / "types.ts", component_ctx)

    # -- Global styles -----------------------------------------------------

    async def _render_global_styles(self, styles: Path, ctx: dict[str, Any]) -> None:
        style = self.preferences.style
        if style is Style.CSS:
            await self._render("styles/css/main.css.j2", styles / "main.css", ctx)
        elif style is Style.SCSS:
            await self._mkdir(styles / "globals")
            for partial in SCSS_PARTIALS:
                await self._render(
                    f"styles/scss/globals/{partial}.j2", styles / "globals" / partial, ctx
                )
            await self._render("styles/scss/main.scss.j2", styles / "main.scss", ctx)
        elif style is Style.TAILWINDCSS:
            await self._render("styles/tailwindcss/main.css.j2", styles / "main.css", ctx)
        # styled-components keeps its styles next to the components.

    # -- Internal helpers --------------------------------------------------

    async def _mkdir(self, path: Path) -> None:
        try:
            await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(path, exc.strerror or str(exc)) from exc

    async def _write(self, path: Path, content: str) -> None:
        try:
            self.written.append(await asyncio.to_thread(write_text, path, content))
        except OSError as exc:
            raise FilesystemError(path, exc.strerror or str(exc)) from exc

    async def _render(self, template_name: str, path: Path, ctx: dict[str, Any]) -> None:
        try:
            self.written.append(await self.renderer.render_to_file(template_name, path, ctx))
        except OSError as exc:
            raise FilesystemError(path, exc.strerror or str(exc)) from exc


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _alias_pattern(alias: str) -> str:
    """Jest ``moduleNameMapper`` key for an import alias.

    E.g. ``'@/*'`` -> ``'^@/(.*)$'``.
    """
    if alias.endswith("*"):
        return f"^{re.escape(alias[:-1])}(.*)$"
    return f"^{re.escape(alias)}$"


def _alias_replacement(preferences: Preferences) -> str:
    """Jest ``moduleNameMapper`` value matching ``_alias_pattern``."""
    base = "<rootDir>/src/" if preferences.src_dir else "<rootDir>/"
    return base + "$1" if preferences.import_alias.endswith("*") else base
