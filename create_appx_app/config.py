"""create-appx-app configuration.

Typed models for everything that drives a run.  ``Preferences`` is the
resolved set of user choices consumed by the generator; ``RunConfig`` holds
run-level switches that are not part of the generated project.  Both are
Pydantic v2 models so invalid choices are rejected at construction time.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

# ---------------------------------------------------------------------------
# Choices
# ---------------------------------------------------------------------------


class Choice(str, Enum):
    """A closed set of string choices with a human-readable title."""

    @property
    def title(self) -> str:
        return _TITLES.get(self.value, self.value)

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class Language(Choice):
    TYPESCRIPT = "typescript"
    JAVASCRIPT = "javascript"


class Style(Choice):
    CSS = "css"
    SCSS = "scss"
    TAILWINDCSS = "tailwindcss"
    STYLED_COMPONENTS = "styled-components"


class Router(Choice):
    APP = "app"
    PAGE = "page"


class UILibrary(Choice):
    NONE = "none"
    MUI = "mui"
    ANTD = "antd"
    SHADCN = "shadcn"


class AnimationLibrary(Choice):
    NONE = "none"
    GSAP = "gsap"
    FRAMER_MOTION = "framer-motion"


class PackageManager(Choice):
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    BUN = "bun"


_TITLES: dict[str, str] = {
    "typescript": "TypeScript",
    "javascript": "JavaScript",
    "css": "CSS",
    "scss": "SCSS",
    "tailwindcss": "Tailwind CSS",
    "styled-components": "Styled Components",
    "app": "App router",
    "page": "Page router",
    "none": "None",
    "mui": "Material UI",
    "antd": "Ant Design",
    "shadcn": "Shadcn UI",
    "gsap": "GSAP",
    "framer-motion": "Framer Motion",
}


# ---------------------------------------------------------------------------
# Import alias
# ---------------------------------------------------------------------------

DEFAULT_IMPORT_ALIAS = "@/*"

IMPORT_ALIAS_PATTERN = re.compile(r"^[!@#$%^&]/?\*?$")


def is_valid_import_alias(alias: str) -> bool:
    """Return ``True`` if *alias* is a symbol optionally followed by ``/`` and ``*``.

    Examples::

        is_valid_import_alias("@/*") -> True
        is_valid_import_alias("@")   -> True
        is_valid_import_alias("x/*") -> False
        is_valid_import_alias("@//*") -> False
    """
    return IMPORT_ALIAS_PATTERN.fullmatch(alias) is not None


# ---------------------------------------------------------------------------
# Preference store
# ---------------------------------------------------------------------------

DEFAULT_PROJECT_NAME = "appx-app"


class Preferences(BaseModel):
    """Fully resolved choices for one generated project."""

    name: str = Field(default=DEFAULT_PROJECT_NAME, min_length=1)
    language: Language = Field(default=Language.TYPESCRIPT)
    style: Style = Field(default=Style.SCSS)
    eslint: bool = Field(default=True)
    src_dir: bool = Field(default=True, description="Nest sources under src/")
    router: Router = Field(default=Router.APP)
    unit_testing: bool = Field(default=False, description="Jest + Testing Library")
    e2e_testing: bool = Field(default=False, description="Cypress")
    ui_library: UILibrary = Field(default=UILibrary.NONE)
    animation_library: AnimationLibrary = Field(default=AnimationLibrary.NONE)
    package_manager: PackageManager = Field(default=PackageManager.YARN)
    import_alias: str = Field(default=DEFAULT_IMPORT_ALIAS)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("project name must not be empty")
        return value

    @field_validator("import_alias")
    @classmethod
    def _check_alias(cls, value: str) -> str:
        if not is_valid_import_alias(value):
            raise ValueError(f"invalid import alias {value!r}")
        return value

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def is_typescript(self) -> bool:
        return self.language is Language.TYPESCRIPT

    @property
    def script_ext(self) -> str:
        """Extension for plain modules (index stubs)."""
        return "ts" if self.is_typescript else "js"

    @property
    def component_ext(self) -> str:
        """Extension for JSX modules (components, pages, layouts)."""
        return "tsx" if self.is_typescript else "jsx"

    @property
    def alias_target(self) -> str:
        """Path the import alias resolves to in ts/jsconfig."""
        return "./src/*" if self.src_dir else "./*"

    def summary(self) -> dict[str, str]:
        """Return a ``{label: value}`` mapping for display."""
        return {
            "Project name": self.name,
            "Language": self.language.title,
            "Styling": self.style.title,
            "ESLint": _yes_no(self.eslint),
            "src/ directory": _yes_no(self.src_dir),
            "Router": self.router.title,
            "Unit testing": _yes_no(self.unit_testing),
            "E2E testing": _yes_no(self.e2e_testing),
            "UI library": self.ui_library.title,
            "Animation library": self.animation_library.title,
            "Package manager": self.package_manager.value,
            "Import alias": self.import_alias,
        }


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


# ---------------------------------------------------------------------------
# Run configuration
# ---------------------------------------------------------------------------


class RunConfig(BaseModel):
    """Run-level switches taken from the command line."""

    cwd: Path = Field(default_factory=Path.cwd, description="Where the project is created")
    install: bool = Field(default=True, description="Run the package manager at the end")
    git: bool = Field(default=True, description="Initialise a git repository")
    assume_defaults: bool = Field(default=False, description="Never prompt; use defaults")
    verbose: bool = Field(default=False)

    def project_path(self, name: str) -> Path:
        """Directory the project named *name* is generated into."""
        return self.cwd / name
