"""JSON documents of the generated project: ``package.json`` and ts/jsconfig.

Dependency sets are plain tables keyed by the preference that pulls them
in, so the manifest for any combination of preferences is the union of the
matching rows.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from create_appx_app.config import AnimationLibrary, Preferences, Style, UILibrary

# ---------------------------------------------------------------------------
# Dependency tables
# ---------------------------------------------------------------------------

BASE_SCRIPTS: dict[str, str] = {
    "dev": "next dev",
    "build": "next build",
    "start": "next start",
    "lint": "next lint",
}

BASE_DEPENDENCIES: dict[str, str] = {
    "clsx": "^2.1.0",
    "next": "14.0.4",
    "react": "^18",
    "react-dom": "^18",
}

TYPESCRIPT_DEV_DEPENDENCIES: dict[str, str] = {
    "@types/node": "^20",
    "@types/react": "^18",
    "@types/react-dom": "^18",
    "typescript": "^5",
}

ESLINT_DEV_DEPENDENCIES: dict[str, str] = {
    "eslint": "^8",
    "eslint-config-next": "14.1.0",
}

STYLE_DEV_DEPENDENCIES: dict[Style, dict[str, str]] = {
    Style.CSS: {},
    Style.SCSS: {"sass": "^1.70.0"},
    Style.TAILWINDCSS: {
        "autoprefixer": "^10.0.1",
        "postcss": "^8",
        "tailwindcss": "^3.3.0",
    },
    Style.STYLED_COMPONENTS: {},
}

UNIT_TEST_SCRIPT = ("test", "jest --watchAll")

UNIT_TEST_DEV_DEPENDENCIES: dict[str, str] = {
    "@testing-library/jest-dom": "^6.3.0",
    "@testing-library/react": "^14.1.2",
    "jest": "^29.7.0",
    "jest-environment-jsdom": "^29.7.0",
}

E2E_TEST_SCRIPT = ("e2e", "cypress open")

E2E_TEST_DEV_DEPENDENCIES: dict[str, str] = {
    "cypress": "^13.6.3",
}

ANIMATION_DEPENDENCIES: dict[AnimationLibrary, dict[str, str]] = {
    AnimationLibrary.NONE: {},
    AnimationLibrary.GSAP: {"gsap": "^3.12.4", "@gsap/react": "^2.0.2"},
    AnimationLibrary.FRAMER_MOTION: {"framer-motion": "^11.0.3"},
}

# shadcn adds nothing here: its initializer edits the project itself.
UI_DEPENDENCIES: dict[UILibrary, dict[str, str]] = {
    UILibrary.NONE: {},
    UILibrary.MUI: {
        "@emotion/react": "^11.11.3",
        "@emotion/styled": "^11.11.0",
        "@mui/material": "^5.15.6",
    },
    UILibrary.ANTD: {"antd": "^5.13.2"},
    UILibrary.SHADCN: {},
}


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def package_name(preferences: Preferences) -> str:
    """Package name for the manifest: the last component of the target path."""
    return Path(preferences.name).name


def dev_dependencies(preferences: Preferences) -> dict[str, str]:
    deps: dict[str, str] = {}
    if preferences.is_typescript:
        deps.update(TYPESCRIPT_DEV_DEPENDENCIES)
    if preferences.eslint:
        deps.update(ESLINT_DEV_DEPENDENCIES)
    deps.update(STYLE_DEV_DEPENDENCIES[preferences.style])
    if preferences.unit_testing:
        deps.update(UNIT_TEST_DEV_DEPENDENCIES)
    if preferences.e2e_testing:
        deps.update(E2E_TEST_DEV_DEPENDENCIES)
    return deps


def dependencies(preferences: Preferences) -> dict[str, str]:
    deps = dict(BASE_DEPENDENCIES)
    deps.update(ANIMATION_DEPENDENCIES[preferences.animation_library])
    deps.update(UI_DEPENDENCIES[preferences.ui_library])
    return deps


def scripts(preferences: Preferences) -> dict[str, str]:
    result = dict(BASE_SCRIPTS)
    if preferences.unit_testing:
        result[UNIT_TEST_SCRIPT[0]] = UNIT_TEST_SCRIPT[1]
    if preferences.e2e_testing:
        result[E2E_TEST_SCRIPT[0]] = E2E_TEST_SCRIPT[1]
    return result


def build_manifest(preferences: Preferences) -> dict[str, Any]:
    """Return the ``package.json`` document for *preferences*."""
    return {
        "name": package_name(preferences),
        "version": "0.1.0",
        "private": True,
        "scripts": scripts(preferences),
        "dependencies": dependencies(preferences),
        "devDependencies": dev_dependencies(preferences),
    }


def build_tsconfig(preferences: Preferences) -> dict[str, Any]:
    """Return the ``tsconfig.json`` document for a TypeScript project."""
    return {
        "compilerOptions": {
            "lib": ["dom", "dom.iterable", "esnext"],
            "allowJs": True,
            "skipLibCheck": True,
            "strict": True,
            "noEmit": True,
            "esModuleInterop": True,
            "module": "esnext",
            "moduleResolution": "bundler",
            "resolveJsonModule": True,
            "isolatedModules": True,
            "jsx": "preserve",
            "incremental": True,
            "plugins": [{"name": "next"}],
            "paths": {preferences.import_alias: [preferences.alias_target]},
        },
        "include": ["next-env.d.ts", "**/*.ts", "**/*.tsx", ".next/types/**/*.ts"],
        "exclude": ["node_modules"],
    }


def build_jsconfig(preferences: Preferences) -> dict[str, Any]:
    """Return the ``jsconfig.json`` document for a JavaScript project."""
    return {
        "compilerOptions": {
            "paths": {preferences.import_alias: [preferences.alias_target]},
        },
    }
