"""Tests for package.json / tsconfig / jsconfig construction.

Covers:
- The dependency union for every preference that contributes packages
- Script entries for unit and e2e testing
- Fixed manifest metadata
- Import alias mapping in ts/jsconfig
"""

from __future__ import annotations

import pytest

from create_appx_app.config import (
    AnimationLibrary,
    Language,
    Preferences,
    Style,
    UILibrary,
)
from create_appx_app.scaffolder.manifest import (
    ANIMATION_DEPENDENCIES,
    BASE_DEPENDENCIES,
    BASE_SCRIPTS,
    E2E_TEST_DEV_DEPENDENCIES,
    ESLINT_DEV_DEPENDENCIES,
    STYLE_DEV_DEPENDENCIES,
    TYPESCRIPT_DEV_DEPENDENCIES,
    UI_DEPENDENCIES,
    UNIT_TEST_DEV_DEPENDENCIES,
    build_jsconfig,
    build_manifest,
    build_tsconfig,
    package_name,
)

pytestmark = pytest.mark.unit


def _expected_dev_keys(prefs: Preferences) -> set[str]:
    keys: set[str] = set(STYLE_DEV_DEPENDENCIES[prefs.style])
    if prefs.language is Language.TYPESCRIPT:
        keys |= set(TYPESCRIPT_DEV_DEPENDENCIES)
    if prefs.eslint:
        keys |= set(ESLINT_DEV_DEPENDENCIES)
    if prefs.unit_testing:
        keys |= set(UNIT_TEST_DEV_DEPENDENCIES)
    if prefs.e2e_testing:
        keys |= set(E2E_TEST_DEV_DEPENDENCIES)
    return keys


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------


class TestManifestMetadata:
    def test_fixed_fields(self, default_preferences):
        manifest = build_manifest(default_preferences)
        assert list(manifest) == [
            "name", "version", "private", "scripts", "dependencies", "devDependencies",
        ]
        assert manifest["name"] == "appx-app"
        assert manifest["version"] == "0.1.0"
        assert manifest["private"] is True

    def test_base_scripts(self, default_preferences):
        assert build_manifest(default_preferences)["scripts"] == BASE_SCRIPTS

    def test_testing_scripts(self):
        manifest = build_manifest(Preferences(unit_testing=True, e2e_testing=True))
        assert manifest["scripts"]["test"] == "jest --watchAll"
        assert manifest["scripts"]["e2e"] == "cypress open"

    def test_package_name_uses_last_path_component(self):
        assert package_name(Preferences(name="apps/web")) == "web"


class TestDevDependencies:
    def test_demo_scenario(self, demo_preferences):
        dev = build_manifest(demo_preferences)["devDependencies"]
        assert set(dev) == {
            "@types/node", "@types/react", "@types/react-dom", "typescript",
            "eslint", "eslint-config-next", "sass",
        }

    def test_javascript_has_no_typescript_packages(self):
        dev = build_manifest(Preferences(language=Language.JAVASCRIPT, eslint=False))["devDependencies"]
        assert dev == STYLE_DEV_DEPENDENCIES[Style.SCSS]

    @pytest.mark.parametrize("style", list(Style))
    def test_style_contributions(self, style):
        prefs = Preferences(language=Language.JAVASCRIPT, eslint=False, style=style)
        assert build_manifest(prefs)["devDependencies"] == STYLE_DEV_DEPENDENCIES[style]

    def test_tailwind_companions(self):
        dev = build_manifest(Preferences(style=Style.TAILWINDCSS))["devDependencies"]
        assert {"tailwindcss", "postcss", "autoprefixer"} <= set(dev)
        assert "sass" not in dev

    @pytest.mark.parametrize("language", list(Language))
    @pytest.mark.parametrize("style", list(Style))
    @pytest.mark.parametrize("unit", [True, False])
    @pytest.mark.parametrize("e2e", [True, False])
    def test_union_of_contributions(self, language, style, unit, e2e):
        prefs = Preferences(
            language=language, style=style, unit_testing=unit, e2e_testing=e2e
        )
        assert set(build_manifest(prefs)["devDependencies"]) == _expected_dev_keys(prefs)


class TestRuntimeDependencies:
    def test_base(self, default_preferences):
        assert build_manifest(default_preferences)["dependencies"] == BASE_DEPENDENCIES

    @pytest.mark.parametrize("ui", list(UILibrary))
    @pytest.mark.parametrize("animation", list(AnimationLibrary))
    def test_union(self, ui, animation):
        deps = build_manifest(Preferences(ui_library=ui, animation_library=animation))["dependencies"]
        expected = set(BASE_DEPENDENCIES) | set(UI_DEPENDENCIES[ui]) | set(ANIMATION_DEPENDENCIES[animation])
        assert set(deps) == expected

    def test_gsap(self):
        deps = build_manifest(Preferences(animation_library=AnimationLibrary.GSAP))["dependencies"]
        assert deps["gsap"] == "^3.12.4"
        assert deps["@gsap/react"] == "^2.0.2"

    def test_mui(self):
        deps = build_manifest(Preferences(ui_library=UILibrary.MUI))["dependencies"]
        assert {"@emotion/react", "@emotion/styled", "@mui/material"} <= set(deps)

    def test_shadcn_adds_no_static_dependencies(self):
        deps = build_manifest(Preferences(ui_library=UILibrary.SHADCN))["dependencies"]
        assert deps == BASE_DEPENDENCIES

    def test_runtime_and_dev_do_not_overlap(self):
        prefs = Preferences(
            style=Style.TAILWINDCSS, unit_testing=True, e2e_testing=True,
            ui_library=UILibrary.MUI, animation_library=AnimationLibrary.GSAP,
        )
        manifest = build_manifest(prefs)
        assert not set(manifest["dependencies"]) & set(manifest["devDependencies"])


# ---------------------------------------------------------------------------
# ts/jsconfig
# ---------------------------------------------------------------------------


class TestProjectConfigs:
    def test_tsconfig_paths(self, demo_preferences):
        config = build_tsconfig(demo_preferences)
        assert config["compilerOptions"]["paths"] == {"@/*": ["./src/*"]}
        assert config["compilerOptions"]["strict"] is True
        assert "next-env.d.ts" in config["include"]

    def test_jsconfig_paths_without_src(self):
        prefs = Preferences(language=Language.JAVASCRIPT, src_dir=False, import_alias="#/*")
        assert build_jsconfig(prefs) == {"compilerOptions": {"paths": {"#/*": ["./*"]}}}
