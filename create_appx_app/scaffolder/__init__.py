"""create-appx-app scaffolder -- writes the generated project tree.

Takes resolved ``Preferences`` and renders a Next.js starter project from the
Jinja2 templates under ``create_appx_app/scaffolder/templates/``, then runs
the selected package manager.

Quick usage::

    from create_appx_app.config import Preferences
    from create_appx_app.scaffolder import ProjectGenerator

    generator = ProjectGenerator(Preferences(name="demo"))
    project_path = await generator.generate("/tmp/output")
"""

from create_appx_app.scaffolder.generator import ProjectGenerator
from create_appx_app.scaffolder.installer import PackageInstaller
from create_appx_app.scaffolder.templates import TemplateRenderer

__all__ = [
    "PackageInstaller",
    "ProjectGenerator",
    "TemplateRenderer",
]
