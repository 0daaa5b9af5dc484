"""Exceptions raised by the scaffolding pipeline.

Every error is fatal for the run.  ``main`` is the only place that catches
them: it reports the message and exits with ``exit_code``.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for all fatal create-appx-app errors."""

    exit_code: int = 1


# ---------------------------------------------------------------------------
# Preconditions
# ---------------------------------------------------------------------------


class PreconditionError(ScaffoldError):
    """The target location cannot receive a new project."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = Path(path)
        super().__init__(message)


class PackageJsonExistsError(PreconditionError):
    """The target already contains a ``package.json``."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, f"package.json already exists in {path}")


class DirectoryExistsError(PreconditionError):
    """The target exists and is not an empty directory."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, f"Directory already exists: {path}")


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------


class InvalidProjectNameError(ScaffoldError):
    """The project name is empty once surrounding whitespace is removed."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Invalid project name: {name!r} (must not be empty)")


class AliasValidationError(ScaffoldError):
    """An import alias does not match the allowed symbol pattern."""

    def __init__(self, alias: str) -> None:
        self.alias = alias
        super().__init__(
            f"Invalid import alias: {alias!r} "
            "(expected one of ! @ # $ % ^ &, optionally followed by / and *)"
        )


class NonInteractiveError(ScaffoldError):
    """A prompt is required but there is no terminal to ask on."""

    def __init__(self, field: str, flag: str) -> None:
        self.field = field
        self.flag = flag
        super().__init__(
            f"Cannot prompt for {field} without an interactive terminal; "
            f"pass {flag} or use --yes to accept defaults"
        )


# ---------------------------------------------------------------------------
# Side effects
# ---------------------------------------------------------------------------


class ExternalProcessError(ScaffoldError):
    """An external command (git, package manager, initializer) failed."""

    def __init__(self, command: list[str], returncode: int, stderr: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        detail = f": {stderr}" if stderr else ""
        super().__init__(
            f"Command '{' '.join(command)}' exited with status {returncode}{detail}"
        )


class FilesystemError(ScaffoldError):
    """A directory or file could not be created."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Cannot create {path}: {reason}")
