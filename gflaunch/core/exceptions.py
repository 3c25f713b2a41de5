"""
Exception hierarchy for the launcher and the build task.

Launcher-side failures (InvalidPath, BootstrapFailure, LaunchFailure) are
always raised with the originating exception chained as ``__cause__``.
BuildException is the build-abort signal raised by GriffonTask.
"""

from __future__ import annotations

from typing import Optional


class LauncherError(Exception):
    """Base class for errors raised while bootstrapping or launching."""


class InvalidPath(LauncherError, ValueError):
    """A classpath entry cannot be converted to a usable location."""

    def __init__(self, path: object, reason: str = ""):
        self.path = path
        msg = f"invalid classpath entry: {path!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class ReflectionError(LauncherError):
    """Looking up or calling a framework member by name failed."""


class ClassNotFoundError(ImportError):
    """A dotted name could not be resolved inside a RootLoader."""


class BootstrapFailure(LauncherError):
    """Launcher construction failed; the instance must be discarded."""


class LaunchFailure(LauncherError):
    """Running a script through the framework failed."""


class BuildException(Exception):
    """Build-abort signal carrying a human readable message."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class ConfigError(BuildException):
    """Missing or contradictory task configuration."""


class NonZeroStatus(BuildException):
    """The framework ran the script but reported a failure status."""

    def __init__(self, status: int):
        super().__init__(f"Griffon returned non-zero value: {status}")
        self.status = status
