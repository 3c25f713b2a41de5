"""
Core modules: classpath resolution, the isolated loader and the launcher.
"""

from .classpath import resolve, required_libs_from_home, paths_to_locations
from .exceptions import (
    LauncherError, InvalidPath, ReflectionError, ClassNotFoundError,
    BootstrapFailure, LaunchFailure, BuildException, ConfigError, NonZeroStatus,
)
from .loader import RootLoader
from .launcher import Launcher, create_launcher
from .models import EntryPoints, LaunchConfiguration
from .names import to_script_name, to_command_name

__all__ = [
    "resolve",
    "required_libs_from_home",
    "paths_to_locations",
    "LauncherError",
    "InvalidPath",
    "ReflectionError",
    "ClassNotFoundError",
    "BootstrapFailure",
    "LaunchFailure",
    "BuildException",
    "ConfigError",
    "NonZeroStatus",
    "RootLoader",
    "Launcher",
    "create_launcher",
    "EntryPoints",
    "LaunchConfiguration",
    "to_script_name",
    "to_command_name",
]
