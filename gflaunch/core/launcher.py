"""
Launcher: bootstraps the framework's build system inside a RootLoader and
runs named scripts through it.

The framework is only touched through the members named in EntryPoints:

- settings type, constructed as ``Settings(home, base_dir)``
- ``Holder.set_settings(settings)`` (optional global registration)
- ``settings.set_root_loader(loader)``
- ``Setup.run()``, once per launcher
- ``Runner(settings).execute_command(script, args[, env]) -> int``

Every call into framework code happens inside the loader's activation.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, List, Optional, Union

from .configuration import VERBOSE_ENV, verbose_enabled
from .exceptions import BootstrapFailure, LaunchFailure, ReflectionError
from .loader import RootLoader
from .models import EntryPoints
from .reflection import instantiate, invoke_method
from gflaunch.utils.logging_config import get_verbose_logger

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

KEY_CLI_VERBOSE = VERBOSE_ENV


def _settings_property(name: str) -> property:
    def fget(self: "Launcher") -> Any:
        return self._get_setting(name)

    def fset(self: "Launcher", value: Any) -> None:
        self._set_setting(name, value)

    return property(fget, fset, doc=f"Pass-through to ``settings.{name}``.")


class Launcher:
    """Runs framework scripts in an isolated RootLoader.

    Construction either fully bootstraps the framework or raises
    BootstrapFailure; there is no half-initialised launcher.
    """

    def __init__(
        self,
        class_loader: RootLoader,
        griffon_home: Optional[PathLike] = None,
        base_dir: Optional[PathLike] = None,
        entry_points: Optional[EntryPoints] = None,
    ):
        self.class_loader = class_loader
        self.entry_points = entry_points or EntryPoints()
        ep = self.entry_points
        try:
            with class_loader.activated():
                settings_class = class_loader.load_class(ep.settings_class)
                home = None if griffon_home is None else Path(griffon_home)
                base = None if base_dir is None else Path(base_dir)
                self.settings = instantiate(settings_class, home, base)

                if ep.settings_holder_class is not None:
                    holder = class_loader.load_class(ep.settings_holder_class)
                    invoke_method(holder, ep.set_settings_method, self.settings)

                invoke_method(self.settings, ep.set_root_loader_method, class_loader)
                self._call_setup()
        except Exception as e:
            raise BootstrapFailure(f"Unable to bootstrap {ep.framework}: {e}") from e
        self.debug(f"Bootstrapped {ep.framework} (home={griffon_home}, base_dir={base_dir})")

    def _call_setup(self) -> None:
        setup_class = self.class_loader.load_class(self.entry_points.setup_class)
        invoke_method(setup_class, self.entry_points.setup_method)

    def _create_script_runner(self) -> Any:
        runner_class = self.class_loader.load_class(self.entry_points.script_runner_class)
        return instantiate(runner_class, self.settings)

    def launch(self, script: str, args: Optional[str] = None, env: Optional[str] = None) -> int:
        """Execute the named script, e.g. "Compile".

        Args:
            script: Script name as the framework knows it
            args: Single whitespace separated argument string, or None
            env: Environment to run in ("development", "production", ...);
                None runs the script in its default environment

        Returns:
            The status reported by the build system (notionally the exit code)
        """
        if env is None:
            self.debug(f"Launching {script} with args {args}")
            params = (script, args)
        else:
            self.debug(f"Launching {script} with env {env} and args {args}")
            params = (script, args, env)

        try:
            with self.class_loader.activated():
                runner = self._create_script_runner()
                retval = invoke_method(runner, self.entry_points.execute_method, *params)
        except Exception as e:
            raise LaunchFailure(f"Unable to launch {script}: {e}") from e

        if isinstance(retval, bool) or not isinstance(retval, int):
            raise LaunchFailure(f"{script}: expected an integer status") from TypeError(
                f"{self.entry_points.execute_method} returned {type(retval).__name__}: {retval!r}"
            )
        self.debug(f"{script} finished with status {retval}")
        return retval

    # ----- settings pass-through -----

    def _get_setting(self, name: str) -> Any:
        with self.class_loader.activated():
            try:
                return getattr(self.settings, name)
            except AttributeError as e:
                raise ReflectionError(f"settings have no property {name!r}") from e

    def _set_setting(self, name: str, value: Any) -> None:
        with self.class_loader.activated():
            setattr(self.settings, name, value)

    griffon_work_dir = _settings_property("griffon_work_dir")
    project_work_dir = _settings_property("project_work_dir")
    classes_dir = _settings_property("classes_dir")
    test_classes_dir = _settings_property("test_classes_dir")
    resources_dir = _settings_property("resources_dir")
    project_plugins_dir = _settings_property("project_plugins_dir")
    test_reports_dir = _settings_property("test_reports_dir")

    compile_dependencies = _settings_property("compile_dependencies")
    test_dependencies = _settings_property("test_dependencies")
    runtime_dependencies = _settings_property("runtime_dependencies")
    build_dependencies = _settings_property("build_dependencies")

    dependencies_externally_configured = _settings_property("dependencies_externally_configured")

    # ----- diagnostics -----

    def debug(self, msg: str) -> None:
        logger.debug(msg)
        if self.is_debug_enabled():
            get_verbose_logger().info(msg)

    @staticmethod
    def is_debug_enabled() -> bool:
        return verbose_enabled()


def create_launcher(
    classpath: List[Path],
    griffon_home: Optional[PathLike] = None,
    base_dir: Optional[PathLike] = None,
    entry_points: Optional[EntryPoints] = None,
    parent: Optional[RootLoader] = None,
) -> Launcher:
    """Build a fresh RootLoader over ``classpath`` and bootstrap a Launcher in it."""
    return Launcher(RootLoader(classpath, parent), griffon_home, base_dir, entry_points)
