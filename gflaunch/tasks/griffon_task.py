"""
GriffonTask: declarative build task that runs one framework script.

Typical use from a YAML build file::

    paths:
      griffon.classpath: [dist/griffon-rt-1.0.zip, lib/groovy-all-1.8.zip]
    targets:
      clean:
        - griffon: {home: /opt/griffon, script: Clean}
      package:
        - griffon: {classpathref: griffon.classpath, command: package}

``home`` points at a local installation whose ``lib`` and ``dist``
directories provide the classpath. Without an installation, give the
archives explicitly through ``classpath`` or ``classpathref``; exactly one
of the two styles must be used. ``script`` is the script name ("Clean"),
``command`` the hyphenated command form ("run-app") which is converted to
the script name.
"""

from __future__ import annotations

import logging
import os
import warnings
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List, Optional, Union

from gflaunch.core import classpath as cp
from gflaunch.core.exceptions import BuildException, ConfigError, NonZeroStatus
from gflaunch.core.launcher import Launcher
from gflaunch.core.loader import RootLoader
from gflaunch.core.models import EntryPoints, LaunchConfiguration, TaskSpec
from gflaunch.core.names import is_blank, to_command_name, to_script_name

if TYPE_CHECKING:
    from .project import Project

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def _deprecated(name: str) -> None:
    warnings.warn(f"'{name}' is ignored and will be removed", DeprecationWarning, stacklevel=3)


class GriffonTask:
    def __init__(
        self,
        project: Optional["Project"] = None,
        home: Optional[PathLike] = None,
        script: Optional[str] = None,
        command: Optional[str] = None,
        args: Optional[str] = None,
        environment: Optional[str] = None,
        include_runtime_classpath: bool = True,
        classpath: Optional[Iterable[PathLike]] = None,
        classpath_ref: Optional[str] = None,
        entry_points: Optional[EntryPoints] = None,
    ):
        self.project = project
        self.home = None if home is None else Path(home)
        self.script = script
        self.args = args
        self.environment = environment
        self.include_runtime_classpath = include_runtime_classpath
        self.entry_points = entry_points or EntryPoints()
        self.classpath: Optional[List[str]] = None
        self._compile_classpath: Optional[List[str]] = None
        self._test_classpath: Optional[List[str]] = None
        self._runtime_classpath: Optional[List[str]] = None

        if command is not None:
            self.command = command
        if classpath is not None:
            self.add_classpath(classpath)
        if classpath_ref is not None:
            self.set_classpath_ref(classpath_ref)

    @classmethod
    def from_spec(cls, spec: TaskSpec, project: "Project", entry_points: Optional[EntryPoints] = None) -> "GriffonTask":
        """Create a task from a build file entry; relative paths resolve against the project."""
        task = cls(
            project=project,
            home=None if spec.home is None else project.resolve_file(spec.home),
            script=spec.script,
            command=spec.command,
            args=spec.args,
            environment=spec.environment,
            include_runtime_classpath=spec.include_runtime_classpath,
            classpath=None if spec.classpath is None else [project.resolve_file(p) for p in spec.classpath],
            classpath_ref=spec.classpathref,
            entry_points=entry_points,
        )
        if spec.compile_classpath is not None:
            task.compile_classpath = spec.compile_classpath
        if spec.test_classpath is not None:
            task.test_classpath = spec.test_classpath
        if spec.runtime_classpath is not None:
            task.runtime_classpath = spec.runtime_classpath
        return task

    # ----- execution -----

    def configuration(self) -> LaunchConfiguration:
        """Validate the attributes and freeze them into a LaunchConfiguration."""
        if self.script is None:
            raise ConfigError("'script' must be provided.")
        base_dir = self.project.base_dir if self.project is not None else None
        config = LaunchConfiguration(
            script=self.script,
            home=self.home,
            base_dir=base_dir,
            classpath=self.classpath,
            args=self.args,
            environment=self.environment,
        )
        return config.require_single_source()

    def execute(self) -> None:
        config = self.configuration()
        self.run_griffon(config)

    def run_griffon(self, config: LaunchConfiguration) -> None:
        try:
            if config.classpath is not None:
                urls = cp.resolve(config.classpath)
            else:
                urls = cp.resolve(install_root=config.home, framework=self.entry_points.framework)
            logger.debug("Classpath for %s: %s", config.script, cp.to_urls(urls))

            root_loader = RootLoader(urls)
            home = None if config.home is None else config.home.resolve()
            if config.base_dir is not None:
                launcher = Launcher(root_loader, home, config.base_dir.resolve(), self.entry_points)
            else:
                launcher = Launcher(root_loader, home, entry_points=self.entry_points)

            if config.environment is None:
                retval = launcher.launch(config.script, config.args)
            else:
                retval = launcher.launch(config.script, config.args, config.environment)
        except Exception as ex:
            raise BuildException(f"Unable to start Griffon: {ex}", ex) from ex

        if retval != 0:
            raise NonZeroStatus(retval)
        logger.info("%s completed", config.script)

    # ----- attributes -----

    @property
    def command(self) -> Optional[str]:
        return None if self.script is None else to_command_name(self.script)

    @command.setter
    def command(self, command: Optional[str]) -> None:
        if command is None:
            raise BuildException("'command' cannot be null")
        if is_blank(command):
            raise BuildException("'command' cannot be a blank string")
        self.script = to_script_name(command)

    def add_classpath(self, classpath: Iterable[PathLike]) -> None:
        self.classpath = [os.fspath(p) for p in classpath]

    def set_classpath_ref(self, ref: str) -> None:
        if self.project is None:
            raise BuildException(f"Cannot resolve reference '{ref}' without a project")
        self.add_classpath(self.project.get_reference(ref))

    @property
    def compile_classpath(self) -> Optional[List[str]]:
        return self._compile_classpath

    @compile_classpath.setter
    def compile_classpath(self, value: Iterable[PathLike]) -> None:
        _deprecated("compile_classpath")
        self._compile_classpath = [os.fspath(p) for p in value]

    @property
    def test_classpath(self) -> Optional[List[str]]:
        return self._test_classpath

    @test_classpath.setter
    def test_classpath(self, value: Iterable[PathLike]) -> None:
        _deprecated("test_classpath")
        self._test_classpath = [os.fspath(p) for p in value]

    @property
    def runtime_classpath(self) -> Optional[List[str]]:
        return self._runtime_classpath

    @runtime_classpath.setter
    def runtime_classpath(self, value: Iterable[PathLike]) -> None:
        _deprecated("runtime_classpath")
        self._runtime_classpath = [os.fspath(p) for p in value]

    def __repr__(self) -> str:
        source = f"home={self.home}" if self.home is not None else f"classpath={self.classpath}"
        return f"GriffonTask(script={self.script!r}, {source}, env={self.environment!r})"
