"""
Project: base directory, named path references and targets of a build.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from gflaunch.core.configuration import load_build_file
from gflaunch.core.exceptions import BuildException
from gflaunch.core.models import EntryPoints

from .griffon_task import GriffonTask

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


class Project:
    def __init__(self, base_dir: Optional[PathLike] = None, name: Optional[str] = None):
        self.base_dir = None if base_dir is None else Path(base_dir)
        self.name = name
        self.references: Dict[str, List[str]] = {}
        self.targets: Dict[str, List[GriffonTask]] = {}

    def resolve_file(self, path: PathLike) -> Path:
        p = Path(path)
        if p.is_absolute() or self.base_dir is None:
            return p
        return self.base_dir / p

    def add_reference(self, name: str, paths: Iterable[PathLike]) -> None:
        self.references[name] = [os.fspath(self.resolve_file(p)) for p in paths]

    def get_reference(self, name: str) -> List[str]:
        try:
            return list(self.references[name])
        except KeyError:
            raise BuildException(f"Reference {name} not found.") from None

    def add_target(self, name: str, tasks: Iterable[GriffonTask]) -> None:
        self.targets[name] = list(tasks)

    def execute_target(self, name: str) -> None:
        if name not in self.targets:
            raise BuildException(f"Target \"{name}\" does not exist in the project \"{self.name}\".")
        logger.info("%s:", name)
        for task in self.targets[name]:
            task.execute()

    def execute_targets(self, names: Optional[Iterable[str]] = None) -> None:
        for name in (list(names) if names else list(self.targets)):
            self.execute_target(name)

    @classmethod
    def load_build_file(cls, path: PathLike, entry_points: Optional[EntryPoints] = None) -> "Project":
        """Read a YAML build file; base_dir defaults to the file's directory."""
        path = Path(path).resolve()
        build = load_build_file(path)
        base_dir = path.parent if build.base_dir is None else path.parent / build.base_dir
        project = cls(base_dir=base_dir, name=path.stem)
        for ref, entries in build.paths.items():
            project.add_reference(ref, entries)
        for target, steps in build.targets.items():
            project.add_target(
                target,
                [GriffonTask.from_spec(step.griffon, project, entry_points) for step in steps],
            )
        logger.debug("Loaded %d targets from %s", len(project.targets), path)
        return project
