"""
Classpath resolution for the launcher.

A classpath is an ordered list of absolute locations (directories or
archives importable through ``zipimport``). It is either supplied explicitly
or assembled from a local framework installation:

- ``<home>/lib``  : third-party archives the build system needs
- ``<home>/dist`` : the framework's own archives

Entries within one directory are returned in lexical order of their file
name so that two versions of the same artifact always resolve the same way.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .exceptions import InvalidPath

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

LIB_DIR = "lib"
DIST_DIR = "dist"

REQUIRED_LIB_PREFIXES: Tuple[str, ...] = ("gant_", "groovy-all", "ivy", "gpars")
DIST_ARTIFACTS: Tuple[str, ...] = ("rt", "cli", "scripts", "resources")

DEFAULT_FRAMEWORK = "griffon"


def dist_prefixes(framework: str = DEFAULT_FRAMEWORK) -> Tuple[str, ...]:
    return tuple(f"{framework}-{artifact}" for artifact in DIST_ARTIFACTS)


def to_location(path: PathLike) -> Path:
    """Return the absolute location for one classpath entry.

    Raises InvalidPath if the entry cannot be expressed as an absolute path
    with a well-formed ``file://`` URI.
    """
    try:
        raw = os.fsdecode(os.fspath(path))
        if "\x00" in raw:
            raise ValueError("embedded null byte")
        location = Path(os.path.abspath(raw))
        location.as_uri()
    except (TypeError, ValueError) as e:
        raise InvalidPath(path, str(e)) from e
    return location


def paths_to_locations(paths: Optional[Iterable[PathLike]]) -> List[Path]:
    """Convert explicit classpath entries, keeping order and duplicates."""
    if paths is None:
        return []
    return [to_location(p) for p in paths]


def _scan(directory: Path, prefixes: Sequence[str]) -> List[Path]:
    if not directory.is_dir():
        logger.warning("Classpath directory not found: %s", directory)
        return []
    names = sorted(name for name in os.listdir(directory) if name.startswith(tuple(prefixes)))
    return [to_location(directory / name) for name in names]


def required_libs_from_home(home: PathLike, framework: str = DEFAULT_FRAMEWORK) -> List[Path]:
    """Collect the build system's required archives from an installation."""
    root = Path(home)
    libs = _scan(root / LIB_DIR, REQUIRED_LIB_PREFIXES)
    dist = _scan(root / DIST_DIR, dist_prefixes(framework))
    logger.debug("Resolved %d lib and %d dist entries from %s", len(libs), len(dist), root)
    return libs + dist


def resolve(
    explicit_paths: Optional[Iterable[PathLike]] = None,
    install_root: Optional[PathLike] = None,
    framework: str = DEFAULT_FRAMEWORK,
) -> List[Path]:
    """Resolve the classpath from explicit entries or an installation root.

    Explicit entries win when both are given; with neither the result is
    empty.
    """
    if explicit_paths is not None:
        return paths_to_locations(explicit_paths)
    if install_root is not None:
        return required_libs_from_home(install_root, framework)
    return []


def to_urls(locations: Iterable[Path]) -> List[str]:
    return [Path(loc).as_uri() for loc in locations]
