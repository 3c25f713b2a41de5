"""
Process configuration and YAML loaders.

Environment:
- GRIFFON_CLI_VERBOSE : enables timestamped diagnostics from the launcher
- GFLAUNCH_LOG_FILE   : default log file for the CLI
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .models import BuildFile, EntryPoints

logger = logging.getLogger(__name__)

VERBOSE_ENV = "GRIFFON_CLI_VERBOSE"
LOG_FILE_ENV = "GFLAUNCH_LOG_FILE"


def env_flag(name: str) -> bool:
    v = os.environ.get(name)
    if v is None:
        return False
    return v.strip().lower() not in ("0", "false", "no", "off", "")


def verbose_enabled() -> bool:
    return env_flag(VERBOSE_ENV)


def set_verbose(enabled: bool = True) -> None:
    os.environ[VERBOSE_ENV] = "true" if enabled else "false"


def default_log_file() -> Optional[Path]:
    v = os.environ.get(LOG_FILE_ENV)
    return Path(v) if v else None


def _load_yaml(path: Path) -> Dict[str, Any]:
    data = yaml.safe_load(Path(path).read_text())
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return data


def load_entry_points(path: Optional[Path] = None) -> EntryPoints:
    """Load framework entry point names; defaults when no file is given."""
    if path is None:
        return EntryPoints()
    data = _load_yaml(Path(path))
    # allow the names to sit under an 'entry_points' key
    data = data.get("entry_points", data)
    logger.debug("Loaded entry points from %s", path)
    return EntryPoints.model_validate(data)


def load_build_file(path: Path) -> BuildFile:
    data = _load_yaml(Path(path))
    return BuildFile.model_validate(data)
