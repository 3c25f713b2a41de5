"""
Fixtures that write a small fake Griffon build system to disk.

The fake framework exposes the same entry points the launcher drives
(BuildSettings, BuildSettingsHolder, GriffonSetup, GriffonScriptRunner) and
records what it is asked to do so tests can inspect it.
"""

import sys
import zipfile
from pathlib import Path

import pytest

FRAMEWORK_SOURCES = {
    "griffon/__init__.py": "",
    "griffon/util.py": '''
from pathlib import Path


class BuildSettings:
    def __init__(self, griffon_home=None, base_dir=None):
        self.griffon_home = griffon_home
        self.base_dir = base_dir
        self.root_loader = None
        self.events = ["constructed"]
        self.calls = []
        self.griffon_work_dir = Path("/tmp/.griffon")
        self.project_work_dir = None
        self.classes_dir = None
        self.test_classes_dir = None
        self.resources_dir = None
        self.project_plugins_dir = None
        self.test_reports_dir = None
        self.compile_dependencies = []
        self.test_dependencies = []
        self.runtime_dependencies = []
        self.build_dependencies = []
        self.dependencies_externally_configured = False

    def set_root_loader(self, loader):
        self.root_loader = loader
        self.events.append("root_loader")


class BuildSettingsHolder:
    settings = None

    @classmethod
    def set_settings(cls, settings):
        cls.settings = settings
        settings.events.append("holder")
''',
    "griffon/cli.py": '''
from griffon.util import BuildSettingsHolder

STATUS = {"Fail": 1, "Crash": 3}


class GriffonSetup:
    runs = 0

    @classmethod
    def run(cls):
        cls.runs += 1
        settings = BuildSettingsHolder.settings
        if settings is not None:
            settings.events.append("setup")

    @classmethod
    def explode(cls):
        raise RuntimeError("setup exploded")


class GriffonScriptRunner:
    instances = 0

    def __init__(self, settings):
        type(self).instances += 1
        self.settings = settings

    def execute_command(self, *params):
        # imported lazily, only resolvable while the loader is active
        from griffon.scripts import describe

        self.settings.calls.append(params)
        if self.settings.base_dir is not None:
            with open(self.settings.base_dir / "calls.log", "a") as fh:
                fh.write(f"{describe(params)} setup_runs={GriffonSetup.runs}\\n")
        script = params[0]
        if script == "Boom":
            raise RuntimeError("script blew up")
        if script == "Text":
            return "done"
        return STATUS.get(script, 0)
''',
    "griffon/scripts.py": '''
def describe(params):
    return repr(tuple(params))
''',
}


def write_framework(root: Path) -> Path:
    """Write the fake framework as a plain directory tree under root."""
    for rel, text in FRAMEWORK_SOURCES.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
    return root


def write_framework_zip(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as zf:
        for rel, text in FRAMEWORK_SOURCES.items():
            zf.writestr(rel, text)
    return path


def write_empty_zip(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w"):
        pass
    return path


@pytest.fixture
def framework_dir(tmp_path) -> Path:
    return write_framework(tmp_path / "framework")


@pytest.fixture
def griffon_home(tmp_path) -> Path:
    """A Griffon installation with matching and non-matching archives."""
    home = tmp_path / "griffon-1.0"
    for name in ("gant_groovy1.8-1.9.6.zip", "groovy-all-1.8.4.zip", "ivy-2.2.0.zip",
                 "gpars-0.12.zip", "junit-4.10.zip"):
        write_empty_zip(home / "lib" / name)
    write_framework_zip(home / "dist" / "griffon-rt-1.0.zip")
    for name in ("griffon-cli-1.0.zip", "griffon-scripts-1.0.zip",
                 "griffon-resources-1.0.zip", "griffon-docs-1.0.zip"):
        write_empty_zip(home / "dist" / name)
    return home


@pytest.fixture(autouse=True)
def _no_framework_leak(monkeypatch):
    monkeypatch.setenv("GRIFFON_CLI_VERBOSE", "false")
    yield
    leaked = [name for name in sys.modules if name == "griffon" or name.startswith("griffon.")]
    assert not leaked, f"framework modules leaked into the host: {leaked}"
