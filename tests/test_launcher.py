import re
from pathlib import Path

import pytest

from gflaunch.core.exceptions import BootstrapFailure, ClassNotFoundError, LaunchFailure
from gflaunch.core.launcher import Launcher, create_launcher
from gflaunch.core.loader import RootLoader
from gflaunch.core.models import EntryPoints


@pytest.fixture
def launcher(framework_dir, tmp_path):
    (tmp_path / "project").mkdir()
    return Launcher(RootLoader([framework_dir]), tmp_path / "home", tmp_path / "project")


def test_bootstrap_sequence(launcher, tmp_path):
    settings = launcher.settings
    assert settings.events == ["constructed", "holder", "root_loader", "setup"]
    assert settings.griffon_home == tmp_path / "home"
    assert settings.base_dir == tmp_path / "project"
    assert settings.root_loader is launcher.class_loader


def test_settings_registered_with_holder(launcher):
    holder = launcher.class_loader.load_class("griffon.util.BuildSettingsHolder")
    assert holder.settings is launcher.settings


def test_bootstrap_without_home_or_base_dir(framework_dir):
    launcher = Launcher(RootLoader([framework_dir]))
    assert launcher.settings.griffon_home is None
    assert launcher.settings.base_dir is None


def test_bootstrap_without_holder(framework_dir):
    ep = EntryPoints(settings_holder_class=None)
    launcher = Launcher(RootLoader([framework_dir]), entry_points=ep)
    assert launcher.settings.events == ["constructed", "root_loader"]
    setup = launcher.class_loader.load_class("griffon.cli.GriffonSetup")
    assert setup.runs == 1


def test_missing_framework_is_bootstrap_failure(tmp_path):
    with pytest.raises(BootstrapFailure) as info:
        Launcher(RootLoader([tmp_path / "empty"]))
    assert isinstance(info.value.__cause__, ClassNotFoundError)


def test_failing_setup_hook_is_bootstrap_failure(framework_dir):
    ep = EntryPoints(setup_method="explode")
    with pytest.raises(BootstrapFailure) as info:
        Launcher(RootLoader([framework_dir]), entry_points=ep)
    assert "setup exploded" in str(info.value)


def test_launch_single_argument_uses_two_arg_form(launcher):
    assert launcher.launch("Compile") == 0
    assert launcher.settings.calls == [("Compile", None)]


def test_launch_with_args(launcher):
    launcher.launch("Compile", "-verboseCompile")
    assert launcher.settings.calls[-1] == ("Compile", "-verboseCompile")


def test_launch_with_environment_uses_three_arg_form(launcher):
    launcher.launch("Run", "-x", "test")
    assert launcher.settings.calls[-1] == ("Run", "-x", "test")
    launcher.launch("Run", None, "production")
    assert launcher.settings.calls[-1] == ("Run", None, "production")


def test_fresh_script_runner_per_launch(launcher):
    launcher.launch("Clean")
    launcher.launch("Compile")
    runner = launcher.class_loader.load_class("griffon.cli.GriffonScriptRunner")
    assert runner.instances == 2


def test_nonzero_status_is_returned(launcher):
    assert launcher.launch("Fail") == 1
    assert launcher.launch("Crash", "a b") == 3


def test_framework_error_is_launch_failure(launcher):
    with pytest.raises(LaunchFailure) as info:
        launcher.launch("Boom")
    assert info.value.__cause__ is not None
    assert "script blew up" in str(info.value)


def test_non_integer_status_is_launch_failure(launcher):
    with pytest.raises(LaunchFailure) as info:
        launcher.launch("Text")
    assert isinstance(info.value.__cause__, TypeError)


def test_missing_runner_is_launch_failure(framework_dir):
    ep = EntryPoints(script_runner_class="griffon.cli.NoSuchRunner")
    launcher = Launcher(RootLoader([framework_dir]), entry_points=ep)
    with pytest.raises(LaunchFailure):
        launcher.launch("Compile")


def test_settings_pass_through(launcher, tmp_path):
    assert launcher.griffon_work_dir == Path("/tmp/.griffon")
    launcher.classes_dir = tmp_path / "classes"
    launcher.test_reports_dir = tmp_path / "reports"
    launcher.project_plugins_dir = tmp_path / "plugins"
    assert launcher.settings.classes_dir == tmp_path / "classes"
    assert launcher.test_reports_dir == tmp_path / "reports"
    assert launcher.project_plugins_dir == tmp_path / "plugins"

    deps = [tmp_path / "a.zip", tmp_path / "b.zip"]
    launcher.compile_dependencies = deps
    launcher.runtime_dependencies = deps[:1]
    assert launcher.settings.compile_dependencies is deps
    assert launcher.runtime_dependencies == deps[:1]
    assert launcher.test_dependencies == []
    assert launcher.build_dependencies == []

    launcher.dependencies_externally_configured = True
    assert launcher.settings.dependencies_externally_configured is True


def test_verbose_output(launcher, monkeypatch, capsys):
    monkeypatch.setenv("GRIFFON_CLI_VERBOSE", "true")
    assert launcher.is_debug_enabled()
    launcher.launch("Compile")
    lines = capsys.readouterr().out.splitlines()
    assert any(
        re.fullmatch(r"\[\d{2}/\d{2}/\d{2} \d{2}:\d{2}:\d{2}\] Launching Compile with args None", line)
        for line in lines
    )


def test_quiet_by_default(launcher, capsys):
    assert not launcher.is_debug_enabled()
    launcher.launch("Run", "-x", "test")
    assert capsys.readouterr().out == ""


def test_create_launcher(framework_dir):
    launcher = create_launcher([framework_dir])
    assert launcher.class_loader.urls == (framework_dir,)
    assert launcher.launch("Compile") == 0
