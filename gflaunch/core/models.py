"""
Pydantic models for launch configuration, framework entry points and the
YAML build file schema.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .exceptions import ConfigError


class EntryPoints(BaseModel):
    """Names of the framework members the launcher calls into."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    framework: str = "griffon"
    settings_class: str = "griffon.util.BuildSettings"
    # None disables registration with a global holder
    settings_holder_class: Optional[str] = "griffon.util.BuildSettingsHolder"
    setup_class: str = "griffon.cli.GriffonSetup"
    script_runner_class: str = "griffon.cli.GriffonScriptRunner"

    set_settings_method: str = "set_settings"
    set_root_loader_method: str = "set_root_loader"
    setup_method: str = "run"
    execute_method: str = "execute_command"

    @field_validator("settings_class", "settings_holder_class", "setup_class", "script_runner_class")
    @classmethod
    def qualified(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        module, _, attr = v.rpartition(".")
        if not module or not attr:
            raise ValueError(f"expected a dotted 'module.Name', got {v!r}")
        return v

    @field_validator("framework")
    @classmethod
    def framework_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("framework name cannot be blank")
        return v


class LaunchConfiguration(BaseModel):
    """Everything needed to run one script through the framework."""

    model_config = ConfigDict(frozen=True)

    script: str
    home: Optional[Path] = None
    base_dir: Optional[Path] = None
    classpath: Optional[List[str]] = None
    args: Optional[str] = None
    environment: Optional[str] = None

    def require_single_source(self) -> "LaunchConfiguration":
        if self.home is None and self.classpath is None:
            raise ConfigError("One of 'home' or 'classpath' must be provided.")
        if self.home is not None and self.classpath is not None:
            raise ConfigError("You cannot use both 'home' and 'classpath' with the Griffon task.")
        return self


# ----- build file -----

class TaskSpec(BaseModel):
    """Attributes of one ``griffon`` task as written in a build file."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    home: Optional[str] = None
    script: Optional[str] = None
    command: Optional[str] = None
    args: Optional[str] = None
    environment: Optional[str] = None
    include_runtime_classpath: bool = Field(True, alias="includeRuntimeClasspath")
    classpath: Optional[List[str]] = None
    classpathref: Optional[str] = None
    compile_classpath: Optional[List[str]] = Field(None, alias="compileClasspath")
    test_classpath: Optional[List[str]] = Field(None, alias="testClasspath")
    runtime_classpath: Optional[List[str]] = Field(None, alias="runtimeClasspath")


class TargetStep(BaseModel):
    model_config = ConfigDict(extra="forbid")

    griffon: TaskSpec


class BuildFile(BaseModel):
    base_dir: Optional[str] = None
    paths: Dict[str, List[str]] = Field(default_factory=dict)
    targets: Dict[str, List[TargetStep]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_refs(self) -> "BuildFile":
        for name, steps in self.targets.items():
            for step in steps:
                ref = step.griffon.classpathref
                if ref is not None and ref not in self.paths:
                    raise ValueError(f"target '{name}' references unknown path '{ref}'")
        return self
