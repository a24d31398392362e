"""Scan settings and the work-order file format.

Settings are read from environment variables and may be overridden by the
work order or CLI flags:

    SPLITPKG_SCOPES            — comma-separated accepted scopes (default: compile,runtime)
    SPLITPKG_OUTPUT_DIR        — directory for reports (default: none, nothing written)
    SPLITPKG_TOOL              — registered tool name or ``module:attr`` reference
    SPLITPKG_TOOL_COMMAND      — command line of an external scanner executable
    SPLITPKG_TIMEOUT           — seconds before the tool is abandoned (default: none)
    SPLITPKG_LOCAL_REPOSITORY  — local repository root (default: ~/.m2/repository)
"""

from __future__ import annotations

import json
import os
import shlex
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from splitpkg_scan.models import DEFAULT_SCOPES
from splitpkg_scan.exceptions import ConfigError

DEFAULT_TOOL = "jsplitpkgscan"

_ENV_KEYS = {
    "scopes": "SPLITPKG_SCOPES",
    "output_dir": "SPLITPKG_OUTPUT_DIR",
    "tool": "SPLITPKG_TOOL",
    "tool_command": "SPLITPKG_TOOL_COMMAND",
    "timeout": "SPLITPKG_TIMEOUT",
    "local_repository": "SPLITPKG_LOCAL_REPOSITORY",
}


def _format_errors(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
        for err in exc.errors()
    )


class ScanSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    scopes: frozenset[str] = DEFAULT_SCOPES
    output_dir: str | None = None
    tool: str = DEFAULT_TOOL
    tool_command: list[str] | None = None
    timeout: float | None = None
    local_repository: str | None = None

    @field_validator("scopes", mode="before")
    @classmethod
    def _split_scopes(cls, v: Any) -> Any:
        if v is None:
            return DEFAULT_SCOPES
        if isinstance(v, str):
            v = v.split(",")
        scopes = {s.strip() for s in v if isinstance(s, str) and s.strip()}
        # An empty scope set means "use the defaults".
        return scopes or DEFAULT_SCOPES

    @field_validator("tool_command", mode="before")
    @classmethod
    def _split_command(cls, v: Any) -> Any:
        if isinstance(v, str):
            return shlex.split(v) or None
        return v

    @field_validator("timeout")
    @classmethod
    def _positive_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @classmethod
    def from_env(cls, overrides: dict[str, Any] | None = None) -> ScanSettings:
        """Build settings from SPLITPKG_* variables, then apply *overrides*.

        ``None`` values in *overrides* are ignored so unset CLI flags fall
        through to the environment.
        """
        values: dict[str, Any] = {}
        for field, env_key in _ENV_KEYS.items():
            raw = os.environ.get(env_key)
            if raw:
                values[field] = raw
        for key, value in (overrides or {}).items():
            if value is not None:
                values[key] = value
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings: {_format_errors(e)}") from e


class ArtifactSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    path: str | None = None
    scope: str | None = None
    coordinates: str = ""


class DependencySchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    group_id: str
    artifact_id: str
    version: str
    scope: str = "compile"
    type: str = "jar"
    classifier: str | None = None

    @field_validator("group_id", "artifact_id", "version", mode="before")
    @classmethod
    def _strip_whitespace(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v


class WorkOrder(BaseModel):
    """Description of the project to scan, normally loaded from ``work.json``."""

    model_config = ConfigDict(extra="forbid")

    project: ArtifactSchema
    artifacts: list[ArtifactSchema] = []
    dependencies: list[DependencySchema] = []
    pom: str | None = None
    settings: dict[str, Any] = {}


def load_work_order(path: str | Path) -> WorkOrder:
    """Load and validate a work-order JSON file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except OSError as e:
        raise ConfigError(f"Cannot read work order {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    try:
        return WorkOrder.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid work order {path}: {_format_errors(e)}") from e
