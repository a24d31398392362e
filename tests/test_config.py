"""Tests for ScanSettings, work-order loading and WorkOrderHost."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from splitpkg_scan.artifacts.host import BuildHost, WorkOrderHost
from splitpkg_scan.config import DEFAULT_TOOL, ScanSettings, WorkOrder, load_work_order
from splitpkg_scan.exceptions import ConfigError
from splitpkg_scan.models import DEFAULT_SCOPES, Dependency


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in (
        "SPLITPKG_SCOPES",
        "SPLITPKG_OUTPUT_DIR",
        "SPLITPKG_TOOL",
        "SPLITPKG_TOOL_COMMAND",
        "SPLITPKG_TIMEOUT",
        "SPLITPKG_LOCAL_REPOSITORY",
    ):
        monkeypatch.delenv(key, raising=False)


class TestScanSettings:
    def test_defaults(self):
        settings = ScanSettings.from_env()
        assert settings.scopes == DEFAULT_SCOPES
        assert settings.tool == DEFAULT_TOOL
        assert settings.output_dir is None
        assert settings.timeout is None

    def test_scopes_from_env(self, monkeypatch):
        monkeypatch.setenv("SPLITPKG_SCOPES", "compile, provided ,")
        assert ScanSettings.from_env().scopes == {"compile", "provided"}

    def test_empty_scopes_fall_back_to_default(self):
        assert ScanSettings(scopes=[]).scopes == DEFAULT_SCOPES
        assert ScanSettings(scopes="").scopes == DEFAULT_SCOPES

    def test_override_beats_env(self, monkeypatch):
        monkeypatch.setenv("SPLITPKG_TOOL", "from-env")
        assert ScanSettings.from_env({"tool": "from-flag"}).tool == "from-flag"

    def test_none_override_ignored(self, monkeypatch):
        monkeypatch.setenv("SPLITPKG_TOOL", "from-env")
        assert ScanSettings.from_env({"tool": None}).tool == "from-env"

    def test_tool_command_split(self, monkeypatch):
        monkeypatch.setenv("SPLITPKG_TOOL_COMMAND", "java -jar 'my scanner.jar'")
        assert ScanSettings.from_env().tool_command == ["java", "-jar", "my scanner.jar"]

    def test_timeout_from_env(self, monkeypatch):
        monkeypatch.setenv("SPLITPKG_TIMEOUT", "30")
        assert ScanSettings.from_env().timeout == 30.0

    def test_invalid_timeout(self):
        with pytest.raises(ConfigError, match="timeout"):
            ScanSettings.from_env({"timeout": -1})

    def test_unknown_setting(self):
        with pytest.raises(ConfigError, match="Invalid settings"):
            ScanSettings.from_env({"colour": "blue"})


class TestLoadWorkOrder:
    def test_minimal(self, tmp_path: Path):
        path = tmp_path / "work.json"
        path.write_text(json.dumps({"project": {"path": "app.jar"}}))
        work = load_work_order(path)
        assert work.project.path == "app.jar"
        assert work.artifacts == []
        assert work.dependencies == []

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "work.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_work_order(path)

    def test_missing_project(self, tmp_path: Path):
        path = tmp_path / "work.json"
        path.write_text(json.dumps({"artifacts": []}))
        with pytest.raises(ConfigError, match="project"):
            load_work_order(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="Cannot read"):
            load_work_order(tmp_path / "absent.json")


class TestWorkOrderHost:
    def test_is_build_host(self):
        host = WorkOrderHost(WorkOrder.model_validate({"project": {}}))
        assert isinstance(host, BuildHost)

    def test_relative_paths_resolved_against_base_dir(self, tmp_path: Path):
        work = WorkOrder.model_validate(
            {
                "project": {"path": "target/app.jar"},
                "artifacts": [{"path": "/abs/lib.jar", "scope": "compile"}, {"scope": "runtime"}],
            }
        )
        host = WorkOrderHost(work, base_dir=tmp_path)
        assert host.project_artifact().path == str(tmp_path / "target" / "app.jar")
        artifacts = host.project_artifacts()
        assert artifacts[0].path == "/abs/lib.jar"
        assert artifacts[1].path is None

    def test_dependencies_from_order_and_pom(self, tmp_path: Path):
        (tmp_path / "pom.xml").write_text(
            "<project><dependencies><dependency>"
            "<groupId>g</groupId><artifactId>from-pom</artifactId><version>1</version>"
            "</dependency></dependencies></project>"
        )
        work = WorkOrder.model_validate(
            {
                "project": {"path": "app.jar"},
                "dependencies": [
                    {"group_id": " g ", "artifact_id": "declared", "version": "2", "scope": "runtime"}
                ],
                "pom": "pom.xml",
            }
        )
        deps = WorkOrderHost(work, base_dir=tmp_path).dependencies()
        assert deps == [
            Dependency(group_id="g", artifact_id="declared", version="2", scope="runtime"),
            Dependency(group_id="g", artifact_id="from-pom", version="1"),
        ]
