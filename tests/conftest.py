"""Shared pytest fixtures for splitpkg-scan tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from splitpkg_scan.tools.base import CallableTool


class RecordingTool(CallableTool):
    """Fake scanner: writes a canned report and remembers its arguments."""

    def __init__(self, report: bytes = b"", status: int = 0, stderr: bytes = b"") -> None:
        self.report = report
        self.status = status
        self.stderr = stderr
        self.calls: list[list[str]] = []
        super().__init__(self._run, name="fake-scan")

    def _run(self, stdin, stdout, stderr, argv) -> int:
        self.calls.append(list(argv))
        stdout.write(self.report)
        stderr.write(self.stderr)
        return self.status


@pytest.fixture
def recording_tool():
    return RecordingTool


@pytest.fixture
def make_jar(tmp_path: Path):
    """Create an empty file standing in for a jar and return its path."""

    def _make(name: str) -> str:
        path = tmp_path / "jars" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"PK\x05\x06" + b"\x00" * 18)
        return str(path)

    return _make


@pytest.fixture
def local_repo(tmp_path: Path):
    """Maven-layout repository root with a helper to install artifacts."""
    root = tmp_path / "m2"
    root.mkdir()

    def _install(group_id: str, artifact_id: str, version: str, classifier: str | None = None,
                 extension: str = "jar") -> str:
        directory = root.joinpath(*group_id.split(".")) / artifact_id / version
        directory.mkdir(parents=True, exist_ok=True)
        name = f"{artifact_id}-{version}"
        if classifier:
            name += f"-{classifier}"
        path = directory / f"{name}.{extension}"
        path.write_bytes(b"PK")
        return str(path)

    _install.root = root
    return _install
