"""Local output directory: raw tool output and the classification summary."""

from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Any, BinaryIO

from splitpkg_scan.models import ScanResult

REPORT_FILE = "report.txt"
STDERR_FILE = "tool-stderr.log"
SUMMARY_FILE = "split-packages.json"


def summarize(result: ScanResult) -> dict[str, Any]:
    """JSON-ready view of a scan result."""
    return {
        "artifacts_scanned": result.artifacts_scanned,
        "artifacts": list(result.artifact_set.paths),
        "skipped": [
            {"subject": e.subject, "reason": e.reason} for e in result.artifact_set.skipped
        ],
        "exit_status": result.exit_status,
        "package_count": len(result.classification),
        "split_packages": [
            {"package": v.package, "modules": [str(m) for m in v.sorted_modules()]}
            for v in result.split_packages
        ],
    }


class OutputStore:
    """Write scan artifacts under *base_dir* (created on first write)."""

    def __init__(self, base_dir: str | Path) -> None:
        self.base_dir = Path(base_dir)

    def _path(self, name: str) -> Path:
        self.base_dir.mkdir(parents=True, exist_ok=True)
        return self.base_dir / name

    def save_report(self, stream: BinaryIO) -> Path:
        """Copy the raw report from the current position of *stream*."""
        path = self._path(REPORT_FILE)
        with open(path, "wb") as fh:
            shutil.copyfileobj(stream, fh)
        return path

    def save_stderr(self, data: bytes) -> Path:
        path = self._path(STDERR_FILE)
        path.write_bytes(data)
        return path

    def save_summary(self, result: ScanResult) -> Path:
        path = self._path(SUMMARY_FILE)
        path.write_text(json.dumps(summarize(result), indent=2) + "\n")
        return path

    def read_summary(self) -> dict[str, Any] | None:
        path = self.base_dir / SUMMARY_FILE
        if path.exists():
            return json.loads(path.read_text())
        return None
