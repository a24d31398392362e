"""splitpkg-scan: detect Java split packages across build artifacts."""

__version__ = "0.1.0"

from splitpkg_scan.artifacts.builder import build_artifact_set
from splitpkg_scan.exceptions import (
    ConfigError,
    ParseError,
    ResolutionError,
    SplitPkgError,
    ToolInvocationError,
    ToolNotFoundError,
)
from splitpkg_scan.models import (
    ArtifactRef,
    ArtifactSet,
    Dependency,
    ModuleDetail,
    PackageRecord,
    PackageVerdict,
    ScanResult,
)
from splitpkg_scan.report.aggregator import SplitPackageAggregator, aggregate
from splitpkg_scan.report.parser import ReportParser, parse_report
from splitpkg_scan.scanner import SplitPackageScanner

__all__ = [
    "ArtifactRef",
    "ArtifactSet",
    "ConfigError",
    "Dependency",
    "ModuleDetail",
    "PackageRecord",
    "PackageVerdict",
    "ParseError",
    "ReportParser",
    "ResolutionError",
    "ScanResult",
    "SplitPackageAggregator",
    "SplitPackageScanner",
    "SplitPkgError",
    "ToolInvocationError",
    "ToolNotFoundError",
    "aggregate",
    "build_artifact_set",
    "parse_report",
]
