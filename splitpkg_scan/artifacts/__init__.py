"""Artifact selection: decide which artifacts are fed to the scanning tool."""

from splitpkg_scan.artifacts.builder import DEFAULT_SCOPES, build_artifact_set
from splitpkg_scan.artifacts.host import BuildHost, WorkOrderHost
from splitpkg_scan.artifacts.repository import LocalRepository, RepositoryLookup

__all__ = [
    "DEFAULT_SCOPES",
    "BuildHost",
    "LocalRepository",
    "RepositoryLookup",
    "WorkOrderHost",
    "build_artifact_set",
]
