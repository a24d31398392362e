"""Repository lookup: resolve declared dependencies to artifact files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol, runtime_checkable

from splitpkg_scan.models import Dependency

DEFAULT_LOCAL_REPOSITORY = Path.home() / ".m2" / "repository"

# Packaging types whose files are plain jars.
_JAR_TYPES = {"jar", "bundle", "maven-plugin", "ejb", "test-jar"}


@runtime_checkable
class RepositoryLookup(Protocol):
    """Read-only lookup of a dependency descriptor to an artifact path."""

    def find(self, dependency: Dependency) -> str | None: ...


class LocalRepository:
    """Resolve coordinates against a Maven-layout repository directory.

    Layout: ``<root>/<group as path>/<artifactId>/<version>/<artifactId>-<version>[-<classifier>].<ext>``
    """

    def __init__(self, root: str | os.PathLike | None = None) -> None:
        if root is None:
            root = os.environ.get("SPLITPKG_LOCAL_REPOSITORY") or DEFAULT_LOCAL_REPOSITORY
        self.root = Path(root).expanduser()

    def __repr__(self) -> str:
        return f"LocalRepository({str(self.root)!r})"

    def path_of(self, dependency: Dependency) -> Path:
        """Return where *dependency* would live, whether or not the file exists."""
        classifier = dependency.classifier
        if dependency.type == "test-jar" and not classifier:
            classifier = "tests"
        extension = "jar" if dependency.type in _JAR_TYPES else dependency.type

        file_name = f"{dependency.artifact_id}-{dependency.version}"
        if classifier:
            file_name += f"-{classifier}"
        file_name += f".{extension}"

        return (
            self.root.joinpath(*dependency.group_id.split("."))
            / dependency.artifact_id
            / dependency.version
            / file_name
        )

    def find(self, dependency: Dependency) -> str | None:
        candidate = self.path_of(dependency)
        if candidate.is_file():
            return str(candidate)
        return None
