"""Build-host boundary: the narrow view of the build that the scanner needs."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from splitpkg_scan.artifacts.pom import PomReader
from splitpkg_scan.artifacts.repository import LocalRepository, RepositoryLookup
from splitpkg_scan.config import ArtifactSchema, WorkOrder
from splitpkg_scan.models import ArtifactRef, Dependency


@runtime_checkable
class BuildHost(Protocol):
    """What a build host exposes to the scanner, and nothing more."""

    def project_artifact(self) -> ArtifactRef: ...

    def project_artifacts(self) -> list[ArtifactRef]: ...

    def dependencies(self) -> list[Dependency]: ...

    @property
    def repository(self) -> RepositoryLookup: ...


class WorkOrderHost:
    """BuildHost backed by a work-order file.

    Relative artifact and POM paths are resolved against *base_dir*
    (normally the directory holding the work order).
    """

    def __init__(
        self,
        order: WorkOrder,
        base_dir: str | Path = ".",
        repository: RepositoryLookup | None = None,
    ) -> None:
        self._order = order
        self._base_dir = Path(base_dir)
        self._repository = repository or LocalRepository()

    @property
    def repository(self) -> RepositoryLookup:
        return self._repository

    def project_artifact(self) -> ArtifactRef:
        return self._to_ref(self._order.project)

    def project_artifacts(self) -> list[ArtifactRef]:
        return [self._to_ref(a) for a in self._order.artifacts]

    def dependencies(self) -> list[Dependency]:
        deps = [Dependency(**d.model_dump()) for d in self._order.dependencies]
        if self._order.pom:
            deps.extend(PomReader().read(self._resolve(self._order.pom)))
        return deps

    def _resolve(self, path: str) -> str:
        p = Path(path).expanduser()
        if not p.is_absolute():
            p = self._base_dir / p
        return str(p)

    def _to_ref(self, schema: ArtifactSchema) -> ArtifactRef:
        return ArtifactRef(
            path=self._resolve(schema.path) if schema.path else None,
            scope=schema.scope,
            coordinates=schema.coordinates,
        )
