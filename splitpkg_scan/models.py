"""Data models shared by the artifact builder, report parser and aggregator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from splitpkg_scan.exceptions import ResolutionError

# Scopes scanned when none are configured.
DEFAULT_SCOPES: frozenset[str] = frozenset({"compile", "runtime"})


@dataclass(frozen=True)
class ArtifactRef:
    """A scannable unit: a packaged build output and the scope it participates in.

    ``path`` is None when the artifact has not been built or resolved yet.
    ``scope`` may be None for the project's own artifact.
    """

    path: str | None
    scope: str | None = None
    coordinates: str = ""

    def describe(self) -> str:
        return self.coordinates or self.path or "<unnamed artifact>"


@dataclass(frozen=True)
class Dependency:
    """A declared dependency, identified by its Maven coordinates."""

    group_id: str
    artifact_id: str
    version: str
    scope: str = "compile"
    type: str = "jar"
    classifier: str | None = None

    @property
    def coordinates(self) -> str:
        parts = [self.group_id, self.artifact_id, self.type]
        if self.classifier:
            parts.append(self.classifier)
        parts.append(self.version)
        return ":".join(parts)


@dataclass(frozen=True)
class ModuleDetail:
    """The scanning tool's identifier for the module owning a package occurrence.

    Two details denote the same owner iff all fields are equal.
    """

    name: str
    version: str | None = None
    location: str | None = None

    def __str__(self) -> str:
        text = self.name
        if self.version:
            text += f"@{self.version}"
        if self.location:
            text += f" ({self.location})"
        return text


@dataclass(frozen=True)
class PackageRecord:
    """One package occurrence reported by the scanning tool."""

    package: str
    module: ModuleDetail


@dataclass(frozen=True)
class PackageVerdict:
    """A package together with every distinct module that owns classes in it."""

    package: str
    modules: frozenset[ModuleDetail]

    @property
    def is_split(self) -> bool:
        return len(self.modules) > 1

    def sorted_modules(self) -> list[ModuleDetail]:
        return sorted(self.modules, key=str)


@dataclass
class ArtifactSet:
    """Ordered, de-duplicated artifact paths handed to the scanning tool."""

    paths: list[str] = field(default_factory=list)
    skipped: list[ResolutionError] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.paths)

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths)


@dataclass
class ScanResult:
    """Outcome of one scan run."""

    artifact_set: ArtifactSet
    classification: dict[str, frozenset[ModuleDetail]]
    exit_status: int | None = None

    @property
    def verdicts(self) -> list[PackageVerdict]:
        return [
            PackageVerdict(package=name, modules=modules)
            for name, modules in sorted(self.classification.items())
        ]

    @property
    def split_packages(self) -> list[PackageVerdict]:
        return [v for v in self.verdicts if v.is_split]

    @property
    def artifacts_scanned(self) -> int:
        return len(self.artifact_set)
