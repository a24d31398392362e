"""Assemble the ordered, de-duplicated list of artifact paths to scan."""

from __future__ import annotations

import os
from typing import Collection, Iterable

import structlog

from splitpkg_scan.artifacts.repository import RepositoryLookup
from splitpkg_scan.exceptions import ResolutionError
from splitpkg_scan.models import DEFAULT_SCOPES, ArtifactRef, ArtifactSet, Dependency

log = structlog.get_logger("splitpkg_scan.artifacts")


def effective_scopes(scopes: Collection[str] | None) -> frozenset[str]:
    """Return *scopes*, or the default scope set when none are configured."""
    if not scopes:
        log.debug("builder.default_scopes", scopes=sorted(DEFAULT_SCOPES))
        return DEFAULT_SCOPES
    return frozenset(scopes)


def build_artifact_set(
    primary: ArtifactRef,
    project_artifacts: Iterable[ArtifactRef],
    dependencies: Iterable[Dependency],
    scopes: Collection[str] | None,
    lookup: RepositoryLookup,
) -> ArtifactSet:
    """Build the scan input for one invocation.

    The primary artifact comes first regardless of its scope. Project
    artifacts and declared dependencies follow in their given order, kept
    only when their scope is accepted. The first occurrence of a path wins.

    Artifacts without a file and dependencies the repository cannot find
    are skipped; the corresponding :class:`ResolutionError` is recorded on
    the returned set and logged as a warning.
    """
    accepted = effective_scopes(scopes)
    result = ArtifactSet()
    seen: set[str] = set()

    def _add(path: str) -> None:
        absolute = os.path.abspath(path)
        if absolute in seen:
            log.debug("builder.duplicate_skipped", path=absolute)
            return
        seen.add(absolute)
        result.paths.append(absolute)

    def _skip(error: ResolutionError) -> None:
        log.warning("builder.unresolved", subject=error.subject, reason=error.reason)
        result.skipped.append(error)

    # Primary artifact, scope ignored
    if primary.path:
        _add(primary.path)
    else:
        _skip(ResolutionError(primary.describe(), "project artifact has no file (not built yet?)"))

    # Resolved project artifacts
    for artifact in project_artifacts:
        if artifact.scope not in accepted:
            continue
        if not artifact.path:
            _skip(ResolutionError(artifact.describe(), "artifact has no resolved file"))
            continue
        _add(artifact.path)

    # Declared dependencies, looked up in the repository
    for dependency in dependencies:
        if dependency.scope not in accepted:
            continue
        path = lookup.find(dependency)
        if path is None:
            _skip(ResolutionError(dependency.coordinates, f"not found in {lookup!r}"))
            continue
        _add(path)

    log.debug(
        "builder.artifacts_collected",
        count=len(result.paths),
        skipped=len(result.skipped),
        scopes=sorted(accepted),
    )
    return result
