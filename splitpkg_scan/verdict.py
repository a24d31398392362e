"""Verdict consumers: receive each classified package after a scan."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import structlog

from splitpkg_scan.models import ModuleDetail, PackageVerdict

log = structlog.get_logger("splitpkg_scan.verdict")


@runtime_checkable
class VerdictConsumer(Protocol):
    """Called once per package, in package-name order."""

    def on_package(self, package: str, modules: frozenset[ModuleDetail]) -> None: ...


class LoggingVerdictConsumer:
    """Warn about split packages; clean packages are only logged at debug."""

    def __init__(self) -> None:
        self.split_count = 0

    def on_package(self, package: str, modules: frozenset[ModuleDetail]) -> None:
        if len(modules) > 1:
            self.split_count += 1
            log.warning(
                "verdict.split_package",
                package=package,
                modules=sorted(str(m) for m in modules),
            )
        else:
            log.debug("verdict.clean_package", package=package)


class CollectingVerdictConsumer:
    """Keep every verdict in memory."""

    def __init__(self) -> None:
        self.verdicts: list[PackageVerdict] = []

    def on_package(self, package: str, modules: frozenset[ModuleDetail]) -> None:
        self.verdicts.append(PackageVerdict(package=package, modules=modules))

    @property
    def split(self) -> list[PackageVerdict]:
        return [v for v in self.verdicts if v.is_split]
