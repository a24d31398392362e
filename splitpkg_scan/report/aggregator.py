"""Group package records by package and flag packages owned by several modules."""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable

from splitpkg_scan.models import ModuleDetail, PackageRecord, PackageVerdict


class SplitPackageAggregator:
    """Map each package to the set of distinct modules that own it.

    Insertion is idempotent and order-independent. A package is only
    present once at least one record for it has been added.
    """

    def __init__(self) -> None:
        self._owners: defaultdict[str, set[ModuleDetail]] = defaultdict(set)

    def __len__(self) -> int:
        return len(self._owners)

    def __contains__(self, package: object) -> bool:
        return package in self._owners

    def add(self, record: PackageRecord) -> None:
        self._owners[record.package].add(record.module)

    def consume(self, records: Iterable[PackageRecord]) -> SplitPackageAggregator:
        for record in records:
            self.add(record)
        return self

    def owners(self, package: str) -> frozenset[ModuleDetail]:
        # .get() so that a lookup never materialises an empty entry
        return frozenset(self._owners.get(package, ()))

    def is_split(self, package: str) -> bool:
        return len(self._owners.get(package, ())) > 1

    def classification(self) -> dict[str, frozenset[ModuleDetail]]:
        """Snapshot of the current mapping, safe to keep after further adds."""
        return {name: frozenset(modules) for name, modules in self._owners.items()}

    def verdicts(self) -> list[PackageVerdict]:
        """All packages in name order."""
        return [
            PackageVerdict(package=name, modules=frozenset(modules))
            for name, modules in sorted(self._owners.items())
        ]

    def split_packages(self) -> list[PackageVerdict]:
        return [v for v in self.verdicts() if v.is_split]


def aggregate(records: Iterable[PackageRecord]) -> dict[str, frozenset[ModuleDetail]]:
    """Classify a complete record stream in one call."""
    return SplitPackageAggregator().consume(records).classification()
