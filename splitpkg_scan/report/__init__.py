"""Scan report interpretation: parse the tool's text output and classify packages."""

from splitpkg_scan.report.aggregator import SplitPackageAggregator, aggregate
from splitpkg_scan.report.grammar import ArrowGrammar, LineKind
from splitpkg_scan.report.parser import ReportParser, parse_report

__all__ = [
    "ArrowGrammar",
    "LineKind",
    "ReportParser",
    "SplitPackageAggregator",
    "aggregate",
    "parse_report",
]
