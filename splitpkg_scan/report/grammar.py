"""Line grammar of the scan report.

Each line falls into exactly one of four kinds:

    BLANK    only whitespace                         -> skipped silently
    COMMENT  first non-blank character is '#'        -> skipped silently
    NOISE    no record separator '->' on the line    -> skipped with a warning
             (headers, footers, banners, summaries)
    DATA     contains '->'                           -> must decode, else ParseError

A DATA line has the shape::

    <package> -> <module>[@<version>][ (<location>)]

for example::

    com.acme.util -> acme-core@1.2.0 (/repo/acme-core-1.2.0.jar)

``<package>`` is a dot-separated Java qualified name. ``<module>`` holds no
whitespace, '@' or parentheses; ``<version>`` no whitespace or parentheses;
``<location>`` is any non-empty text inside the trailing parentheses.
"""

from __future__ import annotations

import re
from enum import Enum

from splitpkg_scan.exceptions import ParseError
from splitpkg_scan.models import ModuleDetail, PackageRecord

SEPARATOR = "->"

_PACKAGE_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*(?:\.[A-Za-z_$][A-Za-z0-9_$]*)*")
_MODULE_RE = re.compile(
    r"(?P<name>[^\s@()]+)"
    r"(?:@(?P<version>[^\s()]+))?"
    r"(?:\s+\((?P<location>.*\S.*)\))?"
)


class LineKind(Enum):
    BLANK = "blank"
    COMMENT = "comment"
    NOISE = "noise"
    DATA = "data"


class ArrowGrammar:
    """Default report grammar: ``package -> module`` records."""

    def classify(self, line: str) -> LineKind:
        stripped = line.strip()
        if not stripped:
            return LineKind.BLANK
        if stripped.startswith("#"):
            return LineKind.COMMENT
        if SEPARATOR not in stripped:
            return LineKind.NOISE
        return LineKind.DATA

    def decode(self, line: str, line_number: int) -> PackageRecord:
        """Decode a DATA line, raising :class:`ParseError` if it does not fit."""
        package_part, _, module_part = line.strip().partition(SEPARATOR)
        package = package_part.strip()
        module_text = module_part.strip()

        if not _PACKAGE_RE.fullmatch(package):
            raise ParseError(line_number, line, "invalid package name")
        m = _MODULE_RE.fullmatch(module_text)
        if m is None:
            raise ParseError(line_number, line, "invalid module detail")

        location = m.group("location")
        return PackageRecord(
            package=package,
            module=ModuleDetail(
                name=m.group("name"),
                version=m.group("version"),
                location=location.strip() if location else None,
            ),
        )
