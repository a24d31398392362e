"""Streaming parser for the scan report."""

from __future__ import annotations

import io
import logging
from typing import BinaryIO, Iterable, Iterator

from splitpkg_scan.models import PackageRecord
from splitpkg_scan.report.grammar import ArrowGrammar, LineKind

logger = logging.getLogger(__name__)


class ReportParser:
    """
    Turn the raw report byte stream into PackageRecords, lazily.

    The grammar is pluggable so a change in the tool's output format stays
    confined to the grammar object. Counters are updated as the stream is
    consumed and are final once the generator is exhausted.
    """

    def __init__(self, grammar: ArrowGrammar | None = None) -> None:
        self.grammar = grammar or ArrowGrammar()
        self.lines_read = 0
        self.records = 0
        self.noise_lines = 0

    def parse(self, stream: BinaryIO | bytes | Iterable[bytes]) -> Iterator[PackageRecord]:
        """
        Yield one record per data line of *stream*.

        Single-pass: the stream is consumed as records are pulled. A
        data-shaped line that cannot be decoded raises ParseError after all
        preceding records have been yielded.
        """
        if isinstance(stream, (bytes, bytearray)):
            stream = io.BytesIO(stream)

        for line_number, raw in enumerate(stream, start=1):
            self.lines_read = line_number
            line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
            if line_number == 1:
                line = line.lstrip("\ufeff")

            kind = self.grammar.classify(line)
            if kind is LineKind.DATA:
                record = self.grammar.decode(line, line_number)
                self.records += 1
                yield record
            elif kind is LineKind.NOISE:
                self.noise_lines += 1
                logger.warning("Skipping non-record line %d: %r", line_number, line)

        logger.debug(
            "Report parsed: %d lines, %d records, %d skipped",
            self.lines_read,
            self.records,
            self.noise_lines,
        )


def parse_report(
    stream: BinaryIO | bytes | Iterable[bytes],
    grammar: ArrowGrammar | None = None,
) -> Iterator[PackageRecord]:
    """Parse *stream* with a fresh :class:`ReportParser`."""
    return ReportParser(grammar).parse(stream)
