"""SplitPackageScanner — collect artifacts, run the tool, classify its report."""

from __future__ import annotations

import io
import tempfile
from contextlib import ExitStack
from typing import BinaryIO

import structlog

from splitpkg_scan.artifacts.builder import build_artifact_set
from splitpkg_scan.artifacts.host import BuildHost
from splitpkg_scan.config import ScanSettings
from splitpkg_scan.exceptions import ToolInvocationError
from splitpkg_scan.models import ArtifactSet, ScanResult
from splitpkg_scan.output import OutputStore
from splitpkg_scan.report.aggregator import SplitPackageAggregator
from splitpkg_scan.report.grammar import ArrowGrammar
from splitpkg_scan.report.parser import ReportParser
from splitpkg_scan.tools.base import ScanTool
from splitpkg_scan.verdict import LoggingVerdictConsumer, VerdictConsumer

log = structlog.get_logger("splitpkg_scan.scanner")

# Tool output above this size is spooled to disk instead of memory.
_SPOOL_MAX_BYTES = 8 * 1024 * 1024


class SplitPackageScanner:
    """
    One scan per call, no state kept between runs.

    Pipeline:
        BuildHost -> build_artifact_set -> ScanTool.run(paths)
            -> ReportParser (lazy) -> SplitPackageAggregator -> VerdictConsumer
    """

    def __init__(
        self,
        tool: ScanTool,
        consumer: VerdictConsumer | None = None,
        settings: ScanSettings | None = None,
        output_store: OutputStore | None = None,
        grammar: ArrowGrammar | None = None,
    ) -> None:
        self.tool = tool
        self.consumer = consumer or LoggingVerdictConsumer()
        self.settings = settings or ScanSettings()
        self.output_store = output_store
        self.grammar = grammar

    def collect(self, host: BuildHost) -> ArtifactSet:
        """Select the artifacts of *host* to scan."""
        primary = host.project_artifact()
        log.debug("scanner.project", artifact=primary.describe(), file=primary.path)
        return build_artifact_set(
            primary,
            host.project_artifacts(),
            host.dependencies(),
            self.settings.scopes,
            host.repository,
        )

    def scan(self, host: BuildHost) -> ScanResult:
        return self.scan_artifacts(self.collect(host))

    def scan_artifacts(self, artifact_set: ArtifactSet) -> ScanResult:
        """
        Run the tool over *artifact_set* and classify every reported package.

        Raises ToolInvocationError if the tool cannot run or fails, and
        ParseError if the report holds an undecodable record.
        """
        log.info("scanner.processing", tool=self.tool.name, artifacts=len(artifact_set))
        log.debug("scanner.artifacts", paths=artifact_set.paths)
        try:
            if not artifact_set:
                log.info("scanner.nothing_to_scan")
                result = ScanResult(artifact_set=artifact_set, classification={})
            else:
                result = self._run_and_classify(artifact_set)

            for verdict in result.verdicts:
                self.consumer.on_package(verdict.package, verdict.modules)
            if self.output_store is not None:
                self.output_store.save_summary(result)
            log.info(
                "scanner.classified",
                packages=len(result.classification),
                split=len(result.split_packages),
            )
            return result
        finally:
            log.info("scanner.finished", tool=self.tool.name)

    def _run_and_classify(self, artifact_set: ArtifactSet) -> ScanResult:
        with ExitStack() as stack:
            stdin = stack.enter_context(io.BytesIO(b""))
            out = stack.enter_context(tempfile.SpooledTemporaryFile(max_size=_SPOOL_MAX_BYTES))
            err = stack.enter_context(tempfile.SpooledTemporaryFile(max_size=_SPOOL_MAX_BYTES))

            status = self._invoke(stdin, out, err, artifact_set.paths)

            out.seek(0)
            if self.output_store is not None:
                self.output_store.save_report(out)
                out.seek(0)

            parser = ReportParser(self.grammar)
            aggregator = SplitPackageAggregator().consume(parser.parse(out))
            log.debug(
                "scanner.report_parsed",
                lines=parser.lines_read,
                records=parser.records,
                skipped=parser.noise_lines,
            )
            return ScanResult(
                artifact_set=artifact_set,
                classification=aggregator.classification(),
                exit_status=status,
            )

    def _invoke(
        self,
        stdin: BinaryIO,
        out: BinaryIO,
        err: BinaryIO,
        paths: list[str],
    ) -> int:
        try:
            status = self.tool.run(stdin, out, err, list(paths))
        except ToolInvocationError as e:
            if e.stderr and self.output_store is not None:
                self.output_store.save_stderr(e.stderr.encode("utf-8"))
            raise
        except Exception as e:
            raise ToolInvocationError(f"{self.tool.name} failed: {e}") from e

        err.seek(0)
        stderr = err.read()
        if stderr and self.output_store is not None:
            self.output_store.save_stderr(stderr)

        if status != 0:
            text = stderr.decode("utf-8", errors="replace").strip()
            raise ToolInvocationError(
                f"{self.tool.name} exited with status {status}",
                exit_status=status,
                stderr=text,
            )
        return status
