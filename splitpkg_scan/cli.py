"""CLI entry point: splitpkg-scan.

Subcommands:
    splitpkg-scan create-work -o work.json     # Generate work order template
    splitpkg-scan run work.json                # Scan the artifacts of a project
    splitpkg-scan classify report.txt          # Classify a saved tool report
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click

from splitpkg_scan.exceptions import (
    ConfigError,
    ParseError,
    ToolInvocationError,
    ToolNotFoundError,
)
from splitpkg_scan.logging import setup_logging
from splitpkg_scan.models import PackageVerdict

# Work order template
_WORK_ORDER_TEMPLATE = {
    "project": {
        "path": "target/my-app-1.0.jar",
        "coordinates": "com.example:my-app:jar:1.0",
    },
    "artifacts": [
        {
            "path": "libs/commons-lang3-3.14.0.jar",
            "scope": "compile",
            "coordinates": "org.apache.commons:commons-lang3:jar:3.14.0",
        },
    ],
    "dependencies": [
        {
            "group_id": "com.google.guava",
            "artifact_id": "guava",
            "version": "33.0.0-jre",
            "scope": "compile",
        },
    ],
    "pom": None,
    "settings": {
        "scopes": ["compile", "runtime"],
        "output_dir": "target/splitpkg",
    },
}

EXIT_ERROR = 1
EXIT_SPLIT = 2

# Work-order settings holding paths, resolved against the work order directory.
_PATH_SETTINGS = ("output_dir", "local_repository")


def _work_order_settings(settings: dict[str, Any], base_dir: Path) -> dict[str, Any]:
    values = dict(settings)
    for key in _PATH_SETTINGS:
        value = values.get(key)
        if isinstance(value, str) and value:
            path = Path(value).expanduser()
            values[key] = str(path if path.is_absolute() else base_dir / path)
    return values


def _echo_verdicts(verdicts: list[PackageVerdict], as_json: bool) -> None:
    split = [v for v in verdicts if v.is_split]
    if as_json:
        rows = [
            {
                "package": v.package,
                "split": v.is_split,
                "modules": [str(m) for m in v.sorted_modules()],
            }
            for v in verdicts
        ]
        click.echo(json.dumps(rows, indent=2))
        return

    click.echo(f"Packages: {len(verdicts)}, split: {len(split)}")
    for v in split:
        click.echo(f"  [!] {v.package}")
        for module in v.sorted_modules():
            click.echo(f"        {module}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """splitpkg-scan: detect Java packages split across several artifacts."""
    setup_logging("DEBUG" if verbose else None)


@main.command("create-work")
@click.option("-o", "--output", default="work.json", help="Output file path")
def create_work(output: str) -> None:
    """Generate a work order template JSON file."""
    Path(output).write_text(json.dumps(_WORK_ORDER_TEMPLATE, indent=2) + "\n")
    click.echo(f"Work order template written to {output}")
    click.echo("Edit the file, then run: splitpkg-scan run " + output)


@main.command("run")
@click.argument("work_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--tool", default=None, help="Registered tool name or module:attr reference")
@click.option("--tool-command", default=None, help="Scanner command line, e.g. 'java -jar scan.jar'")
@click.option("--scope", "scopes", multiple=True, help="Accepted scope (repeatable)")
@click.option("--output-dir", default=None, help="Directory for report files")
@click.option("--timeout", type=float, default=None, help="Tool timeout in seconds")
@click.option("--local-repository", default=None, help="Local repository root")
@click.option("--fail-on-split", is_flag=True, help="Exit with status 2 if split packages exist")
@click.option("--json", "as_json", is_flag=True, help="Print every package as JSON")
def run(
    work_file: str,
    tool: str | None,
    tool_command: str | None,
    scopes: tuple[str, ...],
    output_dir: str | None,
    timeout: float | None,
    local_repository: str | None,
    fail_on_split: bool,
    as_json: bool,
) -> None:
    """Scan the artifacts described by a work order file."""
    from splitpkg_scan.artifacts.host import WorkOrderHost
    from splitpkg_scan.artifacts.repository import LocalRepository
    from splitpkg_scan.config import ScanSettings, load_work_order
    from splitpkg_scan.output import OutputStore
    from splitpkg_scan.scanner import SplitPackageScanner
    from splitpkg_scan.tools.registry import load_tool

    try:
        work = load_work_order(work_file)
        base_dir = Path(work_file).resolve().parent
        overrides = _work_order_settings(work.settings, base_dir)
        flags = {
            "tool": tool,
            "tool_command": tool_command,
            "scopes": list(scopes) or None,
            "output_dir": output_dir,
            "timeout": timeout,
            "local_repository": local_repository,
        }
        # Flags given on the command line win over the work order
        overrides.update({k: v for k, v in flags.items() if v is not None})
        settings = ScanSettings.from_env(overrides)
        host = WorkOrderHost(
            work,
            base_dir=base_dir,
            repository=LocalRepository(settings.local_repository),
        )
        scan_tool = load_tool(
            settings.tool, command=settings.tool_command, timeout=settings.timeout
        )
        missing = scan_tool.check_prerequisites()
        if missing:
            raise ToolNotFoundError(f"{scan_tool.name} cannot run: {'; '.join(missing)}")
        scanner = SplitPackageScanner(
            scan_tool,
            settings=settings,
            output_store=OutputStore(settings.output_dir) if settings.output_dir else None,
        )
        artifact_set = scanner.collect(host)
        click.echo(
            f"Processing {len(artifact_set)} artifacts"
            f" ({len(artifact_set.skipped)} unresolved)..."
        )
        result = scanner.scan_artifacts(artifact_set)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)
    except ToolInvocationError as e:
        click.echo(f"Error: {e}", err=True)
        if e.stderr:
            click.echo(e.stderr, err=True)
        click.echo(f"{e.artifacts_scanned} artifacts scanned.", err=True)
        sys.exit(EXIT_ERROR)
    except ParseError as e:
        click.echo(f"Error: unable to parse tool output: {e}", err=True)
        sys.exit(EXIT_ERROR)

    for skipped in result.artifact_set.skipped:
        click.echo(f"Warning: {skipped}", err=True)
    _echo_verdicts(result.verdicts, as_json)
    if fail_on_split and result.split_packages:
        sys.exit(EXIT_SPLIT)


@main.command("classify")
@click.argument("report_file", type=click.File("rb"))
@click.option("--fail-on-split", is_flag=True, help="Exit with status 2 if split packages exist")
@click.option("--json", "as_json", is_flag=True, help="Print every package as JSON")
def classify(report_file, fail_on_split: bool, as_json: bool) -> None:
    """Classify a report previously produced by the scanning tool ('-' for stdin)."""
    from splitpkg_scan.report.aggregator import SplitPackageAggregator
    from splitpkg_scan.report.parser import parse_report

    try:
        aggregator = SplitPackageAggregator().consume(parse_report(report_file))
    except ParseError as e:
        click.echo(f"Error: unable to parse report: {e}", err=True)
        sys.exit(EXIT_ERROR)

    verdicts = aggregator.verdicts()
    _echo_verdicts(verdicts, as_json)
    if fail_on_split and any(v.is_split for v in verdicts):
        sys.exit(EXIT_SPLIT)


if __name__ == "__main__":
    main()
