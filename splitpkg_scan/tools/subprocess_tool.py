"""Run the scanning tool as an external process."""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import BinaryIO, Sequence

from splitpkg_scan.exceptions import ToolInvocationError
from splitpkg_scan.tools.base import ScanTool

logger = logging.getLogger(__name__)


class SubprocessTool(ScanTool):
    """
    Scanner backed by an executable, e.g. ``["jsplitpkgscan"]`` or
    ``["java", "-jar", "jsplitpkgscan.jar"]``.

    Artifact paths are appended to *command*. Without a timeout the call
    blocks until the process exits.
    """

    def __init__(
        self,
        command: Sequence[str],
        timeout: float | None = None,
        name: str | None = None,
    ) -> None:
        if not command:
            raise ValueError("command must not be empty")
        self.command = list(command)
        self.timeout = timeout
        self._name = name or self.command[0]

    @property
    def name(self) -> str:
        return self._name

    def check_prerequisites(self) -> list[str]:
        if shutil.which(self.command[0]) is None:
            return [f"executable '{self.command[0]}' not on PATH"]
        return []

    def run(
        self,
        stdin: BinaryIO,
        stdout: BinaryIO,
        stderr: BinaryIO,
        argv: Sequence[str],
    ) -> int:
        cmd = [*self.command, *argv]
        logger.debug("Running %s with %d arguments", self.command[0], len(argv))
        try:
            proc = subprocess.run(
                cmd,
                input=stdin.read(),
                capture_output=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise ToolInvocationError(f"Scanner executable not found: {self.command[0]}") from e
        except subprocess.TimeoutExpired as e:
            partial = e.stderr or b""
            raise ToolInvocationError(
                f"{self._name} did not finish within {self.timeout}s",
                stderr=partial.decode("utf-8", errors="replace").strip(),
            ) from e
        except OSError as e:
            raise ToolInvocationError(f"Cannot start {self._name}: {e}") from e

        stdout.write(proc.stdout)
        stderr.write(proc.stderr)
        return proc.returncode
