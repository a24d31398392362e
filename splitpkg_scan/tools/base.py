"""Abstract interface of the external split-package scanning tool."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO, Callable, Sequence

ToolFunction = Callable[[BinaryIO, BinaryIO, BinaryIO, Sequence[str]], int]


class ScanTool(ABC):
    """
    A tool that scans artifacts and writes a text report.

    The scanner only relies on :meth:`run`: it receives the artifact paths
    as positional arguments and writes its report to *stdout*.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Tool identifier, e.g. 'jsplitpkgscan'."""
        ...

    @abstractmethod
    def run(
        self,
        stdin: BinaryIO,
        stdout: BinaryIO,
        stderr: BinaryIO,
        argv: Sequence[str],
    ) -> int:
        """Run the tool on *argv* and return its exit status (0 = success)."""
        ...

    def check_prerequisites(self) -> list[str]:
        """
        Check prerequisites.
        Returns list of missing items (empty = can run).
        """
        return []


class CallableTool(ScanTool):
    """Adapt a plain function with the ``run`` signature to a ScanTool."""

    def __init__(self, func: ToolFunction, name: str | None = None) -> None:
        self._func = func
        self._name = name or getattr(func, "__name__", "callable")

    @property
    def name(self) -> str:
        return self._name

    def run(
        self,
        stdin: BinaryIO,
        stdout: BinaryIO,
        stderr: BinaryIO,
        argv: Sequence[str],
    ) -> int:
        return self._func(stdin, stdout, stderr, argv)
