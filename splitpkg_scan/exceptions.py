"""Custom exceptions for splitpkg-scan."""

from __future__ import annotations


class SplitPkgError(Exception):
    """Base exception for all split-package scan errors."""


class ConfigError(SplitPkgError):
    """Raised when a work order or settings value is invalid."""


class ResolutionError(SplitPkgError):
    """Raised when an artifact or dependency cannot be resolved to a file.

    Non-fatal: the builder records it and moves on to the next artifact.
    """

    def __init__(self, subject: str, reason: str):
        self.subject = subject
        self.reason = reason
        super().__init__(f"Cannot resolve {subject}: {reason}")


class ParseError(SplitPkgError):
    """Raised when a data line of the scan report cannot be decoded."""

    def __init__(self, line_number: int, line: str, reason: str = "malformed record"):
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"Line {line_number}: {reason}: {line!r}")


class ToolInvocationError(SplitPkgError):
    """Raised when the scanning tool is unavailable or exits abnormally."""

    artifacts_scanned = 0

    def __init__(self, message: str, exit_status: int | None = None, stderr: str = ""):
        self.exit_status = exit_status
        self.stderr = stderr
        super().__init__(message)


class ToolNotFoundError(ToolInvocationError):
    """Raised when no scanning tool is registered under the requested name."""
