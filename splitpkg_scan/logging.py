"""Logging setup for the splitpkg-scan CLI.

Engine modules log through ``structlog.get_logger("splitpkg_scan.<area>")``
with event names such as ``scanner.processing``; low-level modules use
``logging.getLogger(__name__)``. Both end up in a single stderr handler so
that stdout carries nothing but scan results.

Environment:
    SPLITPKG_LOG_LEVEL   level for the ``splitpkg_scan`` loggers (default INFO)
    SPLITPKG_LOG_FORMAT  ``console`` or ``json`` (default console)
"""

from __future__ import annotations

import logging
import os
import sys

import structlog

_PACKAGE_LOGGER = "splitpkg_scan"


def _pre_chain() -> list[structlog.types.Processor]:
    """Processors applied to structlog events and stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="%H:%M:%S"),
        structlog.processors.format_exc_info,
    ]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(sort_keys=True)
    # No colours when stderr is piped into a build log
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def setup_logging(level: str | None = None) -> None:
    """Route structlog and stdlib logging of this package to stderr.

    *level* overrides SPLITPKG_LOG_LEVEL. Calling it again replaces the
    previous handler instead of adding a second one.
    """
    log_level = (level or os.environ.get("SPLITPKG_LOG_LEVEL", "INFO")).upper()
    log_format = os.environ.get("SPLITPKG_LOG_FORMAT", "console").lower()
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_format),
            ],
        )
    )

    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    for old in list(package_logger.handlers):
        package_logger.removeHandler(old)
    package_logger.addHandler(handler)
    package_logger.setLevel(log_level)
    package_logger.propagate = False
