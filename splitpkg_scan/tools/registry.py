"""Tool registry — look up scanning tools by name or import reference."""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from splitpkg_scan.exceptions import ToolNotFoundError
from splitpkg_scan.tools.base import CallableTool, ScanTool
from splitpkg_scan.tools.subprocess_tool import SubprocessTool

logger = logging.getLogger(__name__)


@dataclass
class ToolDescriptor:
    """Registered tool: a name plus a factory accepting ``timeout``."""

    name: str
    description: str
    factory: Callable[..., ScanTool]


class ToolRegistry:
    """Tool registration center."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolDescriptor] = {}

    def register(self, descriptor: ToolDescriptor) -> None:
        self._tools[descriptor.name] = descriptor
        logger.debug("Registered tool: %s", descriptor.name)

    def get(self, name: str) -> ToolDescriptor | None:
        return self._tools.get(name)

    def list_all(self) -> list[ToolDescriptor]:
        return list(self._tools.values())

    def create(self, name: str, timeout: float | None = None) -> ScanTool:
        desc = self.get(name)
        if desc is None:
            available = sorted(d.name for d in self.list_all())
            raise ToolNotFoundError(f"No scanning tool named '{name}' (available: {available})")
        return desc.factory(timeout=timeout)


def create_default_registry() -> ToolRegistry:
    """Create registry with the jsplitpkgscan executable registered."""
    registry = ToolRegistry()
    registry.register(
        ToolDescriptor(
            name="jsplitpkgscan",
            description="jsplitpkgscan executable found on PATH",
            factory=lambda timeout=None: SubprocessTool(
                ["jsplitpkgscan"], timeout=timeout, name="jsplitpkgscan"
            ),
        )
    )
    return registry


def _import_reference(reference: str) -> Any:
    module_name, _, attr = reference.partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ToolNotFoundError(f"Cannot import tool module '{module_name}': {e}") from e
    target: Any = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise ToolNotFoundError(f"'{reference}' does not name an attribute") from e
    return target


def load_tool(
    reference: str,
    command: Sequence[str] | None = None,
    timeout: float | None = None,
    registry: ToolRegistry | None = None,
) -> ScanTool:
    """
    Resolve the tool to run.

    Precedence: an explicit *command* wins; a ``module:attr`` *reference*
    names a ScanTool instance, ScanTool subclass or plain function; anything
    else is looked up in *registry* by name.
    """
    if command:
        return SubprocessTool(command, timeout=timeout, name=reference)

    if ":" in reference:
        target = _import_reference(reference)
        if isinstance(target, ScanTool):
            return target
        if isinstance(target, type) and issubclass(target, ScanTool):
            return target()
        if callable(target):
            return CallableTool(target, name=reference)
        raise ToolNotFoundError(f"'{reference}' is not a scanning tool")

    return (registry or create_default_registry()).create(reference, timeout=timeout)
