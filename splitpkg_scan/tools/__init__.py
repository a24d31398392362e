"""Scanning tool adapters."""

from splitpkg_scan.tools.base import CallableTool, ScanTool
from splitpkg_scan.tools.registry import ToolRegistry, create_default_registry, load_tool
from splitpkg_scan.tools.subprocess_tool import SubprocessTool

__all__ = [
    "CallableTool",
    "ScanTool",
    "SubprocessTool",
    "ToolRegistry",
    "create_default_registry",
    "load_tool",
]
