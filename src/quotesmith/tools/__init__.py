"""Assistant-facing tools for correcting quote rows."""

from .registry import ToolRegistry, Tool, ToolParameter
from .remediation import RemediationTools, build_registry

__all__ = ["ToolRegistry", "Tool", "ToolParameter", "RemediationTools", "build_registry"]
