"""Tool registry and tool implementations."""

from .base import Tool, ToolResult
from .contributor import ContributorLookupTool, reset_contributor_cache
from .registry import ToolRegistry

__all__ = [
    "ContributorLookupTool",
    "Tool",
    "ToolResult",
    "ToolRegistry",
    "reset_contributor_cache",
]
