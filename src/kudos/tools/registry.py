"""Tool registry for managing and dispatching tools."""

import time
from typing import Any

from ..logging import JSONLLogger, safe_emit
from .base import Tool, ToolResult


class ToolRegistry:
    """Registry for available tools.

    When an event logger is given, every dispatch writes a `tool_call`
    entry before running the tool and a `tool_result` entry after it.
    """

    def __init__(self, event_logger: JSONLLogger | None = None) -> None:
        self._tools: dict[str, Tool] = {}
        self._event_logger = event_logger

    def register(self, tool: Tool) -> None:
        """Register a tool."""
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' already registered")
        self._tools[tool.name] = tool

    def unregister(self, name: str) -> None:
        """Unregister a tool by name."""
        if name in self._tools:
            del self._tools[name]

    def get(self, name: str) -> Tool | None:
        """Get a tool by name."""
        return self._tools.get(name)

    def list_tools(self) -> list[str]:
        """List all registered tool names."""
        return list(self._tools.keys())

    def get_tools_schema(self) -> list[dict[str, Any]]:
        """Get schemas for all tools (for LLM function calling)."""
        return [tool.get_schema() for tool in self._tools.values()]

    async def dispatch(self, tool_name: str, args: dict[str, Any]) -> ToolResult:
        """Dispatch a tool call by name with arguments."""
        if self._event_logger is not None:
            safe_emit(self._event_logger.log_tool_call, tool_name, args)

        start_time = time.monotonic()
        result = await self._run(tool_name, args)

        if self._event_logger is not None:
            login = args.get("login")
            safe_emit(
                self._event_logger.log_tool_result,
                tool_name,
                result.success,
                login=login if isinstance(login, str) else None,
                duration_ms=(time.monotonic() - start_time) * 1000,
                error=result.error,
            )

        return result

    async def _run(self, tool_name: str, args: dict[str, Any]) -> ToolResult:
        tool = self._tools.get(tool_name)

        if tool is None:
            return ToolResult(
                success=False,
                output="",
                error=f"Unknown tool: {tool_name}",
            )

        valid, error = tool.validate_args(args)
        if not valid:
            return ToolResult(success=False, output="", error=error)

        try:
            return await tool.execute(**args)
        except Exception as e:
            return ToolResult(
                success=False,
                output="",
                error=f"Tool execution failed: {e}",
            )
