"""Tool registry for exposing row remediation to an assistant."""

import inspect
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field


class ToolParameter(BaseModel):
    """Definition of a tool parameter."""

    name: str
    type: str  # JSON schema type
    description: str
    required: bool = True
    default: Any = None
    enum: Optional[list[str]] = None
    items: Optional[str] = None  # Element type for array parameters

    def to_property(self) -> dict:
        """JSON schema property for this parameter."""
        prop: dict[str, Any] = {"type": self.type, "description": self.description}
        if self.enum:
            prop["enum"] = self.enum
        if self.items:
            prop["items"] = {"type": self.items}
        if self.default is not None:
            prop["default"] = self.default
        return prop


class Tool(BaseModel):
    """A named operation an assistant can call, with its argument schema."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    description: str
    parameters: list[ToolParameter] = Field(default_factory=list)
    handler: Optional[Callable] = Field(default=None, exclude=True)

    def to_tool_schema(self) -> dict:
        """Tool definition in the JSON-schema form used by tool-calling LLM APIs."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": {
                "type": "object",
                "properties": {param.name: param.to_property() for param in self.parameters},
                "required": [param.name for param in self.parameters if param.required],
            },
        }


class ToolRegistry:
    """Tools available to the assistant, by name, in registration order."""

    def __init__(self):
        self._tools: dict[str, Tool] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def register(self, tool: Tool):
        """Register a tool, replacing any tool with the same name."""
        self._tools[tool.name] = tool

    def get(self, name: str) -> Optional[Tool]:
        return self._tools.get(name)

    def list_tools(self) -> list[Tool]:
        return list(self._tools.values())

    def to_tool_schemas(self) -> list[dict]:
        return [tool.to_tool_schema() for tool in self._tools.values()]

    async def execute(self, tool_name: str, /, **kwargs) -> Any:
        """
        Run a tool's handler with keyword arguments.

        Raises:
            ValueError: If the tool is unknown or has no handler
        """
        tool = self.get(tool_name)
        if tool is None:
            raise ValueError(f"Unknown tool: {tool_name}")
        if tool.handler is None:
            raise ValueError(f"Tool {tool_name} has no handler")

        result = tool.handler(**kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result
