"""Types shared by every tool module."""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from ctgov_mcp.services.dispatcher import StudiesDispatcher

ToolHandler = Callable[[StudiesDispatcher, Mapping[str, Any] | None], Awaitable[str]]


class ToolExample(BaseModel):
    description: str
    usage: dict[str, Any]


class ToolDefinition(BaseModel):
    """Name, description and static JSON input schema of one tool."""

    name: str
    description: str
    input_schema: dict[str, Any]
    examples: list[ToolExample] = []


class RegisteredTool(BaseModel):
    model_config = ConfigDict(frozen=True)

    definition: ToolDefinition
    handler: ToolHandler
