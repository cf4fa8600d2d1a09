"""Building blocks shared by the tool modules.

A tool handler returns a ToolResult: either a widget payload (props for
the widget plus a one-line text summary for the agent) or an error message.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel


class ToolResult(BaseModel):
    """What a tool invocation hands back to the runtime."""

    output: str
    is_error: bool = False
    widget: str | None = None  # Filled in by the dispatcher
    props: dict[str, Any] | None = None


class WidgetHint(BaseModel):
    """Which widget renders a tool's result, and the captions shown meanwhile."""

    name: str
    invoking: str
    invoked: str


class ToolDeclaration(BaseModel):
    """Public description of a tool, as listed to the runtime."""

    name: str
    description: str
    read_only: bool
    input_schema: dict[str, Any]
    widget: WidgetHint


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_model: type[BaseModel]
    handler: Callable[..., Awaitable[ToolResult]]
    widget: WidgetHint
    read_only: bool = True

    def declaration(self) -> ToolDeclaration:
        return ToolDeclaration(
            name=self.name,
            description=self.description,
            read_only=self.read_only,
            input_schema=self.input_model.model_json_schema(),
            widget=self.widget,
        )


def widget(props: dict[str, Any], output: str) -> ToolResult:
    return ToolResult(output=output, props=props)


def error(message: str) -> ToolResult:
    return ToolResult(output=message, is_error=True)


def unwrap_data(body: Any) -> dict[str, Any]:
    """Return the ``data`` envelope of a backend response, or the body itself.

    Anything that isn't a JSON object yields an empty dict, so lookups on
    the result fall back to their defaults.
    """
    if not isinstance(body, dict):
        return {}
    data = body.get("data")
    if data is None:
        return body
    return data if isinstance(data, dict) else {}
