"""FastAPI server — the HTTP surface agent runtimes talk to.

Endpoints:

- GET  /health          — Liveness check
- GET  /server          — Server name, version and public URL
- GET  /tools           — Declarations of every tool (schema, widget hint)
- POST /tools/{name}    — Invoke a tool with a JSON object of arguments
- POST /followup        — Typed drill-down from a widget (chart / report)
- POST /chat            — Free text; known follow-ups skip the LLM

Run locally with:
    python -m opendental_bridge
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Body, FastAPI, HTTPException
from pydantic import BaseModel

from opendental_bridge import __version__
from opendental_bridge.agent import run_agent
from opendental_bridge.config import MCP_URL
from opendental_bridge.followup import FollowUpRequest, parse_follow_up
from opendental_bridge.opendental_client import close_client
from opendental_bridge.tools.base import ToolDeclaration, ToolResult
from opendental_bridge.tools.registry import UnknownToolError, dispatch, list_tools

SERVER_NAME = "opendental"
SERVER_TITLE = "OpenDental"
SERVER_DESCRIPTION = "OpenDental patient management via CUA"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    await close_client()


app = FastAPI(
    title=SERVER_TITLE,
    description=SERVER_DESCRIPTION,
    version=__version__,
    lifespan=lifespan,
)


class ServerInfo(BaseModel):
    name: str
    title: str
    version: str
    description: str
    base_url: str


class ChatRequest(BaseModel):
    """What the client sends to the /chat endpoint."""

    message: str


class ChatResponse(BaseModel):
    """What the /chat endpoint sends back."""

    response: str  # Text answer for the conversation
    result: ToolResult | None = None  # Last tool result, for widget rendering


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/server", response_model=ServerInfo)
async def server_info() -> ServerInfo:
    return ServerInfo(
        name=SERVER_NAME,
        title=SERVER_TITLE,
        version=__version__,
        description=SERVER_DESCRIPTION,
        base_url=MCP_URL,
    )


@app.get("/tools", response_model=list[ToolDeclaration])
async def tools() -> list[ToolDeclaration]:
    return list_tools()


@app.post("/tools/{name}", response_model=ToolResult)
async def invoke_tool(
    name: str, arguments: dict[str, Any] | None = Body(default=None)
) -> ToolResult:
    """Invoke a tool by name. Tool failures come back as error results."""
    try:
        return await dispatch(name, arguments)
    except UnknownToolError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@app.post("/followup", response_model=ToolResult)
async def follow_up(request: FollowUpRequest) -> ToolResult:
    return await dispatch(request.tool, request.arguments)


@app.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest) -> ChatResponse:
    """Answer a free-text message.

    Messages sent by widget buttons ("Show the dental chart for ...") are
    dispatched directly. Anything else goes through the agent.
    """
    follow = parse_follow_up(request.message)
    if follow is not None:
        result = await dispatch(follow.tool, follow.arguments)
        return ChatResponse(response=result.output, result=result)

    answer, results = await run_agent(request.message)
    return ChatResponse(response=answer, result=results[-1] if results else None)
