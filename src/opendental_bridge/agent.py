"""LangGraph ReAct agent over the OpenDental tools.

Widgets and clients that can build a typed request call the dispatcher
directly. This agent handles everything else: free-text questions such as
"which patients live in Reno?" are given to Claude together with the three
tools, and Claude decides which to call.

The ReAct loop (Reason → Act → Observe → Repeat) is managed by LangGraph's
``create_react_agent``; we only provide the model, tools and system prompt.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any

from langchain_anthropic import ChatAnthropic
from langchain_core.messages import HumanMessage
from langchain_core.tools import StructuredTool
from langgraph.prebuilt import create_react_agent
from pydantic import SecretStr

from opendental_bridge.config import ANTHROPIC_API_KEY, ANTHROPIC_MODEL
from opendental_bridge.tools.base import ToolResult, ToolSpec
from opendental_bridge.tools.registry import TOOLS, dispatch

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are a front-desk assistant for a dental practice that uses OpenDental.
You answer questions by calling the tools available to you.

TOOLS:
- get-patients: the full patient list. Use it to find or count patients.
- get-patient-chart: a patient's dental chart (teeth, procedures, notes).
- get-reports: a patient's full report (insurance, balances, treatment \
plans, appointments).

RULES:
- Pass the patient's full name exactly as the user or the patient list gives it.
- Only report what the tools return. Never invent clinical or billing data.
- If a tool returns an error, say so plainly; do not retry on your own.
- The tool results are shown to the user as widgets, so summarise briefly \
instead of repeating every row.
"""

# Tool results produced during the current run_agent() call, so the caller
# can render the widgets the agent asked for.
_run_results: ContextVar[list[ToolResult] | None] = ContextVar(
    "_run_results", default=None
)


def _wrap(spec: ToolSpec) -> StructuredTool:
    async def run(**arguments: Any) -> str:
        result = await dispatch(spec.name, arguments)
        collected = _run_results.get()
        if collected is not None:
            collected.append(result)
        return result.output

    return StructuredTool.from_function(
        coroutine=run,
        name=spec.name,
        description=spec.description,
        args_schema=spec.input_model,
    )


def _build_tools() -> list[StructuredTool]:
    """Wrap every registered tool as a LangChain StructuredTool."""
    return [_wrap(spec) for spec in TOOLS.values()]


# Built lazily so that importing this module doesn't need an API key.
_agent = None


def _get_agent():  # type: ignore[no-untyped-def]
    global _agent  # noqa: PLW0603
    if _agent is not None:
        return _agent

    model = ChatAnthropic(
        model_name=ANTHROPIC_MODEL,  # type: ignore[call-arg]
        anthropic_api_key=SecretStr(ANTHROPIC_API_KEY),  # type: ignore[call-arg]
    )
    _agent = create_react_agent(model=model, tools=_build_tools(), prompt=SYSTEM_PROMPT)
    return _agent


async def run_agent(message: str) -> tuple[str, list[ToolResult]]:
    """Answer a free-text request, calling tools as the model sees fit.

    When ANTHROPIC_API_KEY is not set (e.g., in CI), returns a placeholder
    answer without calling any tool.

    Args:
        message: The user's request in plain language.

    Returns:
        The agent's final answer and the results of every tool it called.
    """
    if not ANTHROPIC_API_KEY:
        return f"[Agent placeholder — no API key configured] You asked: {message}", []

    results: list[ToolResult] = []
    token = _run_results.set(results)
    try:
        result = await _get_agent().ainvoke({"messages": [HumanMessage(content=message)]})
    finally:
        _run_results.reset(token)

    logger.info("Agent answered using %d tool call(s)", len(results))
    last_message = result["messages"][-1]
    return str(last_message.content), results
