"""Tests for the LangGraph agent's tool wrapping.

The model itself is never called here: these check that every registered
tool is exposed to the agent and that results reach the caller.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from opendental_bridge.agent import _build_tools, _run_results, _wrap, run_agent
from opendental_bridge.tools.base import ToolResult
from opendental_bridge.tools.registry import TOOLS


def test_every_tool_is_exposed() -> None:
    tools = {t.name: t for t in _build_tools()}
    assert list(tools) == ["get-patients", "get-patient-chart", "get-reports"]
    assert "patient_name" in tools["get-reports"].args


@pytest.mark.asyncio
async def test_wrapped_tool_collects_result() -> None:
    """The agent sees the text output; the caller gets the full result."""
    result = ToolResult(output="Report for Jane Doe: balance $0, 0 pending claims.")
    collected: list[ToolResult] = []

    with patch("opendental_bridge.agent.dispatch", AsyncMock(return_value=result)) as d:
        token = _run_results.set(collected)
        try:
            output = await _wrap(TOOLS["get-reports"]).ainvoke({"patient_name": "Jane Doe"})
        finally:
            _run_results.reset(token)

    d.assert_awaited_once_with("get-reports", {"patient_name": "Jane Doe"})
    assert output == result.output
    assert collected == [result]


@pytest.mark.asyncio
async def test_placeholder_without_api_key() -> None:
    with patch("opendental_bridge.agent.ANTHROPIC_API_KEY", ""):
        answer, results = await run_agent("How many patients are there?")

    assert "How many patients are there?" in answer
    assert results == []
