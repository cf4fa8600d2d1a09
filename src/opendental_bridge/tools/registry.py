"""Tool registry and dispatcher.

Every tool the bridge exposes is declared here once: its name, the input
schema the runtime validates against, and the widget that renders its
result. ``dispatch`` is the single entry point the server and the agent
use to invoke a tool by name.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from opendental_bridge.tools.base import (
    ToolDeclaration,
    ToolResult,
    ToolSpec,
    WidgetHint,
    error,
)
from opendental_bridge.tools.chart import get_patient_chart
from opendental_bridge.tools.patients import get_patients
from opendental_bridge.tools.reports import get_reports

logger = logging.getLogger(__name__)


class UnknownToolError(LookupError):
    """Raised when a tool name isn't registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class NoArguments(BaseModel):
    """Input for tools that take no arguments."""


class PatientNameArguments(BaseModel):
    patient_name: str = Field(description="Patient name to search for")


TOOLS: dict[str, ToolSpec] = {
    spec.name: spec
    for spec in (
        ToolSpec(
            name="get-patients",
            description="Retrieve the full list of patients from OpenDental",
            input_model=NoArguments,
            handler=get_patients,
            widget=WidgetHint(
                name="patient-list",
                invoking="Fetching patient list…",
                invoked="Patient list loaded",
            ),
        ),
        ToolSpec(
            name="get-patient-chart",
            description=(
                "Get the dental chart for a patient including tooth "
                "conditions, procedures, and clinical notes"
            ),
            input_model=PatientNameArguments,
            handler=get_patient_chart,
            widget=WidgetHint(
                name="patient-chart",
                invoking="Loading dental chart…",
                invoked="Dental chart ready",
            ),
        ),
        ToolSpec(
            name="get-reports",
            description=(
                "Get a comprehensive report for a patient including "
                "demographics, insurance, account, treatment plans, and "
                "appointments"
            ),
            input_model=PatientNameArguments,
            handler=get_reports,
            widget=WidgetHint(
                name="patient-report",
                invoking="Generating patient report…",
                invoked="Patient report ready",
            ),
        ),
    )
}


def list_tools() -> list[ToolDeclaration]:
    return [spec.declaration() for spec in TOOLS.values()]


async def dispatch(name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
    """Validate arguments and run the named tool.

    Args:
        name: Registered tool name, e.g. "get-patient-chart".
        arguments: Tool input; validated against the tool's schema.

    Returns:
        The tool's result. Invalid arguments come back as an error result
        rather than an exception.

    Raises:
        UnknownToolError: If no tool is registered under ``name``.
    """
    spec = TOOLS.get(name)
    if spec is None:
        raise UnknownToolError(name)

    try:
        args = spec.input_model.model_validate(arguments or {})
    except ValidationError as e:
        logger.info("Rejected %s call: %s", name, e)
        return error(f"Invalid arguments for {name}: {e}")

    logger.info("Invoking %s", name)
    result = await spec.handler(**args.model_dump())
    if result.is_error:
        logger.warning("%s failed: %s", name, result.output)
        return result
    return result.model_copy(update={"widget": spec.widget.name})
