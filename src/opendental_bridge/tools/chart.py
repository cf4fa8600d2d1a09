"""Dental chart tool.

Backend endpoint used:
- POST /api/patient_chart?patient_name=  — Tooth chart, procedures, notes
"""

from __future__ import annotations

from pydantic import ValidationError

from opendental_bridge.config import TOOL_TIMEOUTS
from opendental_bridge.formatting import format_number
from opendental_bridge.models import DentalChart
from opendental_bridge.opendental_client import OpenDentalError, get_client
from opendental_bridge.tools.base import ToolResult, error, unwrap_data, widget

NO_CHART_MESSAGE = "No chart data returned for this patient."


async def get_patient_chart(patient_name: str) -> ToolResult:
    """Get the dental chart for a patient.

    Includes tooth conditions, procedures, and clinical notes.

    Args:
        patient_name: Patient name to search for.

    Returns:
        The patient-chart widget payload, or an error if the backend
        found no chart.
    """
    try:
        client = await get_client()
        body = await client.request(
            "/api/patient_chart",
            "POST",
            params={"patient_name": patient_name},
            timeout=TOOL_TIMEOUTS["get-patient-chart"],
        )
        raw = unwrap_data(body).get("patient_chart")
        if not isinstance(raw, dict):
            return error(NO_CHART_MESSAGE)
        chart = DentalChart.model_validate(raw)
    except (OpenDentalError, ValidationError) as e:
        return error(f"Failed to fetch chart: {e}")

    with_work = format_number(chart.summary.total_teeth_with_work)
    missing = format_number(chart.summary.missing_teeth_count)
    return widget(
        props={"chart": chart.model_dump(mode="json"), "patient_name": patient_name},
        output=(
            f"Dental chart for {patient_name}: {with_work} teeth with work, "
            f"{missing} missing."
        ),
    )
