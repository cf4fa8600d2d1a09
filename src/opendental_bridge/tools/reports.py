"""Patient report tool.

Backend endpoint used:
- POST /api/reports?patient_name=  — Demographics, family, insurance,
  account, treatment plans and appointments in one report
"""

from __future__ import annotations

from pydantic import ValidationError

from opendental_bridge.config import TOOL_TIMEOUTS
from opendental_bridge.formatting import format_number
from opendental_bridge.models import PatientReport
from opendental_bridge.opendental_client import OpenDentalError, get_client
from opendental_bridge.tools.base import ToolResult, error, unwrap_data, widget

NO_REPORT_MESSAGE = "No report data returned for this patient."


async def get_reports(patient_name: str) -> ToolResult:
    """Get a comprehensive report for a patient.

    Covers demographics, insurance, account, treatment plans, and
    appointments.

    Args:
        patient_name: Patient name to search for.

    Returns:
        The patient-report widget payload, or an error if the backend
        found no report.
    """
    try:
        client = await get_client()
        body = await client.request(
            "/api/reports",
            "POST",
            params={"patient_name": patient_name},
            timeout=TOOL_TIMEOUTS["get-reports"],
        )
        raw = unwrap_data(body).get("patient_report")
        if not isinstance(raw, dict):
            return error(NO_REPORT_MESSAGE)
        report = PatientReport.model_validate(raw)
    except (OpenDentalError, ValidationError) as e:
        return error(f"Failed to fetch report: {e}")

    balance = format_number(report.summary.total_outstanding_balance)
    claims = format_number(report.summary.pending_insurance_claims)
    return widget(
        props={"report": report.model_dump(mode="json"), "patient_name": patient_name},
        output=(
            f"Report for {patient_name}: balance ${balance}, "
            f"{claims} pending claims."
        ),
    )
