"""Patient list tool.

Backend endpoint used:
- POST /api/patients  — Every patient in the practice
"""

from __future__ import annotations

from pydantic import ValidationError

from opendental_bridge.config import TOOL_TIMEOUTS
from opendental_bridge.models import PatientList
from opendental_bridge.opendental_client import OpenDentalError, get_client
from opendental_bridge.tools.base import ToolResult, error, unwrap_data, widget


async def get_patients() -> ToolResult:
    """Retrieve the full list of patients from OpenDental.

    Returns:
        The patient-list widget payload, with a summary of how many
        patients were found.
    """
    try:
        client = await get_client()
        body = await client.request(
            "/api/patients", "POST", timeout=TOOL_TIMEOUTS["get-patients"]
        )
        listing = PatientList.model_validate(unwrap_data(body))
    except (OpenDentalError, ValidationError) as e:
        return error(f"Failed to fetch patients: {e}")

    total = listing.count
    return widget(
        props={
            "patients": [p.model_dump(mode="json") for p in listing.patients],
            "total_count": total,
        },
        output=(
            f"Found {total} patient(s). Use the table to browse or click a "
            "patient for details."
        ),
    )
