"""Backend payload models.

The backend's JSON is parsed into these models once, when a tool receives
it. Missing or null fields take their defaults here, so widgets never have
to guard against absent data.
"""

from opendental_bridge.models.base import Payload
from opendental_bridge.models.chart import (
    ChartProcedure,
    ClinicalExplanation,
    DentalChart,
    QuadrantSummary,
    ToothChart,
    ToothCondition,
)
from opendental_bridge.models.patient import Patient, PatientList
from opendental_bridge.models.report import (
    Appointment,
    InsurancePlan,
    PatientReport,
    Transaction,
)

__all__ = [
    "Appointment",
    "ChartProcedure",
    "ClinicalExplanation",
    "DentalChart",
    "InsurancePlan",
    "Patient",
    "PatientList",
    "PatientReport",
    "Payload",
    "QuadrantSummary",
    "ToothChart",
    "ToothCondition",
    "Transaction",
]
