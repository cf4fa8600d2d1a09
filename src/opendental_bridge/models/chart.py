"""Dental chart payload returned by ``POST /api/patient_chart``."""

from __future__ import annotations

from pydantic import Field, field_validator

from opendental_bridge.models.base import Payload

TOOTH_NUMBERS = range(1, 33)


class ChartPatientInfo(Payload):
    age: str | None = None
    allergies: str | None = None
    medications: str | None = None
    problems: str | None = None


class ToothCondition(Payload):
    """Charted condition for a single tooth (Universal numbering, 1-32)."""

    tooth_number: int | None = None
    condition: str | None = None
    surface: str | None = None
    notes: str | None = None


class QuadrantSummary(Payload):
    upper_right: str | None = None
    upper_left: str | None = None
    lower_left: str | None = None
    lower_right: str | None = None


class ToothChart(Payload):
    teeth_with_conditions: list[ToothCondition] = Field(default_factory=list)
    quadrant_summary: QuadrantSummary = Field(default_factory=QuadrantSummary)

    @field_validator("teeth_with_conditions")
    @classmethod
    def _only_valid_teeth(cls, teeth: list[ToothCondition]) -> list[ToothCondition]:
        return [t for t in teeth if t.tooth_number in TOOTH_NUMBERS]

    def by_number(self) -> dict[int, ToothCondition]:
        """Map tooth number to its entry; a later entry wins on duplicates."""
        return {t.tooth_number: t for t in self.teeth_with_conditions}


class ProceduresByType(Payload):
    exams: int | None = None
    cleanings: int | None = None
    fillings: int | None = None
    crowns: int | None = None


class ProcedureSummary(Payload):
    total_procedures: int | None = None
    completed_procedures: int | None = None
    treatment_planned_procedures: int | None = None
    total_charges: float | None = None
    procedures_by_type: ProceduresByType = Field(default_factory=ProceduresByType)


class ChartProcedure(Payload):
    date: str | None = None
    tooth: str | None = None
    surface: str | None = None
    ada_code: str | None = None
    dx: str | None = None
    description: str | None = None
    status: str | None = None
    provider: str | None = None
    amount: float | None = None

    @property
    def code(self) -> str | None:
        return self.ada_code or self.dx or None


class ClinicalExplanation(Payload):
    overall_dental_health: str | None = None
    teeth_assessment: str | None = None
    treatment_history: str | None = None
    treatment_needs: str | None = None
    periodontal_status: str | None = None
    risk_factors: str | None = None
    recommendations: str | None = None
    notes: str | None = None


class ChartSummary(Payload):
    total_teeth_with_work: int | None = None
    missing_teeth_count: int | None = None
    primary_provider: str | None = None
    last_visit_date: str | None = None


class DentalChart(Payload):
    patient_info: ChartPatientInfo = Field(default_factory=ChartPatientInfo)
    tooth_chart: ToothChart = Field(default_factory=ToothChart)
    procedure_summary: ProcedureSummary = Field(default_factory=ProcedureSummary)
    procedures: list[ChartProcedure] = Field(default_factory=list)
    clinical_explanation: ClinicalExplanation = Field(
        default_factory=ClinicalExplanation
    )
    summary: ChartSummary = Field(default_factory=ChartSummary)
