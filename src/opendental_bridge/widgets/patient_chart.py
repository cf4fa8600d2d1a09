"""Dental chart widget: tooth grid, procedures and clinical notes.

Teeth use Universal numbering. The grid shows the upper arch left to right
as 1-16 and the lower arch as 32-17, so the chart reads as if facing the
patient.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from opendental_bridge.formatting import DASH, format_currency, or_dash
from opendental_bridge.models import ChartProcedure, DentalChart, ToothCondition
from opendental_bridge.models.chart import ChartPatientInfo

ChartTab = Literal["teeth", "procedures", "clinical"]
ProcedureFilter = Literal["all", "completed", "planned"]
Theme = Literal["light", "dark"]

TABS: tuple[ChartTab, ...] = ("teeth", "procedures", "clinical")
PROCEDURE_FILTERS: tuple[ProcedureFilter, ...] = ("all", "completed", "planned")

UPPER_ARCH = tuple(range(1, 17))
LOWER_ARCH = tuple(range(32, 16, -1))

# Condition label (lowercased) -> palette key. Anything else is "other".
CONDITION_KEYS: dict[str, str] = {
    "healthy": "healthy",
    "missing": "missing",
    "crown": "crown",
    "filling": "filling",
    "decay": "decay",
    "root canal": "root_canal",
    "rootcanal": "root_canal",
    "implant": "implant",
}

CONDITION_COLORS: dict[Theme, dict[str, str]] = {
    "light": {
        "healthy": "#28a745",
        "missing": "#adb5bd",
        "crown": "#007bff",
        "filling": "#ffc107",
        "decay": "#dc3545",
        "root_canal": "#6f42c1",
        "implant": "#20c997",
        "other": "#6c757d",
    },
    "dark": {
        "healthy": "#2d6a4f",
        "missing": "#6c757d",
        "crown": "#2563eb",
        "filling": "#ca8a04",
        "decay": "#dc2626",
        "root_canal": "#7c3aed",
        "implant": "#0d9488",
        "other": "#a0a0a0",
    },
}

LEGEND = (
    ("Healthy", "healthy"),
    ("Missing", "missing"),
    ("Crown", "crown"),
    ("Filling", "filling"),
    ("Decay", "decay"),
    ("Root Canal", "root_canal"),
)

QUADRANTS = (
    ("Upper Right (Q1)", "upper_right"),
    ("Upper Left (Q2)", "upper_left"),
    ("Lower Left (Q3)", "lower_left"),
    ("Lower Right (Q4)", "lower_right"),
)

CLINICAL_SECTIONS = (
    ("Overall Dental Health", "overall_dental_health"),
    ("Teeth Assessment", "teeth_assessment"),
    ("Treatment History", "treatment_history"),
    ("Treatment Needs", "treatment_needs"),
    ("Periodontal Status", "periodontal_status"),
    ("Risk Factors", "risk_factors"),
    ("Recommendations", "recommendations"),
    ("Notes", "notes"),
)

PROCEDURE_COLUMNS = (
    "Date",
    "Tooth",
    "Surface",
    "Code",
    "Description",
    "Status",
    "Provider",
    "Amount",
)


@dataclass
class PatientChartState:
    tab: ChartTab = "teeth"
    selected_tooth: int | None = None
    procedure_filter: ProcedureFilter = "all"

    def set_tab(self, tab: ChartTab) -> None:
        if tab not in TABS:
            raise ValueError(f"Unknown chart tab {tab!r}")
        self.tab = tab

    def select_tooth(self, number: int) -> None:
        """Select a tooth, or clear the selection if it was already selected."""
        self.selected_tooth = None if self.selected_tooth == number else number

    def set_procedure_filter(self, value: ProcedureFilter) -> None:
        if value not in PROCEDURE_FILTERS:
            raise ValueError(f"Unknown procedure filter {value!r}")
        self.procedure_filter = value


@dataclass(frozen=True)
class ToothCell:
    number: int
    condition: str
    color: str
    missing: bool  # drawn dashed and translucent
    selected: bool


# --- Tooth chart ---


def condition_key(condition: str) -> str:
    return CONDITION_KEYS.get(condition.lower(), "other")


def condition_color(condition: str, theme: Theme = "light") -> str:
    return CONDITION_COLORS[theme][condition_key(condition)]


def tooth_cell(
    number: int,
    entry: ToothCondition | None,
    selected: int | None = None,
    theme: Theme = "light",
) -> ToothCell:
    condition = "healthy"
    if entry is not None and entry.condition is not None:
        condition = entry.condition
    return ToothCell(
        number=number,
        condition=condition,
        color=condition_color(condition, theme),
        missing=condition.lower() == "missing",
        selected=selected == number,
    )


def tooth_grid(
    chart: DentalChart, selected: int | None = None, theme: Theme = "light"
) -> tuple[list[ToothCell], list[ToothCell]]:
    """Cells for the upper and lower arch, in display order."""
    teeth = chart.tooth_chart.by_number()
    upper = [tooth_cell(n, teeth.get(n), selected, theme) for n in UPPER_ARCH]
    lower = [tooth_cell(n, teeth.get(n), selected, theme) for n in LOWER_ARCH]
    return upper, lower


def selected_tooth_detail(chart: DentalChart, selected: int | None) -> ToothCondition | None:
    """Charted entry for the selected tooth; None if nothing is charted there."""
    if selected is None:
        return None
    return chart.tooth_chart.by_number().get(selected)


def quadrant_cards(chart: DentalChart) -> list[tuple[str, str]]:
    """The four quadrant cards, or none when the chart has no quadrant summary."""
    quadrants = chart.tooth_chart.quadrant_summary
    if quadrants.is_empty():
        return []
    return [(label, getattr(quadrants, key) or "No data") for label, key in QUADRANTS]


# --- Procedures ---


def procedure_matches(procedure: ChartProcedure, value: ProcedureFilter) -> bool:
    if value == "all":
        return True
    status = (procedure.status or "").lower()
    if value == "completed":
        return "complet" in status
    return "plan" in status or "tp" in status


def filter_procedures(
    procedures: list[ChartProcedure], value: ProcedureFilter
) -> list[ChartProcedure]:
    return [p for p in procedures if procedure_matches(p, value)]


def is_completed(procedure: ChartProcedure) -> bool:
    return "complet" in (procedure.status or "").lower()


def filter_labels(chart: DentalChart) -> dict[ProcedureFilter, str]:
    summary = chart.procedure_summary
    return {
        "all": f"All ({len(chart.procedures)})",
        "completed": f"Completed ({or_dash(summary.completed_procedures)})",
        "planned": f"Planned ({or_dash(summary.treatment_planned_procedures)})",
    }


def procedure_counters(chart: DentalChart) -> list[tuple[str, str]]:
    summary = chart.procedure_summary
    by_type = summary.procedures_by_type
    return [
        ("Total", or_dash(summary.total_procedures)),
        ("Charges", format_currency(summary.total_charges)),
        ("Exams", or_dash(by_type.exams)),
        ("Cleanings", or_dash(by_type.cleanings)),
        ("Fillings", or_dash(by_type.fillings)),
        ("Crowns", or_dash(by_type.crowns)),
    ]


def procedure_row(procedure: ChartProcedure) -> tuple[str, ...]:
    """Display values for one procedure, in PROCEDURE_COLUMNS order."""
    return (
        or_dash(procedure.date),
        or_dash(procedure.tooth),
        or_dash(procedure.surface),
        procedure.code or DASH,
        or_dash(procedure.description),
        or_dash(procedure.status),
        or_dash(procedure.provider),
        format_currency(procedure.amount),
    )


# --- Clinical notes and header ---


def clinical_sections(chart: DentalChart) -> list[tuple[str, str]]:
    """Non-empty clinical sections, in their fixed order."""
    notes = chart.clinical_explanation
    sections = []
    for title, key in CLINICAL_SECTIONS:
        text = getattr(notes, key)
        if text:
            sections.append((title, text))
    return sections


def header_badges(info: ChartPatientInfo) -> list[tuple[str, str]]:
    """Alert badges for allergies, medications and problems worth flagging."""
    badges = [
        ("allergies", "Allergies", info.allergies),
        ("medications", "Meds", info.medications),
        ("problems", "Problems", info.problems),
    ]
    return [
        (kind, f"{label}: {value}")
        for kind, label, value in badges
        if value and value != "none"
    ]


def header_facts(chart: DentalChart) -> list[str]:
    facts = []
    if chart.patient_info.age:
        facts.append(f"Age: {chart.patient_info.age}")
    if chart.summary.primary_provider:
        facts.append(f"Provider: {chart.summary.primary_provider}")
    if chart.summary.last_visit_date:
        facts.append(f"Last Visit: {chart.summary.last_visit_date}")
    return facts
