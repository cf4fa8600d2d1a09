"""Tests for the dental chart widget."""

from __future__ import annotations

import pytest

from opendental_bridge.formatting import DASH
from opendental_bridge.models import DentalChart
from opendental_bridge.widgets import patient_chart
from opendental_bridge.widgets.patient_chart import (
    CONDITION_COLORS,
    PatientChartState,
    condition_color,
    tooth_grid,
)

LIGHT = CONDITION_COLORS["light"]


def _chart(**payload: object) -> DentalChart:
    return DentalChart.model_validate(payload)


class TestToothGrid:
    def test_arch_order(self) -> None:
        upper, lower = tooth_grid(_chart())
        assert [c.number for c in upper] == list(range(1, 17))
        assert [c.number for c in lower] == list(range(32, 16, -1))

    def test_every_tooth_gets_its_condition_color(self) -> None:
        conditions = ["Crown", "Filling", "Decay", "Root Canal", "Missing", "Implant", "Healthy"]
        teeth = [
            {"tooth_number": n, "condition": conditions[n % len(conditions)]}
            for n in range(1, 33)
        ]
        upper, lower = tooth_grid(_chart(tooth_chart={"teeth_with_conditions": teeth}))
        for cell in upper + lower:
            expected = conditions[cell.number % len(conditions)]
            assert cell.condition == expected
            assert cell.color == condition_color(expected)
            assert cell.missing == (expected == "Missing")

    def test_uncharted_teeth_are_healthy(self) -> None:
        upper, _ = tooth_grid(_chart(tooth_chart={"teeth_with_conditions": [{"tooth_number": 5}]}))
        assert {c.color for c in upper} == {LIGHT["healthy"]}

    def test_empty_condition_is_not_healthy(self) -> None:
        """Only an absent condition defaults to healthy; a blank one is "other"."""
        teeth = [{"tooth_number": 1, "condition": ""}, {"tooth_number": 2}]
        upper, _ = tooth_grid(_chart(tooth_chart={"teeth_with_conditions": teeth}))
        assert (upper[0].condition, upper[0].color) == ("", LIGHT["other"])
        assert (upper[1].condition, upper[1].color) == ("healthy", LIGHT["healthy"])

    @pytest.mark.parametrize(
        ("condition", "key"),
        [
            ("Root Canal", "root_canal"),
            ("rootcanal", "root_canal"),
            ("CROWN", "crown"),
            ("Bridge", "other"),
            ("Sealant", "other"),
        ],
    )
    def test_condition_colors(self, condition: str, key: str) -> None:
        assert condition_color(condition) == LIGHT[key]
        assert condition_color(condition, "dark") == CONDITION_COLORS["dark"][key]

    def test_selection_toggles(self) -> None:
        tooth = {"tooth_number": 3, "condition": "Crown", "surface": "MOD"}
        chart = _chart(tooth_chart={"teeth_with_conditions": [tooth]})
        state = PatientChartState()
        state.select_tooth(3)
        upper, _ = tooth_grid(chart, state.selected_tooth)
        assert [c.number for c in upper if c.selected] == [3]
        detail = patient_chart.selected_tooth_detail(chart, state.selected_tooth)
        assert detail is not None and detail.surface == "MOD"

        state.select_tooth(3)
        assert state.selected_tooth is None
        assert patient_chart.selected_tooth_detail(chart, None) is None

    def test_selected_tooth_without_entry(self) -> None:
        assert patient_chart.selected_tooth_detail(_chart(), 12) is None


class TestQuadrants:
    def test_absent_summary_shows_nothing(self) -> None:
        assert patient_chart.quadrant_cards(_chart()) == []

    def test_partial_summary_fills_no_data(self) -> None:
        chart = _chart(tooth_chart={"quadrant_summary": {"upper_right": "1 crown"}})
        assert patient_chart.quadrant_cards(chart) == [
            ("Upper Right (Q1)", "1 crown"),
            ("Upper Left (Q2)", "No data"),
            ("Lower Left (Q3)", "No data"),
            ("Lower Right (Q4)", "No data"),
        ]


PROCEDURES = [
    {"date": "2024-01-02", "status": "Completed", "ada_code": "D0120", "amount": 85},
    {"date": "2024-02-10", "status": "Treatment Planned", "dx": "K02.52"},
    {"date": "2024-03-01", "status": "TP"},
    {"date": "2023-11-20", "status": "Existing Other"},
    {"date": "2023-10-05"},
]


class TestProcedures:
    def test_filters(self) -> None:
        chart = _chart(procedures=PROCEDURES)
        dates = {
            f: [p.date for p in patient_chart.filter_procedures(chart.procedures, f)]
            for f in patient_chart.PROCEDURE_FILTERS
        }
        assert len(dates["all"]) == 5
        assert dates["completed"] == ["2024-01-02"]
        assert dates["planned"] == ["2024-02-10", "2024-03-01"]

    def test_filter_state(self) -> None:
        state = PatientChartState()
        state.set_procedure_filter("planned")
        assert state.procedure_filter == "planned"
        with pytest.raises(ValueError):
            state.set_procedure_filter("cancelled")  # type: ignore[arg-type]

    def test_filter_labels(self) -> None:
        chart = _chart(
            procedures=PROCEDURES,
            procedure_summary={"completed_procedures": 1, "treatment_planned_procedures": 2},
        )
        assert patient_chart.filter_labels(chart) == {
            "all": "All (5)",
            "completed": "Completed (1)",
            "planned": "Planned (2)",
        }

    def test_rows(self) -> None:
        chart = _chart(procedures=PROCEDURES)
        first = patient_chart.procedure_row(chart.procedures[0])
        assert first[3] == "D0120"
        assert first[-1] == "$85.00"
        second = patient_chart.procedure_row(chart.procedures[1])
        assert second[3] == "K02.52"
        assert second[1] == DASH
        assert patient_chart.is_completed(chart.procedures[0])
        assert not patient_chart.is_completed(chart.procedures[4])

    def test_counters(self) -> None:
        chart = _chart(
            procedure_summary={
                "total_procedures": 12,
                "total_charges": 1450,
                "procedures_by_type": {"exams": 3, "crowns": 1},
            }
        )
        assert patient_chart.procedure_counters(chart) == [
            ("Total", "12"),
            ("Charges", "$1,450.00"),
            ("Exams", "3"),
            ("Cleanings", DASH),
            ("Fillings", DASH),
            ("Crowns", "1"),
        ]


class TestClinicalAndHeader:
    def test_sections_in_fixed_order_skipping_empty(self) -> None:
        chart = _chart(
            clinical_explanation={
                "notes": "Prefers morning visits",
                "overall_dental_health": "Good",
                "risk_factors": "",
                "treatment_needs": "Crown on #3",
            }
        )
        assert patient_chart.clinical_sections(chart) == [
            ("Overall Dental Health", "Good"),
            ("Treatment Needs", "Crown on #3"),
            ("Notes", "Prefers morning visits"),
        ]

    def test_no_notes(self) -> None:
        assert patient_chart.clinical_sections(_chart()) == []

    def test_badges_skip_none(self) -> None:
        chart = _chart(
            patient_info={"allergies": "Penicillin", "medications": "none", "problems": ""}
        )
        assert patient_chart.header_badges(chart.patient_info) == [
            ("allergies", "Allergies: Penicillin")
        ]

    def test_header_facts(self) -> None:
        chart = _chart(
            patient_info={"age": 42},
            summary={"primary_provider": "DOC1", "last_visit_date": "2024-03-01"},
        )
        assert patient_chart.header_facts(chart) == [
            "Age: 42",
            "Provider: DOC1",
            "Last Visit: 2024-03-01",
        ]
        assert patient_chart.header_facts(_chart()) == []

    def test_tabs(self) -> None:
        state = PatientChartState()
        state.set_tab("clinical")
        assert state.tab == "clinical"
        with pytest.raises(ValueError):
            state.set_tab("xrays")  # type: ignore[arg-type]
