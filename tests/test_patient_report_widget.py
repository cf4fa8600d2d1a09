"""Tests for the patient report widget."""

from __future__ import annotations

import pytest

from opendental_bridge.formatting import DASH
from opendental_bridge.models import Appointment, PatientReport
from opendental_bridge.widgets import patient_report
from opendental_bridge.widgets.patient_report import (
    TRANSACTIONS_PAGE_SIZE,
    PatientReportState,
)


def _report(**payload: object) -> PatientReport:
    return PatientReport.model_validate(payload)


EMPTY = _report()


class TestEmptyReport:
    """A report with nothing in it still renders every tab."""

    def test_placeholders(self) -> None:
        assert patient_report.summary_cards(EMPTY) == [
            ("Outstanding", DASH),
            ("Pending Claims", DASH),
            ("Treatment Value", DASH),
            ("Next Recall", DASH),
            ("Ins. Remaining", DASH),
        ]
        assert patient_report.family_rows(EMPTY) == []
        assert patient_report.insurance_cards(EMPTY) == []
        assert patient_report.treatment_totals(EMPTY) == []
        assert patient_report.insurance_benefits(EMPTY) == []
        assert patient_report.next_appointment(EMPTY) is None
        assert patient_report.transactions_page(EMPTY, 1).items == []

    def test_overview_without_recall(self) -> None:
        titles = [title for title, _ in patient_report.overview_sections(EMPTY)]
        assert titles == ["Demographics", "Address", "Contact"]


class TestOverview:
    def test_sections(self) -> None:
        report = _report(
            patient_info={
                "first_name": "Jane",
                "last_name": "Doe",
                "gender": "Female",
                "address": {"street": "1 Main St", "city": "Reno", "state": "NV"},
                "contact": {"email": "jane@example.com"},
            },
            recall={"type": "Prophy", "due_date": "2024-09-01"},
        )
        sections = dict(patient_report.overview_sections(report))
        assert ("Gender", "Female") in sections["Demographics"]
        assert sections["Address"] == [("Street", "1 Main St"), ("City / State / Zip", "Reno, NV")]
        assert sections["Contact"] == [("Email", "jane@example.com")]
        assert sections["Recall"] == [("Type", "Prophy"), ("Due", "2024-09-01")]

    def test_family_tab_label_counts_members(self) -> None:
        report = _report(family_members=[{"name": "Jane Doe"}, {"name": "Bob Doe", "age": 12}])
        labels = dict(patient_report.tab_labels(report))
        assert labels["family"] == "Family (2)"
        assert patient_report.family_rows(report)[1] == ("Bob Doe", DASH, DASH, DASH, "12", DASH)


class TestInsurance:
    def test_plan_without_carrier_is_skipped(self) -> None:
        report = _report(
            insurance={"primary": {"carrier": "Delta Dental"}, "secondary": {"group_name": "X"}}
        )
        cards = patient_report.insurance_cards(report)
        assert [c.title for c in cards] == ["Primary Insurance"]

    def test_coverage_keys_humanized(self) -> None:
        plan = {
            "carrier": "Delta Dental",
            "coverage_percentages": {"preventive": "100%", "basic_services": "80%", "major": None},
        }
        card = patient_report.plan_card(_report(insurance={"primary": plan}).insurance.primary, "P")
        assert card is not None
        assert card.coverage == [("Preventive", "100%"), ("Basic Services", "80%")]
        assert ("Carrier", "Delta Dental") in card.fields
        assert "Group" not in dict(card.fields)


class TestAccount:
    @staticmethod
    def _with_transactions(n: int) -> PatientReport:
        rows = [{"date": f"2024-01-{i:02d}", "charges": 10 * i} for i in range(1, n + 1)]
        return _report(account={"transactions": rows})

    def test_pages_of_fifteen(self) -> None:
        report = self._with_transactions(40)
        first = patient_report.transactions_page(report, 1)
        assert len(first.items) == TRANSACTIONS_PAGE_SIZE
        assert first.total_pages == 3
        last = patient_report.transactions_page(report, 99)
        assert last.number == 3
        assert [t.date for t in last.items][0] == "2024-01-31"

    def test_state_moves_within_bounds(self) -> None:
        report = self._with_transactions(20)
        state = PatientReportState()
        state.previous_account_page(patient_report.transactions_page(report, state.account_page))
        assert state.account_page == 1
        state.next_account_page(patient_report.transactions_page(report, state.account_page))
        assert state.account_page == 2
        state.next_account_page(patient_report.transactions_page(report, state.account_page))
        assert state.account_page == 2

    def test_rows_and_balances(self) -> None:
        report = _report(
            account={
                "transactions": [{"date": "2024-01-02", "description": "Exam", "charges": 85}],
                "claims": [{"carrier": "Delta", "amount": 120.5, "status": "Sent"}],
                "balances": {
                    "patient_balance": 40,
                    "family_balances": [{"name": "Bob Doe", "balance": 12.25}],
                },
            }
        )
        row = patient_report.transaction_row(report.account.transactions[0])
        assert row[5:] == ("Exam", "$85.00", DASH, DASH)
        claim = patient_report.claim_row(report.account.claims[0])
        assert claim == ("", "Delta", "$120.50", "Sent", DASH, DASH)
        assert patient_report.balance_cards(report) == [
            ("Patient Balance", "$40.00"),
            ("Family Balance", DASH),
        ]
        assert patient_report.family_balances(report) == [("Bob Doe", "$12.25")]


class TestTreatment:
    def test_done_marker(self) -> None:
        report = _report(
            treatment_plans={"procedures": [{"done": "Yes", "code": "D1110"}, {"done": "No"}]}
        )
        rows = [patient_report.treatment_row(p) for p in report.treatment_plans.procedures]
        assert rows[0][0] == "✓"
        assert rows[1][0] == DASH

    def test_totals(self) -> None:
        report = _report(treatment_plans={"totals": {"total_fee": 1200, "total_patient_portion": 300}})
        assert patient_report.treatment_totals(report) == [
            ("Total Fee", "$1,200.00"),
            ("Insurance Est.", DASH),
            ("Patient Portion", "$300.00"),
        ]

    def test_benefit_columns(self) -> None:
        report = _report(
            treatment_plans={
                "insurance_benefits": {
                    "primary": {"annual_max": 1500, "deductible": 50, "deductible_remaining": 0},
                    "secondary": {"deductible": 25},
                }
            }
        )
        columns = dict(patient_report.insurance_benefits(report))
        assert ("Deductible Remaining", "$0.00") in columns["PRIMARY"]
        assert ("Deductible", "$25.00") in columns["SECONDARY"]

    def test_active_plans(self) -> None:
        report = _report(
            treatment_plans={"active_plans": [{"date": "2024-02-01", "status": "Active"}]}
        )
        assert patient_report.active_plan_cards(report) == [
            ("Treatment Plan", f"2024-02-01 · Active · Signed: {DASH}")
        ]


class TestAppointments:
    @pytest.mark.parametrize(
        ("status", "tone"),
        [
            ("Complete", "completed"),
            ("Broken", "cancelled"),
            ("Cancelled", "cancelled"),
            ("Confirmed", "confirmed"),
            ("Scheduled", "scheduled"),
            ("ASAP", "neutral"),
            (None, "neutral"),
        ],
    )
    def test_tone(self, status: str | None, tone: str) -> None:
        assert patient_report.appointment_tone(status) == tone

    def test_last_column_falls_back_to_operatory(self) -> None:
        assert patient_report.appointment_row(Appointment(notes="Bring X-rays"))[-1] == "Bring X-rays"
        assert patient_report.appointment_row(Appointment(operatory="OP 2"))[-1] == "OP 2"
        assert patient_report.appointment_row(Appointment())[-1] == DASH

    def test_next_appointment(self) -> None:
        report = _report(
            appointments={
                "next_appointment": {
                    "date": "2024-09-01",
                    "time": "9:00 AM",
                    "provider": "DOC1",
                    "procedures": "Prophy",
                }
            }
        )
        assert patient_report.next_appointment(report) == (
            "2024-09-01 at 9:00 AM with DOC1 (Prophy)"
        )

    def test_tabs(self) -> None:
        state = PatientReportState()
        state.set_tab("account")
        assert state.tab == "account"
        with pytest.raises(ValueError):
            state.set_tab("ledger")  # type: ignore[arg-type]
