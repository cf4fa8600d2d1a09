"""Patient report widget: six tabs over one comprehensive report.

Each tab is a pure rendering of one part of the PatientReport. Helpers
return plain (label, value) pairs and row tuples with every missing value
already replaced by a dash or placeholder, so the renderer only lays
them out.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from opendental_bridge.formatting import DASH, format_currency, humanize_key, or_dash
from opendental_bridge.models import Appointment, InsurancePlan, PatientReport, Transaction
from opendental_bridge.models.report import Claim, InsuranceBenefit, TreatmentProcedure
from opendental_bridge.widgets.pagination import Page, paginate

ReportTab = Literal["overview", "family", "insurance", "account", "treatment", "appointments"]
TABS: tuple[ReportTab, ...] = (
    "overview",
    "family",
    "insurance",
    "account",
    "treatment",
    "appointments",
)

TRANSACTIONS_PAGE_SIZE = 15

FAMILY_COLUMNS = ("Name", "Position", "Gender", "Status", "Age", "Recall Due")
TRANSACTION_COLUMNS = (
    "Date",
    "Patient",
    "Provider",
    "Code",
    "Tooth",
    "Description",
    "Charges",
    "Credits",
    "Balance",
)
CLAIM_COLUMNS = ("Date", "Carrier", "Amount", "Status", "Est. Payment", "Patient Portion")
TREATMENT_COLUMNS = (
    "Done",
    "Priority",
    "Tooth",
    "Surface",
    "Code",
    "Description",
    "Fee",
    "Ins Est",
    "Patient",
)
SCHEDULED_COLUMNS = ("Date", "Time", "Provider", "Status", "Procedures", "Operatory")
PAST_COLUMNS = ("Date", "Time", "Provider", "Status", "Procedures", "Notes")

LabelValue = tuple[str, str]


@dataclass
class PatientReportState:
    tab: ReportTab = "overview"
    account_page: int = 1

    def set_tab(self, tab: ReportTab) -> None:
        if tab not in TABS:
            raise ValueError(f"Unknown report tab {tab!r}")
        self.tab = tab

    def next_account_page(self, page: Page[Transaction]) -> None:
        if page.has_next:
            self.account_page = page.number + 1

    def previous_account_page(self, page: Page[Transaction]) -> None:
        if page.has_previous:
            self.account_page = page.number - 1


def _present(pairs: list[tuple[str, object]]) -> list[LabelValue]:
    """Keep only the pairs that have something to show."""
    return [(label, str(value)) for label, value in pairs if value]


# --- Header ---


def tab_labels(report: PatientReport) -> list[tuple[ReportTab, str]]:
    return [
        ("overview", "Overview"),
        ("family", f"Family ({len(report.family_members)})"),
        ("insurance", "Insurance"),
        ("account", "Account"),
        ("treatment", "Treatment"),
        ("appointments", "Appointments"),
    ]


def summary_cards(report: PatientReport) -> list[LabelValue]:
    summary = report.summary
    return [
        ("Outstanding", format_currency(summary.total_outstanding_balance)),
        ("Pending Claims", or_dash(summary.pending_insurance_claims)),
        ("Treatment Value", format_currency(summary.pending_treatment_value)),
        ("Next Recall", or_dash(summary.next_recall_due)),
        ("Ins. Remaining", format_currency(summary.insurance_benefits_remaining)),
    ]


# --- Overview ---


def overview_sections(report: PatientReport) -> list[tuple[str, list[LabelValue]]]:
    """Demographics, address, contact and (when on file) recall."""
    info = report.patient_info
    addr = info.address
    contact = info.contact
    sections = [
        (
            "Demographics",
            _present(
                [
                    ("Name", info.full_name),
                    ("Preferred", info.preferred_name),
                    ("Gender", info.gender),
                    ("Birthdate", info.birthdate),
                    ("Age", info.age),
                    ("Title", info.title),
                    ("Patient ID", info.patient_id),
                    ("SSN (last 4)", info.ssn_last_four),
                    ("Billing Type", info.billing_type),
                    ("Primary Provider", info.primary_provider),
                    ("Secondary Provider", info.secondary_provider),
                ]
            ),
        ),
        (
            "Address",
            _present(
                [
                    ("Street", addr.street),
                    ("Street 2", addr.street2),
                    (
                        "City / State / Zip",
                        ", ".join(p for p in (addr.city, addr.state, addr.zip) if p),
                    ),
                ]
            ),
        ),
        (
            "Contact",
            _present(
                [
                    ("Home", contact.home_phone),
                    ("Work", contact.work_phone),
                    ("Cell", contact.wireless_phone),
                    ("Email", contact.email),
                    ("Preferred Method", contact.preferred_contact_method),
                ]
            ),
        ),
    ]
    recall = report.recall
    if recall.type:
        sections.append(
            (
                "Recall",
                _present(
                    [
                        ("Type", recall.type),
                        ("Interval", recall.interval),
                        ("Previous", recall.previous_date),
                        ("Due", recall.due_date),
                        ("Scheduled", recall.scheduled_date),
                    ]
                ),
            )
        )
    return sections


# --- Family ---


def family_rows(report: PatientReport) -> list[tuple[str, ...]]:
    return [
        (
            m.name or "",
            or_dash(m.position),
            or_dash(m.gender),
            or_dash(m.status),
            or_dash(m.age),
            or_dash(m.recall_due),
        )
        for m in report.family_members
    ]


# --- Insurance ---


@dataclass(frozen=True)
class PlanCard:
    title: str
    fields: list[LabelValue]
    coverage: list[LabelValue]


def plan_card(plan: InsurancePlan | None, title: str) -> PlanCard | None:
    """Card for an insurance plan; None unless the plan names a carrier."""
    if plan is None or not plan.carrier:
        return None
    group = ""
    if plan.group_name or plan.group_number:
        group = f"{plan.group_name or ''} ({plan.group_number or ''})"
    fields = _present(
        [
            ("Carrier", plan.carrier),
            ("Group", group),
            ("Subscriber", plan.subscriber_name),
            ("Subscriber ID", plan.subscriber_id),
            ("Relationship", plan.relationship_to_subscriber),
            ("Employer", plan.employer),
            ("Plan Type", plan.plan_type),
            ("Fee Schedule", plan.fee_schedule),
        ]
    )
    coverage = [
        (humanize_key(key), str(value))
        for key, value in plan.coverage_percentages.items()
        if value
    ]
    return PlanCard(title=title, fields=fields, coverage=coverage)


def insurance_cards(report: PatientReport) -> list[PlanCard]:
    cards = [
        plan_card(report.insurance.primary, "Primary Insurance"),
        plan_card(report.insurance.secondary, "Secondary Insurance"),
    ]
    return [card for card in cards if card is not None]


# --- Account ---


def balance_cards(report: PatientReport) -> list[LabelValue]:
    balances = report.account.balances
    return [
        ("Patient Balance", format_currency(balances.patient_balance)),
        ("Family Balance", format_currency(balances.total_family_balance)),
    ]


def family_balances(report: PatientReport) -> list[LabelValue]:
    return [
        (fb.name or "", format_currency(fb.balance))
        for fb in report.account.balances.family_balances
    ]


def transactions_page(report: PatientReport, page: int) -> Page[Transaction]:
    return paginate(report.account.transactions, page, TRANSACTIONS_PAGE_SIZE)


def transaction_row(t: Transaction) -> tuple[str, ...]:
    return (
        t.date or "",
        t.patient or "",
        or_dash(t.provider),
        or_dash(t.code),
        or_dash(t.tooth),
        t.description or "",
        format_currency(t.charges),
        format_currency(t.credits),
        format_currency(t.balance),
    )


def claim_row(claim: Claim) -> tuple[str, ...]:
    return (
        claim.date or "",
        claim.carrier or "",
        format_currency(claim.amount),
        or_dash(claim.status),
        format_currency(claim.estimated_payment),
        format_currency(claim.patient_portion),
    )


# --- Treatment ---


def active_plan_cards(report: PatientReport) -> list[LabelValue]:
    """(heading, detail line) for each active treatment plan."""
    return [
        (
            p.heading or "Treatment Plan",
            f"{p.date or ''} · {p.status or ''} · Signed: {or_dash(p.signed)}",
        )
        for p in report.treatment_plans.active_plans
    ]


def treatment_row(p: TreatmentProcedure) -> tuple[str, ...]:
    return (
        "✓" if p.is_done else DASH,
        or_dash(p.priority),
        or_dash(p.tooth),
        or_dash(p.surface),
        p.code or "",
        p.description or "",
        format_currency(p.fee),
        format_currency(p.insurance_estimate),
        format_currency(p.patient_portion),
    )


def treatment_totals(report: PatientReport) -> list[LabelValue]:
    """Total cards; empty when the report carries no totals."""
    totals = report.treatment_plans.totals
    if totals.total_fee is None and totals.total_patient_portion is None:
        return []
    return [
        ("Total Fee", format_currency(totals.total_fee)),
        ("Insurance Est.", format_currency(totals.total_insurance_estimate)),
        ("Patient Portion", format_currency(totals.total_patient_portion)),
    ]


def _benefit_rows(benefit: InsuranceBenefit, deductible_label: str, deductible: float | None) -> list[LabelValue]:
    return [
        ("Annual Max", format_currency(benefit.annual_max)),
        (deductible_label, format_currency(deductible)),
        ("Used", format_currency(benefit.insurance_used)),
        ("Pending", format_currency(benefit.pending)),
        ("Remaining", format_currency(benefit.remaining)),
    ]


def insurance_benefits(report: PatientReport) -> list[tuple[str, list[LabelValue]]]:
    benefits = report.treatment_plans.insurance_benefits
    columns = []
    if benefits.primary is not None:
        columns.append(
            (
                "PRIMARY",
                _benefit_rows(
                    benefits.primary,
                    "Deductible Remaining",
                    benefits.primary.deductible_remaining,
                ),
            )
        )
    if benefits.secondary is not None:
        columns.append(
            (
                "SECONDARY",
                _benefit_rows(benefits.secondary, "Deductible", benefits.secondary.deductible),
            )
        )
    return columns


# --- Appointments ---


def appointment_tone(status: str | None) -> str:
    """Badge tone: completed, cancelled, confirmed, scheduled or neutral."""
    s = (status or "").lower()
    if "complet" in s:
        return "completed"
    if "broken" in s or "cancel" in s:
        return "cancelled"
    if "confirm" in s:
        return "confirmed"
    if "schedul" in s:
        return "scheduled"
    return "neutral"


def appointment_row(a: Appointment) -> tuple[str, ...]:
    """One table row; the last column is notes, falling back to operatory."""
    return (
        a.date or "",
        or_dash(a.time),
        or_dash(a.provider),
        or_dash(a.status),
        or_dash(a.procedures),
        a.notes or a.operatory or DASH,
    )


def next_appointment(report: PatientReport) -> str | None:
    """One-line description of the next appointment, if one is booked."""
    nxt = report.appointments.next_appointment
    if nxt is None or not nxt.date:
        return None
    text = nxt.date
    if nxt.time:
        text += f" at {nxt.time}"
    if nxt.provider:
        text += f" with {nxt.provider}"
    if nxt.procedures:
        text += f" ({nxt.procedures})"
    return text
