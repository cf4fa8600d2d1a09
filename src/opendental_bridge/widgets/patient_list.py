"""Patient list widget: search, sort and paginate the practice's patients.

The widget keeps a small PatientListState per session and derives what to
show with pure functions: filter, then sort, then paginate.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Literal

from opendental_bridge.followup import FollowUpRequest
from opendental_bridge.formatting import DASH, or_dash
from opendental_bridge.models import Patient
from opendental_bridge.widgets.pagination import Page, paginate

PAGE_SIZE = 10

SortKey = Literal["last_name", "first_name", "age", "city", "status"]
SortDir = Literal["asc", "desc"]
SORT_KEYS: tuple[SortKey, ...] = ("last_name", "first_name", "age", "city", "status")

# Table header: label and the sort key it toggles (None: not sortable)
COLUMNS: tuple[tuple[str, SortKey | None], ...] = (
    ("Last Name", "last_name"),
    ("First Name", "first_name"),
    ("Age", "age"),
    ("Phone", None),
    ("City", "city"),
    ("Status", "status"),
)


@dataclass
class PatientListState:
    search: str = ""
    sort_key: SortKey = "last_name"
    sort_dir: SortDir = "asc"
    page: int = 1

    def set_search(self, text: str) -> None:
        self.search = text
        self.page = 1

    def toggle_sort(self, key: SortKey) -> None:
        """Flip direction on the current key, or sort a new key ascending."""
        if key not in SORT_KEYS:
            raise ValueError(f"Cannot sort patients by {key!r}")
        if key == self.sort_key:
            self.sort_dir = "desc" if self.sort_dir == "asc" else "asc"
        else:
            self.sort_key = key
            self.sort_dir = "asc"

    def next_page(self, view: PatientListView) -> None:
        if view.page.has_next:
            self.page = view.page.number + 1

    def previous_page(self, view: PatientListView) -> None:
        if view.page.has_previous:
            self.page = view.page.number - 1


@dataclass(frozen=True)
class PatientListView:
    page: Page[Patient]
    shown: int  # rows matching the search
    total_count: int  # as reported by the backend

    @property
    def rows(self) -> list[Patient]:
        return self.page.items


def matches(patient: Patient, query: str) -> bool:
    q = query.lower()
    if not q:
        return True
    return (
        q in patient.full_name.lower()
        or q in (patient.city or "").lower()
        or q in (patient.primary_phone or "").lower()
    )


def filter_patients(patients: Iterable[Patient], query: str) -> list[Patient]:
    return [p for p in patients if matches(p, query)]


def sort_patients(
    patients: Iterable[Patient], key: SortKey, direction: SortDir = "asc"
) -> list[Patient]:
    """Sort case-insensitively (numerically for age); ties keep their order."""
    if key == "age":

        def sort_value(p: Patient) -> Any:
            return p.age or 0

    else:

        def sort_value(p: Patient) -> Any:
            return str(getattr(p, key) or "").lower()

    return sorted(patients, key=sort_value, reverse=direction == "desc")


def build_view(
    patients: list[Patient], state: PatientListState, total_count: int | None = None
) -> PatientListView:
    filtered = filter_patients(patients, state.search)
    ordered = sort_patients(filtered, state.sort_key, state.sort_dir)
    return PatientListView(
        page=paginate(ordered, state.page, PAGE_SIZE),
        shown=len(filtered),
        total_count=len(patients) if total_count is None else total_count,
    )


def sort_arrow(state: PatientListState, key: SortKey) -> str:
    if state.sort_key != key:
        return ""
    return " ▲" if state.sort_dir == "asc" else " ▼"


def status_tone(status: str | None) -> str:
    """Badge tone for a patient status: positive, warning or neutral."""
    s = (status or "").lower()
    if s in ("patient", "active"):
        return "positive"
    if s == "inactive":
        return "warning"
    return "neutral"


def row_cells(patient: Patient) -> tuple[str, ...]:
    """Display values for one table row, in COLUMNS order."""
    return (
        patient.last_name,
        patient.first_name,
        or_dash(patient.age),
        patient.primary_phone or DASH,
        patient.city or DASH,
        patient.status or "Unknown",
    )


def chart_request(patient: Patient) -> FollowUpRequest:
    return FollowUpRequest.chart(patient.full_name)


def report_request(patient: Patient) -> FollowUpRequest:
    return FollowUpRequest.report(patient.full_name)
