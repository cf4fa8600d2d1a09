"""Streamlit frontend that renders the OpenDental widgets.

Streamlit re-runs this whole script on every interaction. Widget state
(search text, sort, page, tab, selected tooth) is kept in st.session_state,
one state object per widget, and the views are re-derived on each run.

Tool calls go to the bridge server (app.py) over HTTP. The "Chart" and
"Report" buttons on a patient row send a typed follow-up to /followup,
the same drill-down a chat runtime triggers with a message.

Run locally with:
    streamlit run src/opendental_bridge/streamlit_app.py

The bridge server must be running at BRIDGE_URL.
"""

from __future__ import annotations

from typing import Any

import requests
import streamlit as st

from opendental_bridge.config import BRIDGE_URL, TOOL_TIMEOUTS
from opendental_bridge.followup import FollowUpRequest
from opendental_bridge.models import DentalChart, Patient, PatientReport
from opendental_bridge.widgets import patient_chart, patient_list, patient_report

# Tool calls may legitimately take as long as the slowest tool timeout
REQUEST_TIMEOUT = max(TOOL_TIMEOUTS.values()) + 30

TONE_COLORS = {
    "positive": "green",
    "completed": "green",
    "warning": "orange",
    "scheduled": "orange",
    "cancelled": "red",
    "confirmed": "blue",
    "neutral": "gray",
}


# --- Bridge calls ---


def _post(path: str, payload: Any = None) -> None:
    """POST to the bridge and keep the tool result for rendering."""
    try:
        resp = requests.post(f"{BRIDGE_URL}{path}", json=payload, timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
        data = resp.json()
    except requests.exceptions.ConnectionError:
        st.session_state.notice = (
            f"Could not connect to the bridge. Is the server running at {BRIDGE_URL}?"
        )
        return
    except requests.exceptions.Timeout:
        st.session_state.notice = "The request timed out."
        return
    except requests.exceptions.RequestException as e:
        st.session_state.notice = f"Error: {e}"
        return

    # /chat wraps the tool result; the other endpoints return it directly
    if path == "/chat":
        st.session_state.messages.append(data["response"])
        data = data.get("result")
    st.session_state.notice = None
    if data is not None:
        st.session_state.result = data
        # A new payload starts with fresh widget state
        st.session_state.widget_states = {}


def _send_follow_up(request: FollowUpRequest) -> None:
    st.session_state.messages.append(request.message)
    _post("/followup", request.model_dump())


def _widget_state(name: str, factory: type) -> Any:
    states = st.session_state.widget_states
    if name not in states:
        states[name] = factory()
    return states[name]


def _table(columns: tuple[str, ...], rows: list[tuple[str, ...]], empty: str) -> None:
    if not rows:
        st.caption(empty)
        return
    st.table([dict(zip(columns, row)) for row in rows])


def _badge(text: str, tone: str) -> str:
    return f":{TONE_COLORS.get(tone, 'gray')}[**{text}**]"


# --- Patient list ---


def render_patient_list(props: dict[str, Any]) -> None:
    state: patient_list.PatientListState = _widget_state(
        "patient-list", patient_list.PatientListState
    )
    patients = [Patient.model_validate(p) for p in props.get("patients", [])]
    st.subheader("Patients")
    search = st.text_input("Search name, city, phone…", value=state.search)
    if search != state.search:
        state.set_search(search)
    view = patient_list.build_view(patients, state, props.get("total_count"))
    st.caption(f"{view.total_count} total · {view.shown} shown")

    header = st.columns(len(patient_list.COLUMNS) + 1)
    for col, (label, key) in zip(header, patient_list.COLUMNS):
        if key is None:
            col.markdown(f"**{label}**")
        else:
            col.button(
                label + patient_list.sort_arrow(state, key),
                key=f"sort_{key}",
                on_click=state.toggle_sort,
                args=(key,),
            )
    header[-1].markdown("**Actions**")

    if not view.rows:
        st.caption("No patients found.")
    for i, p in enumerate(view.rows):
        cells = st.columns(len(patient_list.COLUMNS) + 1)
        values = patient_list.row_cells(p)
        for col, value in zip(cells[:-2], values[:-1]):
            col.write(value)
        cells[-2].markdown(_badge(values[-1], patient_list.status_tone(p.status)))
        with cells[-1]:
            st.button(
                "Chart",
                key=f"chart_{i}",
                on_click=_send_follow_up,
                args=(patient_list.chart_request(p),),
            )
            st.button(
                "Report",
                key=f"report_{i}",
                on_click=_send_follow_up,
                args=(patient_list.report_request(p),),
            )

    if view.page.total_pages > 1:
        prev_col, label_col, next_col = st.columns([1, 3, 1])
        prev_col.button(
            "Prev",
            disabled=not view.page.has_previous,
            on_click=state.previous_page,
            args=(view,),
        )
        label_col.caption(f"Page {view.page.number} of {view.page.total_pages}")
        next_col.button(
            "Next",
            disabled=not view.page.has_next,
            on_click=state.next_page,
            args=(view,),
        )


# --- Dental chart ---


def _tooth_dot(cell: patient_chart.ToothCell) -> str:
    style = f"background:{cell.color};width:22px;height:22px;margin:auto;"
    if cell.missing:
        style += f"border-radius:4px;opacity:0.4;border:2px dashed {cell.color};"
    else:
        style += "border-radius:50%;"
    return f'<div style="{style}"></div>'


def _render_arch(cells: list[patient_chart.ToothCell], state: patient_chart.PatientChartState) -> None:
    for col, cell in zip(st.columns(len(cells)), cells):
        col.markdown(_tooth_dot(cell), unsafe_allow_html=True)
        col.button(
            f"**{cell.number}**" if cell.selected else str(cell.number),
            key=f"tooth_{cell.number}",
            on_click=state.select_tooth,
            args=(cell.number,),
        )


def render_patient_chart(props: dict[str, Any]) -> None:
    state: patient_chart.PatientChartState = _widget_state(
        "patient-chart", patient_chart.PatientChartState
    )
    chart = DentalChart.model_validate(props.get("chart") or {})

    st.subheader(f"Dental Chart — {props.get('patient_name') or 'Patient'}")
    facts = patient_chart.header_facts(chart)
    if facts:
        st.caption(" · ".join(facts))
    for kind, text in patient_chart.header_badges(chart.patient_info):
        tone = {"allergies": "cancelled", "medications": "confirmed"}.get(kind, "warning")
        st.markdown(_badge(text, tone))

    labels = {
        "teeth": "Tooth Chart",
        "procedures": f"Procedures ({len(chart.procedures)})",
        "clinical": "Clinical",
    }
    tab = st.radio(
        "View",
        patient_chart.TABS,
        index=patient_chart.TABS.index(state.tab),
        format_func=labels.get,
        horizontal=True,
        label_visibility="collapsed",
    )
    state.set_tab(tab)

    if state.tab == "teeth":
        upper, lower = patient_chart.tooth_grid(chart, state.selected_tooth)
        st.caption("Upper Arch")
        _render_arch(upper, state)
        st.divider()
        _render_arch(lower, state)
        st.caption("Lower Arch")
        st.markdown(
            "  ".join(
                f'<span style="color:{patient_chart.CONDITION_COLORS["light"][key]}">●</span> {label}'
                for label, key in patient_chart.LEGEND
            ),
            unsafe_allow_html=True,
        )

        detail = patient_chart.selected_tooth_detail(chart, state.selected_tooth)
        if detail is not None:
            with st.container(border=True):
                st.markdown(f"**Tooth #{state.selected_tooth}**")
                line = f"Condition: {detail.condition or ''}"
                if detail.surface:
                    line += f" · Surface: {detail.surface}"
                st.caption(line)
                if detail.notes:
                    st.caption(detail.notes)

        cards = patient_chart.quadrant_cards(chart)
        for row in (cards[:2], cards[2:]):
            for col, (label, text) in zip(st.columns(2), row):
                with col.container(border=True):
                    st.markdown(f"**{label}**")
                    st.caption(text)

    elif state.tab == "procedures":
        filter_labels = patient_chart.filter_labels(chart)
        choice = st.radio(
            "Filter",
            patient_chart.PROCEDURE_FILTERS,
            index=patient_chart.PROCEDURE_FILTERS.index(state.procedure_filter),
            format_func=filter_labels.get,
            horizontal=True,
            label_visibility="collapsed",
        )
        state.set_procedure_filter(choice)
        for col, (label, value) in zip(
            st.columns(6), patient_chart.procedure_counters(chart)
        ):
            col.metric(label, value)
        rows = [
            patient_chart.procedure_row(p)
            for p in patient_chart.filter_procedures(chart.procedures, state.procedure_filter)
        ]
        _table(patient_chart.PROCEDURE_COLUMNS, rows, "No procedures found.")

    else:
        for title, text in patient_chart.clinical_sections(chart):
            with st.container(border=True):
                st.markdown(f"**{title}**")
                st.write(text)


# --- Patient report ---


def _fields(pairs: list[tuple[str, str]]) -> None:
    for label, value in pairs:
        st.markdown(f"{label}: **{value}**")


def _cards(pairs: list[tuple[str, str]]) -> None:
    for col, (label, value) in zip(st.columns(len(pairs)), pairs):
        col.metric(label, value)


def render_patient_report(props: dict[str, Any]) -> None:
    state: patient_report.PatientReportState = _widget_state(
        "patient-report", patient_report.PatientReportState
    )
    report = PatientReport.model_validate(props.get("report") or {})

    st.subheader(f"Patient Report — {props.get('patient_name') or 'Patient'}")
    _cards(patient_report.summary_cards(report))

    labels = dict(patient_report.tab_labels(report))
    tab = st.radio(
        "Section",
        patient_report.TABS,
        index=patient_report.TABS.index(state.tab),
        format_func=labels.get,
        horizontal=True,
        label_visibility="collapsed",
    )
    state.set_tab(tab)

    if state.tab == "overview":
        for title, pairs in patient_report.overview_sections(report):
            with st.container(border=True):
                st.markdown(f"**{title}**")
                _fields(pairs)

    elif state.tab == "family":
        _table(
            patient_report.FAMILY_COLUMNS,
            patient_report.family_rows(report),
            "No family members found.",
        )

    elif state.tab == "insurance":
        cards = patient_report.insurance_cards(report)
        if not cards:
            st.caption("No insurance information on file.")
        for card in cards:
            with st.container(border=True):
                st.markdown(f"**{card.title}**")
                left, right = st.columns(2)
                with left:
                    _fields(card.fields)
                if card.coverage:
                    with right:
                        st.caption("COVERAGE")
                        _fields(card.coverage)

    elif state.tab == "account":
        _cards(patient_report.balance_cards(report))
        family = patient_report.family_balances(report)
        if family:
            st.markdown("**Family Balances**")
            _fields(family)

        page = patient_report.transactions_page(report, state.account_page)
        st.markdown(f"**Transactions ({len(report.account.transactions)})**")
        _table(
            patient_report.TRANSACTION_COLUMNS,
            [patient_report.transaction_row(t) for t in page.items],
            "No transactions.",
        )
        if page.total_pages > 1:
            prev_col, label_col, next_col = st.columns([1, 3, 1])
            prev_col.button(
                "Prev",
                key="acct_prev",
                disabled=not page.has_previous,
                on_click=state.previous_account_page,
                args=(page,),
            )
            label_col.caption(f"Page {page.number} of {page.total_pages}")
            next_col.button(
                "Next",
                key="acct_next",
                disabled=not page.has_next,
                on_click=state.next_account_page,
                args=(page,),
            )

        claims = report.account.claims
        if claims:
            st.markdown(f"**Claims ({len(claims)})**")
            _table(
                patient_report.CLAIM_COLUMNS,
                [patient_report.claim_row(c) for c in claims],
                "",
            )

    elif state.tab == "treatment":
        plans = patient_report.active_plan_cards(report)
        if plans:
            st.markdown("**Active Plans**")
            for heading, detail in plans:
                st.markdown(f"**{heading}**  \n{detail}")
        procedures = report.treatment_plans.procedures
        st.markdown(f"**Procedures ({len(procedures)})**")
        _table(
            patient_report.TREATMENT_COLUMNS,
            [patient_report.treatment_row(p) for p in procedures],
            "No treatment procedures.",
        )
        totals = patient_report.treatment_totals(report)
        if totals:
            _cards(totals)
        benefits = patient_report.insurance_benefits(report)
        if benefits:
            st.markdown("**Insurance Benefits**")
            for col, (title, pairs) in zip(st.columns(2), benefits):
                with col:
                    st.caption(title)
                    _fields(pairs)

    else:
        nxt = patient_report.next_appointment(report)
        if nxt:
            with st.container(border=True):
                st.markdown(f"**Next Appointment**  \n{nxt}")
        appts = report.appointments
        for title, columns, rows in (
            ("Scheduled", patient_report.SCHEDULED_COLUMNS, appts.scheduled_appointments),
            ("Past", patient_report.PAST_COLUMNS, appts.past_appointments),
        ):
            st.markdown(f"**{title} ({len(rows)})**")
            _table(columns, [patient_report.appointment_row(a) for a in rows], "None.")


RENDERERS = {
    "patient-list": render_patient_list,
    "patient-chart": render_patient_chart,
    "patient-report": render_patient_report,
}


# --- Page ---

st.set_page_config(page_title="OpenDental", page_icon="\U0001f9b7", layout="wide")
st.title("OpenDental")

for key, default in (
    ("messages", []),
    ("result", None),
    ("widget_states", {}),
    ("notice", None),
):
    if key not in st.session_state:
        st.session_state[key] = default

with st.sidebar:
    st.button("Load patients", on_click=_post, args=("/tools/get-patients", {}))
    name = st.text_input("Patient name")
    if name:
        st.button("Dental chart", on_click=_send_follow_up, args=(FollowUpRequest.chart(name),))
        st.button("Full report", on_click=_send_follow_up, args=(FollowUpRequest.report(name),))
    for message in st.session_state.messages[-10:]:
        st.caption(message)

user_input = st.chat_input("Ask about a patient...")
if user_input:
    st.session_state.messages.append(user_input)
    with st.spinner("Thinking..."):
        _post("/chat", {"message": user_input})

if st.session_state.notice:
    st.warning(st.session_state.notice)

result = st.session_state.result
if result is not None:
    if result.get("is_error"):
        st.error(result.get("output"))
    else:
        st.caption(result.get("output"))
        renderer = RENDERERS.get(result.get("widget") or "")
        if renderer is not None:
            renderer(result.get("props") or {})
