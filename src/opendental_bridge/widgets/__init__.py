"""Presentation widgets for the three tool payloads.

Each widget module holds a small per-session state object and pure
functions that derive what to display from a payload model. Rendering
lives in streamlit_app.py.

- patient_list.py:   Search, sort, paginate the patient list
- patient_chart.py:  Tooth grid, procedures, clinical notes
- patient_report.py: Six-tab patient report
- pagination.py:     Page arithmetic shared by the tables
"""
