"""OpenDental tools for agent runtimes.

Each tool forwards one request to the OpenDental backend and reshapes the
answer into a widget payload plus a one-line summary. All tools are
read-only.

- patients.py: List every patient
- chart.py:    Dental chart (teeth, procedures, clinical notes)
- reports.py:  Full patient report (insurance, account, treatment, ...)
- registry.py: Declarations and the dispatcher
"""
