"""Drill-down requests sent from a widget back to the tools.

The patient list lets the user open a chart or a report for a row. Chat
runtimes only accept free text for that ("Show the dental chart for Jane
Doe"), so each request has a message form, and ``parse_follow_up`` turns
such a message back into a typed request the server can dispatch without
going through an LLM.
"""

from __future__ import annotations

import re
from typing import Any, Literal

from pydantic import BaseModel, Field

FollowUpTool = Literal["get-patient-chart", "get-reports"]

_MESSAGES: dict[str, str] = {
    "get-patient-chart": "Show the dental chart for {name}",
    "get-reports": "Show the full report for {name}",
}

_PATTERNS = [
    (re.compile(r"^\s*show the dental chart for\s+(?P<name>.+?)\s*$", re.I), "get-patient-chart"),
    (re.compile(r"^\s*show the full report for\s+(?P<name>.+?)\s*$", re.I), "get-reports"),
]


class FollowUpRequest(BaseModel):
    tool: FollowUpTool
    patient_name: str = Field(min_length=1)

    @property
    def message(self) -> str:
        return _MESSAGES[self.tool].format(name=self.patient_name)

    @property
    def arguments(self) -> dict[str, Any]:
        return {"patient_name": self.patient_name}

    @classmethod
    def chart(cls, patient_name: str) -> FollowUpRequest:
        return cls(tool="get-patient-chart", patient_name=patient_name)

    @classmethod
    def report(cls, patient_name: str) -> FollowUpRequest:
        return cls(tool="get-reports", patient_name=patient_name)


def parse_follow_up(message: str) -> FollowUpRequest | None:
    """Recognise a widget follow-up message; None for any other text."""
    for pattern, tool in _PATTERNS:
        match = pattern.match(message)
        if match:
            return FollowUpRequest(tool=tool, patient_name=match.group("name"))
    return None
