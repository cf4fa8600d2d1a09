"""Patient list payload returned by ``POST /api/patients``."""

from __future__ import annotations

from pydantic import Field

from opendental_bridge.models.base import Payload


class Patient(Payload):
    """One row of the OpenDental patient list."""

    patient_id: int | None = None
    first_name: str = ""
    last_name: str = ""
    age: int | None = None
    wireless_phone: str | None = None
    home_phone: str | None = None
    work_phone: str | None = None
    address: str | None = None
    city: str | None = None
    status: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def primary_phone(self) -> str | None:
        """First non-empty of wireless, home and work phone."""
        return self.wireless_phone or self.home_phone or self.work_phone or None


class PatientList(Payload):
    patients: list[Patient] = Field(default_factory=list)
    total_count: int | None = None

    @property
    def count(self) -> int:
        """Total reported by the backend, or the number of rows received."""
        if self.total_count is None:
            return len(self.patients)
        return self.total_count
