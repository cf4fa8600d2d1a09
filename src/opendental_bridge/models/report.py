"""Patient report payload returned by ``POST /api/reports``."""

from __future__ import annotations

from pydantic import Field

from opendental_bridge.models.base import Payload

Money = float | None


class Address(Payload):
    street: str | None = None
    street2: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None


class Contact(Payload):
    home_phone: str | None = None
    work_phone: str | None = None
    wireless_phone: str | None = None
    email: str | None = None
    preferred_contact_method: str | None = None


class ReportPatientInfo(Payload):
    patient_id: str | None = None
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    preferred_name: str | None = None
    gender: str | None = None
    birthdate: str | None = None
    age: str | None = None
    title: str | None = None
    ssn_last_four: str | None = None
    billing_type: str | None = None
    primary_provider: str | None = None
    secondary_provider: str | None = None
    address: Address = Field(default_factory=Address)
    contact: Contact = Field(default_factory=Contact)

    @property
    def full_name(self) -> str:
        parts = (self.first_name, self.middle_name, self.last_name)
        return " ".join(p for p in parts if p)


class FamilyMember(Payload):
    name: str | None = None
    position: str | None = None
    gender: str | None = None
    status: str | None = None
    age: str | None = None
    recall_due: str | None = None


class InsurancePlan(Payload):
    carrier: str | None = None
    group_name: str | None = None
    group_number: str | None = None
    subscriber_name: str | None = None
    subscriber_id: str | None = None
    relationship_to_subscriber: str | None = None
    employer: str | None = None
    plan_type: str | None = None
    fee_schedule: str | None = None
    coverage_percentages: dict[str, str | None] = Field(default_factory=dict)


class Insurance(Payload):
    primary: InsurancePlan | None = None
    secondary: InsurancePlan | None = None


class Recall(Payload):
    type: str | None = None
    interval: str | None = None
    previous_date: str | None = None
    due_date: str | None = None
    scheduled_date: str | None = None


class Transaction(Payload):
    date: str | None = None
    patient: str | None = None
    provider: str | None = None
    code: str | None = None
    tooth: str | None = None
    description: str | None = None
    charges: Money = None
    credits: Money = None
    balance: Money = None


class Claim(Payload):
    date: str | None = None
    carrier: str | None = None
    status: str | None = None
    amount: Money = None
    estimated_payment: Money = None
    patient_portion: Money = None


class FamilyBalance(Payload):
    name: str | None = None
    balance: Money = None


class Balances(Payload):
    patient_balance: Money = None
    total_family_balance: Money = None
    family_balances: list[FamilyBalance] = Field(default_factory=list)


class Account(Payload):
    transactions: list[Transaction] = Field(default_factory=list)
    claims: list[Claim] = Field(default_factory=list)
    balances: Balances = Field(default_factory=Balances)


class ActivePlan(Payload):
    heading: str | None = None
    date: str | None = None
    status: str | None = None
    signed: str | None = None


class TreatmentProcedure(Payload):
    done: str | None = None
    priority: str | None = None
    tooth: str | None = None
    surface: str | None = None
    code: str | None = None
    description: str | None = None
    fee: Money = None
    insurance_estimate: Money = None
    patient_portion: Money = None

    @property
    def is_done(self) -> bool:
        return self.done == "Yes"


class TreatmentTotals(Payload):
    total_fee: Money = None
    total_insurance_estimate: Money = None
    total_patient_portion: Money = None


class InsuranceBenefit(Payload):
    # Primary plans report deductible_remaining, secondary plans deductible
    annual_max: Money = None
    deductible: Money = None
    deductible_remaining: Money = None
    insurance_used: Money = None
    pending: Money = None
    remaining: Money = None


class InsuranceBenefits(Payload):
    primary: InsuranceBenefit | None = None
    secondary: InsuranceBenefit | None = None


class TreatmentPlans(Payload):
    active_plans: list[ActivePlan] = Field(default_factory=list)
    procedures: list[TreatmentProcedure] = Field(default_factory=list)
    totals: TreatmentTotals = Field(default_factory=TreatmentTotals)
    insurance_benefits: InsuranceBenefits = Field(default_factory=InsuranceBenefits)


class Appointment(Payload):
    date: str | None = None
    time: str | None = None
    provider: str | None = None
    status: str | None = None
    procedures: str | None = None
    notes: str | None = None
    operatory: str | None = None


class Appointments(Payload):
    past_appointments: list[Appointment] = Field(default_factory=list)
    scheduled_appointments: list[Appointment] = Field(default_factory=list)
    next_appointment: Appointment | None = None


class ReportSummary(Payload):
    total_outstanding_balance: Money = None
    pending_insurance_claims: int | None = None
    pending_treatment_value: Money = None
    next_recall_due: str | None = None
    insurance_benefits_remaining: Money = None


class PatientReport(Payload):
    patient_info: ReportPatientInfo = Field(default_factory=ReportPatientInfo)
    family_members: list[FamilyMember] = Field(default_factory=list)
    insurance: Insurance = Field(default_factory=Insurance)
    recall: Recall = Field(default_factory=Recall)
    account: Account = Field(default_factory=Account)
    treatment_plans: TreatmentPlans = Field(default_factory=TreatmentPlans)
    appointments: Appointments = Field(default_factory=Appointments)
    summary: ReportSummary = Field(default_factory=ReportSummary)
