from datetime import datetime, timedelta, timezone
from itertools import count

import pytest

from src.discharge.domain.models.discharge_request import (
    DischargeSummaryRequest,
    MedicationLine,
    SectionTexts,
)
from src.discharge.domain.models.patient import PatientCandidate
from src.discharge.services.documents.service import DischargeSummaryService
from src.discharge.services.practitioners.roster import DEFAULT_ROSTER, PractitionerRoster

IST = timezone(timedelta(hours=5, minutes=30))
FIXED_NOW = datetime(2024, 5, 1, 10, 30, 15, 987654, tzinfo=IST)
FIXED_TIMESTAMP = "2024-05-01T10:30:15+05:30"


class SequentialIds:
    """Deterministic uuid4-shaped ids: ...-000000000001, ...-000000000002, ..."""

    def __init__(self) -> None:
        self._counter = count(1)
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        return f"00000000-0000-4000-8000-{next(self._counter):012d}"


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def service(ids: SequentialIds) -> DischargeSummaryService:
    return DischargeSummaryService(
        roster=PractitionerRoster(DEFAULT_ROSTER),
        language="en-IN",
        clock=lambda: FIXED_NOW,
        id_factory=ids,
    )


@pytest.fixture
def patient() -> PatientCandidate:
    return PatientCandidate(
        id="p-001",
        name="Ravi Kumar",
        gender="Male",
        dob="5-3-1990",
        mobile="+91-98765-43210",
        email="ravi@example.org",
        address="12 MG Road, Bengaluru",
        abha_ref="12-3456-7890-1234",
        additional_attributes={
            "abha_addresses": [
                {"address": "ravi.k@abdm", "isPrimary": False},
                {"address": "ravi@abdm", "isPrimary": True},
            ]
        },
    )


@pytest.fixture
def full_request(patient: PatientCandidate) -> DischargeSummaryRequest:
    return DischargeSummaryRequest(
        patient=patient,
        practitioner_id="prac-2",
        sections=SectionTexts(
            chief_complaints="Fever for 3 days",
            physical_examination="Temp 101F",
            care_plan="Review after 1 week",
        ),
        medications=[
            MedicationLine(medication_text="Paracetamol 500mg"),
            MedicationLine(medication_text="Azithromycin 250mg"),
        ],
    )
