from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from src.discharge.domain.models.patient import PatientCandidate


class CompositionStatus(str, Enum):
    PRELIMINARY = "preliminary"
    FINAL = "final"
    AMENDED = "amended"
    ENTERED_IN_ERROR = "entered-in-error"


class MedicationLine(BaseModel):
    medication_text: str = ""


class SectionTexts(BaseModel):
    """Free-text content typed by the clinician, one field per section."""

    chief_complaints: str = ""
    physical_examination: str = ""
    allergies: str = ""
    medical_history: str = ""
    family_history: str = ""
    investigations: str = ""
    procedures: str = ""
    care_plan: str = ""


class AttachmentUpload(BaseModel):
    """Attachment sent inline in a JSON request.

    ``data`` is base64 text, optionally still wrapped as a data URL
    (``data:application/pdf;base64,...``).
    """

    content_type: str
    filename: Optional[str] = None
    data: str


class UploadedDocument(BaseModel):
    """An attachment whose bytes have been read and whose type was accepted."""

    content_type: str
    filename: Optional[str] = None
    data: bytes


class DischargeSummaryRequest(BaseModel):
    """Snapshot of everything the form holds at the moment of building."""

    patient: Optional[PatientCandidate] = None
    practitioner_id: Optional[str] = None
    # Selected ABHA address; defaults to the first normalized option.
    abha_address: Optional[str] = None
    status: CompositionStatus = CompositionStatus.FINAL
    title: str = "Discharge Summary"
    sections: SectionTexts = Field(default_factory=SectionTexts)
    medications: List[MedicationLine] = Field(default_factory=list)
    attachment: Optional[AttachmentUpload] = None


class DischargeSummaryResponse(BaseModel):
    bundle: dict
