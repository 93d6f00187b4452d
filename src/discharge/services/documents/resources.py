from __future__ import annotations

from typing import List, Optional, Sequence

from src.discharge.domain.models.discharge_request import MedicationLine
from src.discharge.domain.models.fhir import (
    Address,
    Attachment,
    Binary,
    CarePlan,
    CarePlanActivity,
    CarePlanActivityDetail,
    CodeableConcept,
    ContactPoint,
    DocumentReference,
    DocumentReferenceContent,
    Encounter,
    HumanName,
    Identifier,
    MedicationRequest,
    Meta,
    Patient,
    Period,
    Practitioner,
    Qualification,
    Reference,
)
from src.discharge.domain.models.patient import PatientCandidate
from src.discharge.domain.models.practitioner import PractitionerProfile
from src.discharge.domain.terminology import (
    ABHA_IDENTIFIER_SYSTEM,
    AMBULATORY,
    DISCHARGE_SUMMARY,
    PROFILES,
    standard_dosage_instruction,
)
from src.discharge.services.documents.errors import MissingPatientError
from src.discharge.services.documents.identifiers import urn
from src.discharge.services.documents.narrative import build_narrative, paragraph
from src.discharge.services.documents.temporal import to_fhir_date

MEDICATION_FALLBACK_TEXT = "Medication"

_GENDER_CODES = {"m": "male", "f": "female", "o": "other", "u": "unknown"}


def meta_for(resource_type: str, *, last_updated: Optional[str] = None) -> Meta:
    return Meta(profile=[PROFILES[resource_type]], last_updated=last_updated)


def reference_to(resource_id: str, *, type: Optional[str] = None, display: Optional[str] = None) -> Reference:
    return Reference(reference=urn(resource_id), type=type, display=display)


def _administrative_gender(raw: Optional[str]) -> Optional[str]:
    value = (raw or "").strip().lower()
    if not value:
        return None
    return _GENDER_CODES.get(value, value)


def build_patient(
    patient: Optional[PatientCandidate],
    *,
    patient_id: str,
    abha_address: Optional[str],
    language: str,
) -> Patient:
    """Map the selected candidate onto a Patient resource.

    Address, identifier, birth date, gender and telecom are left out when the
    source has nothing for them. Building without a patient is a caller error.
    """

    if patient is None:
        raise MissingPatientError()

    identifiers: List[Identifier] = []
    if patient.abha_ref:
        identifiers.append(Identifier(system=ABHA_IDENTIFIER_SYSTEM, value=patient.abha_ref))

    telecom: List[ContactPoint] = []
    if patient.mobile:
        telecom.append(ContactPoint(system="phone", value=patient.mobile))
    if patient.email:
        telecom.append(ContactPoint(system="email", value=patient.email))
    if abha_address:
        telecom.append(ContactPoint(system="url", value=f"abha://{abha_address}"))

    summary = paragraph(patient.name) + paragraph(f"{patient.gender or ''} {patient.dob or ''}")

    return Patient(
        id=patient_id,
        language=language,
        meta=meta_for("Patient"),
        text=build_narrative("Patient", summary, language=language),
        identifier=identifiers or None,
        name=[HumanName(text=patient.name)],
        gender=_administrative_gender(patient.gender),
        birth_date=to_fhir_date(patient.dob),
        telecom=telecom or None,
        address=[Address(text=patient.address)] if patient.address else None,
    )


def build_practitioner(practitioner: PractitionerProfile, *, practitioner_id: str, language: str) -> Practitioner:
    registration = practitioner.registration
    identifiers = None
    if registration is not None and registration.system and registration.value:
        identifiers = [Identifier(system=registration.system, value=registration.value)]

    telecom: List[ContactPoint] = []
    if practitioner.phone:
        telecom.append(ContactPoint(system="phone", value=practitioner.phone))
    if practitioner.email:
        telecom.append(ContactPoint(system="email", value=practitioner.email))

    qualification = None
    if practitioner.qualification:
        qualification = [Qualification(code=CodeableConcept(text=practitioner.qualification))]

    return Practitioner(
        id=practitioner_id,
        language=language,
        meta=meta_for("Practitioner"),
        text=build_narrative(
            "Practitioner",
            paragraph(practitioner.name) + paragraph(practitioner.qualification),
            language=language,
        ),
        identifier=identifiers,
        name=[HumanName(text=practitioner.name)],
        telecom=telecom or None,
        qualification=qualification,
    )


def build_encounter(*, encounter_id: str, patient_id: str, timestamp: str, language: str) -> Encounter:
    # Duration is not modelled: the encounter opens and closes at build time.
    return Encounter(
        id=encounter_id,
        language=language,
        meta=meta_for("Encounter"),
        text=build_narrative("Encounter", paragraph("Encounter for discharge"), language=language),
        class_=AMBULATORY,
        subject=reference_to(patient_id),
        period=Period(start=timestamp, end=timestamp),
    )


def build_medication_requests(
    medications: Sequence[MedicationLine],
    *,
    request_ids: Sequence[str],
    patient_id: str,
    practitioner_id: str,
    authored_on: str,
    language: str,
) -> List[MedicationRequest]:
    """One MedicationRequest per line, in input order."""

    if len(request_ids) != len(medications):
        raise ValueError("Exactly one id is required per medication line")

    requests: List[MedicationRequest] = []
    for line, request_id in zip(medications, request_ids):
        description = line.medication_text.strip() or MEDICATION_FALLBACK_TEXT
        requests.append(
            MedicationRequest(
                id=request_id,
                language=language,
                meta=meta_for("MedicationRequest"),
                text=build_narrative("MedicationRequest", paragraph(line.medication_text), language=language),
                medication_codeable_concept=CodeableConcept(text=description),
                subject=reference_to(patient_id),
                authored_on=authored_on,
                requester=reference_to(practitioner_id, display="Practitioner"),
                dosage_instruction=[standard_dosage_instruction()],
            )
        )
    return requests


def has_care_plan(care_plan_text: Optional[str]) -> bool:
    return bool(care_plan_text and care_plan_text.strip())


def build_care_plan(
    care_plan_text: Optional[str],
    *,
    care_plan_id: Optional[str],
    patient_id: str,
    practitioner_id: str,
    language: str,
) -> Optional[CarePlan]:
    """Return None when there is no care plan text (blank counts as none)."""

    if not has_care_plan(care_plan_text) or care_plan_id is None:
        return None
    return CarePlan(
        id=care_plan_id,
        language=language,
        meta=meta_for("CarePlan"),
        text=build_narrative("CarePlan", paragraph(care_plan_text), language=language),
        subject=reference_to(patient_id),
        author=[reference_to(practitioner_id)],
        activity=[CarePlanActivity(detail=CarePlanActivityDetail(kind="ServiceRequest", description=care_plan_text))],
    )


def build_binary(*, binary_id: str, content_type: str, data: str, language: str) -> Binary:
    return Binary(
        id=binary_id,
        language=language,
        meta=meta_for("Binary"),
        content_type=content_type,
        data=data,
    )


def build_document_reference(
    *,
    document_reference_id: str,
    binary: Binary,
    patient_id: str,
    timestamp: str,
    language: str,
) -> DocumentReference:
    return DocumentReference(
        id=document_reference_id,
        language=language,
        meta=meta_for("DocumentReference"),
        text=build_narrative("DocumentReference", paragraph("Discharge document"), language=language),
        type=CodeableConcept(coding=[DISCHARGE_SUMMARY], text=DISCHARGE_SUMMARY.display),
        subject=reference_to(patient_id),
        date=timestamp,
        content=[
            DocumentReferenceContent(
                attachment=Attachment(content_type=binary.content_type, url=urn(binary.id)),
            )
        ],
    )
