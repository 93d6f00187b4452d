from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from src.discharge.domain.models.fhir import (
    CodeableConcept,
    Coding,
    Dosage,
    Timing,
    TimingRepeat,
)

SNOMED_SYSTEM = "http://snomed.info/sct"
ACT_CODE_SYSTEM = "http://terminology.hl7.org/CodeSystem/v3-ActCode"
ABHA_IDENTIFIER_SYSTEM = "https://healthid.ndhm.gov.in"
BUNDLE_IDENTIFIER_SYSTEM = "urn:ietf:rfc:3986"

XHTML_NAMESPACE = "http://www.w3.org/1999/xhtml"

# Profiles stamped into meta.profile of each resource.
PROFILES = {
    "Bundle": "http://hl7.org/fhir/StructureDefinition/Bundle",
    "Composition": "http://hl7.org/fhir/StructureDefinition/Composition",
    "Patient": "http://hl7.org/fhir/StructureDefinition/Patient",
    "Practitioner": "http://hl7.org/fhir/StructureDefinition/Practitioner",
    "Encounter": "http://hl7.org/fhir/StructureDefinition/Encounter",
    "MedicationRequest": "http://hl7.org/fhir/StructureDefinition/MedicationRequest",
    "CarePlan": "http://hl7.org/fhir/StructureDefinition/CarePlan",
    "DocumentReference": "http://hl7.org/fhir/StructureDefinition/DocumentReference",
    "Binary": "https://nrces.in/ndhm/fhir/r4/StructureDefinition/Binary",
}

DISCHARGE_SUMMARY = Coding(system=SNOMED_SYSTEM, code="373942005", display="Discharge summary")

AMBULATORY = Coding(system=ACT_CODE_SYSTEM, code="AMB", display="ambulatory")


class SectionKey(str, Enum):
    CHIEF_COMPLAINTS = "chief_complaints"
    PHYSICAL_EXAMINATION = "physical_examination"
    ALLERGIES = "allergies"
    MEDICAL_HISTORY = "medical_history"
    FAMILY_HISTORY = "family_history"
    INVESTIGATIONS = "investigations"
    MEDICATIONS = "medications"
    PROCEDURES = "procedures"
    CARE_PLAN = "care_plan"
    DOCUMENTS = "documents"


@dataclass(frozen=True)
class SectionDefinition:
    key: SectionKey
    title: str
    coding: Coding
    # Resource type this section may link to; None means narrative only.
    link_type: Optional[str] = None
    # Narrative shown when the section has neither text nor links.
    fallback_text: str = "No data"


def _snomed(code: str, display: str) -> Coding:
    return Coding(system=SNOMED_SYSTEM, code=code, display=display)


# Emission order of Composition.section.
SECTIONS: Tuple[SectionDefinition, ...] = (
    SectionDefinition(
        SectionKey.CHIEF_COMPLAINTS,
        "Chief Complaints",
        _snomed("422843007", "Chief complaint section"),
    ),
    SectionDefinition(
        SectionKey.PHYSICAL_EXAMINATION,
        "Physical Examination",
        _snomed("425044008", "Physical exam section"),
    ),
    SectionDefinition(
        SectionKey.ALLERGIES,
        "Allergies",
        _snomed("722446000", "Allergy record"),
    ),
    SectionDefinition(
        SectionKey.MEDICAL_HISTORY,
        "Medical History",
        _snomed("1003642006", "Past medical history section"),
    ),
    SectionDefinition(
        SectionKey.FAMILY_HISTORY,
        "Family History",
        _snomed("422432008", "Family history section"),
    ),
    SectionDefinition(
        SectionKey.INVESTIGATIONS,
        "Investigations",
        _snomed("721981007", "Diagnostic studies report"),
    ),
    SectionDefinition(
        SectionKey.MEDICATIONS,
        "Medications",
        _snomed("1003606003", "Medication history section"),
        link_type="MedicationRequest",
        fallback_text="No medications",
    ),
    SectionDefinition(
        SectionKey.PROCEDURES,
        "Procedures",
        _snomed("1003640003", "History of past procedure section"),
    ),
    SectionDefinition(
        SectionKey.CARE_PLAN,
        "Care Plan",
        _snomed("734163000", "Care plan"),
        link_type="CarePlan",
    ),
    SectionDefinition(
        SectionKey.DOCUMENTS,
        "Documents",
        DISCHARGE_SUMMARY,
        link_type="DocumentReference",
        fallback_text="Discharge documents attached",
    ),
)


def standard_dosage_instruction() -> Dosage:
    """The single dosage instruction attached to every MedicationRequest."""

    return Dosage(
        text="One tablet twice a day after meal",
        additional_instruction=[
            CodeableConcept(coding=[_snomed("311504000", "With or after food")]),
        ],
        timing=Timing(repeat=TimingRepeat(frequency=2, period=1, period_unit="d")),
        route=CodeableConcept(coding=[_snomed("26643006", "Oral Route")]),
        method=CodeableConcept(coding=[_snomed("421521009", "Swallow")]),
    )
