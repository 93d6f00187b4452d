from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FHIRModel(BaseModel):
    """Base for every FHIR element we emit.

    Python attributes are snake_case; the wire format is camelCase. Optional
    elements default to ``None`` and callers serialize with
    ``exclude_none=True`` so absent elements are left out of the JSON
    entirely instead of being written as ``null``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_fhir(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


# Data types


class Coding(FHIRModel):
    system: str
    code: str
    display: str


class CodeableConcept(FHIRModel):
    coding: Optional[List[Coding]] = None
    text: Optional[str] = None


class Reference(FHIRModel):
    reference: str
    type: Optional[str] = None
    display: Optional[str] = None


class Narrative(FHIRModel):
    status: str = "generated"
    div: str


class Meta(FHIRModel):
    profile: List[str]
    last_updated: Optional[str] = None


class Identifier(FHIRModel):
    system: str
    value: str


class ContactPoint(FHIRModel):
    system: str
    value: str


class HumanName(FHIRModel):
    text: Optional[str] = None


class Address(FHIRModel):
    text: str


class Period(FHIRModel):
    start: str
    end: str


class TimingRepeat(FHIRModel):
    frequency: int
    period: int
    period_unit: str


class Timing(FHIRModel):
    repeat: TimingRepeat


class Dosage(FHIRModel):
    text: str
    additional_instruction: Optional[List[CodeableConcept]] = None
    timing: Optional[Timing] = None
    route: Optional[CodeableConcept] = None
    method: Optional[CodeableConcept] = None


class Qualification(FHIRModel):
    code: CodeableConcept


class Attachment(FHIRModel):
    content_type: str
    url: str


class DocumentReferenceContent(FHIRModel):
    attachment: Attachment


class CarePlanActivityDetail(FHIRModel):
    kind: str
    description: str


class CarePlanActivity(FHIRModel):
    detail: CarePlanActivityDetail


class CompositionSection(FHIRModel):
    """A Composition section.

    Exactly one of ``text`` and ``entry`` is populated; see
    ``services.documents.sections``.
    """

    title: str
    code: CodeableConcept
    text: Optional[Narrative] = None
    entry: Optional[List[Reference]] = None


# Resources


class DomainResource(FHIRModel):
    id: str
    language: str
    meta: Meta
    text: Optional[Narrative] = None


class Patient(DomainResource):
    resource_type: Literal["Patient"] = "Patient"
    identifier: Optional[List[Identifier]] = None
    name: List[HumanName]
    gender: Optional[str] = None
    birth_date: Optional[str] = None
    telecom: Optional[List[ContactPoint]] = None
    address: Optional[List[Address]] = None


class Practitioner(DomainResource):
    resource_type: Literal["Practitioner"] = "Practitioner"
    identifier: Optional[List[Identifier]] = None
    name: List[HumanName]
    telecom: Optional[List[ContactPoint]] = None
    qualification: Optional[List[Qualification]] = None


class Encounter(DomainResource):
    resource_type: Literal["Encounter"] = "Encounter"
    status: str = "finished"
    class_: Coding = Field(alias="class")
    subject: Reference
    period: Period


class MedicationRequest(DomainResource):
    resource_type: Literal["MedicationRequest"] = "MedicationRequest"
    status: str = "active"
    intent: str = "order"
    medication_codeable_concept: CodeableConcept
    subject: Reference
    authored_on: str
    requester: Reference
    dosage_instruction: List[Dosage]


class CarePlan(DomainResource):
    resource_type: Literal["CarePlan"] = "CarePlan"
    status: str = "active"
    intent: str = "plan"
    subject: Reference
    author: List[Reference]
    activity: List[CarePlanActivity]


class DocumentReference(DomainResource):
    resource_type: Literal["DocumentReference"] = "DocumentReference"
    status: str = "current"
    type: CodeableConcept
    subject: Reference
    date: str
    content: List[DocumentReferenceContent]


class Binary(FHIRModel):
    resource_type: Literal["Binary"] = "Binary"
    id: str
    language: str
    meta: Meta
    content_type: str
    data: str


class Composition(DomainResource):
    resource_type: Literal["Composition"] = "Composition"
    status: str
    type: CodeableConcept
    subject: Reference
    encounter: Reference
    date: str
    author: List[Reference]
    title: str
    section: List[CompositionSection]


Resource = Union[
    Composition,
    Patient,
    Practitioner,
    Encounter,
    MedicationRequest,
    CarePlan,
    DocumentReference,
    Binary,
]


class BundleEntry(FHIRModel):
    full_url: str
    resource: Resource


class Bundle(FHIRModel):
    resource_type: Literal["Bundle"] = "Bundle"
    id: str
    meta: Meta
    identifier: Identifier
    type: str = "document"
    timestamp: str
    entry: List[BundleEntry]
