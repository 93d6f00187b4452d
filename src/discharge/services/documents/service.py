from __future__ import annotations

import logging
from typing import List, Optional

from src.discharge.config import settings
from src.discharge.domain.models.discharge_request import DischargeSummaryRequest, UploadedDocument
from src.discharge.domain.models.fhir import Bundle, BundleEntry, Identifier, Resource
from src.discharge.domain.terminology import BUNDLE_IDENTIFIER_SYSTEM
from src.discharge.services.audit.service import audit_service
from src.discharge.services.documents.errors import MissingPatientError
from src.discharge.services.documents.identifiers import IdFactory, next_id, urn
from src.discharge.services.documents.payload import encode_payload
from src.discharge.services.documents.resources import (
    build_binary,
    build_care_plan,
    build_document_reference,
    build_encounter,
    build_medication_requests,
    build_patient,
    build_practitioner,
    has_care_plan,
    meta_for,
)
from src.discharge.services.documents.sections import build_composition, compose_sections, section_links
from src.discharge.services.documents.temporal import Clock, format_instant, make_clock
from src.discharge.services.patients.abha import default_abha_address
from src.discharge.services.practitioners.roster import PractitionerRoster, practitioner_roster

logger = logging.getLogger(__name__)

BUNDLE_ID_PREFIX = "DischargeSummaryBundle-"


class DischargeSummaryService:
    """Assemble a discharge summary document Bundle from a form snapshot.

    Every build is independent: identifiers are minted fresh, the clock is
    read exactly once and the resulting timestamp is shared by the
    Composition, Encounter period, MedicationRequests, DocumentReference and
    the Bundle itself. Resources reference each other only through
    ``urn:uuid:`` full URLs of entries in the same Bundle.

    The roster, locale, clock and id factory are injected so tests can pin
    them; by default they come from application settings.
    """

    def __init__(
        self,
        *,
        roster: PractitionerRoster | None = None,
        language: str | None = None,
        clock: Clock | None = None,
        id_factory: IdFactory | None = None,
    ) -> None:
        self._roster: PractitionerRoster = roster or practitioner_roster
        self._language: str = language or settings.document_language
        self._clock: Clock = clock or make_clock(settings.document_timezone)
        self._next_id: IdFactory = id_factory or next_id

    def build(
        self,
        request: DischargeSummaryRequest,
        *,
        document: Optional[UploadedDocument] = None,
    ) -> Bundle:
        """Build the Bundle.

        Raises MissingPatientError before anything is constructed when no
        patient is selected, UnknownPractitionerError for a practitioner id
        outside the roster and UnsupportedMediaTypeError for an attachment
        whose type is not allowed.
        """

        if request.patient is None:
            raise MissingPatientError()
        patient = request.patient
        practitioner = self._roster.resolve(request.practitioner_id)
        content_type, payload_data = encode_payload(document)

        abha_address = request.abha_address
        if abha_address is None:
            abha_address = default_abha_address(patient)

        language = self._language
        timestamp = format_instant(self._clock())
        care_plan_text = request.sections.care_plan

        bundle_id = f"{BUNDLE_ID_PREFIX}{self._next_id()}"
        composition_id = self._next_id()
        patient_id = self._next_id()
        encounter_id = self._next_id()
        practitioner_id = self._next_id()
        medication_request_ids = [self._next_id() for _ in request.medications]
        care_plan_id = self._next_id() if has_care_plan(care_plan_text) else None
        binary_id = self._next_id()
        document_reference_id = self._next_id()
        bundle_token = self._next_id()

        patient_resource = build_patient(patient, patient_id=patient_id, abha_address=abha_address, language=language)
        practitioner_resource = build_practitioner(practitioner, practitioner_id=practitioner_id, language=language)
        encounter = build_encounter(
            encounter_id=encounter_id,
            patient_id=patient_id,
            timestamp=timestamp,
            language=language,
        )
        medication_requests = build_medication_requests(
            request.medications,
            request_ids=medication_request_ids,
            patient_id=patient_id,
            practitioner_id=practitioner_id,
            authored_on=timestamp,
            language=language,
        )
        care_plan = build_care_plan(
            care_plan_text,
            care_plan_id=care_plan_id,
            patient_id=patient_id,
            practitioner_id=practitioner_id,
            language=language,
        )
        binary = build_binary(binary_id=binary_id, content_type=content_type, data=payload_data, language=language)
        document_reference = build_document_reference(
            document_reference_id=document_reference_id,
            binary=binary,
            patient_id=patient_id,
            timestamp=timestamp,
            language=language,
        )

        sections = compose_sections(
            request.sections,
            section_links(
                medication_request_ids=[r.id for r in medication_requests],
                care_plan_id=care_plan.id if care_plan is not None else None,
                document_reference_id=document_reference.id,
            ),
            language=language,
        )
        composition = build_composition(
            composition_id=composition_id,
            status=request.status.value,
            title=request.title,
            patient_id=patient_id,
            encounter_id=encounter_id,
            practitioner_id=practitioner_id,
            timestamp=timestamp,
            sections=sections,
            language=language,
        )

        resources: List[Resource] = [composition, patient_resource, practitioner_resource, encounter]
        resources.extend(medication_requests)
        if care_plan is not None:
            resources.append(care_plan)
        resources.extend([document_reference, binary])

        bundle = Bundle(
            id=bundle_id,
            meta=meta_for("Bundle", last_updated=timestamp),
            identifier=Identifier(system=BUNDLE_IDENTIFIER_SYSTEM, value=urn(bundle_token)),
            timestamp=timestamp,
            entry=[BundleEntry(full_url=urn(r.id), resource=r) for r in resources],
        )

        logger.debug("Built discharge summary %s with %d entries", bundle_id, len(bundle.entry))
        audit_service.log_event(
            action="build_discharge_summary",
            resource_type="bundle",
            resource_id=bundle_id,
            extra={
                "entry_count": len(bundle.entry),
                "medication_count": len(medication_requests),
                "has_care_plan": care_plan is not None,
                "has_attachment": document is not None,
                "content_type": content_type,
            },
        )
        return bundle

    def build_bundle_json(
        self,
        request: DischargeSummaryRequest,
        *,
        document: Optional[UploadedDocument] = None,
    ) -> dict:
        return self.build(request, document=document).to_fhir()


discharge_summary_service = DischargeSummaryService()
