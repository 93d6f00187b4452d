from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence

from src.discharge.domain.models.discharge_request import SectionTexts
from src.discharge.domain.models.fhir import (
    CodeableConcept,
    Composition,
    CompositionSection,
    Reference,
)
from src.discharge.domain.terminology import DISCHARGE_SUMMARY, SECTIONS, SectionDefinition, SectionKey
from src.discharge.services.documents.narrative import build_narrative, paragraph, section_narrative
from src.discharge.services.documents.resources import meta_for, reference_to


def _section_text(texts: SectionTexts, key: SectionKey) -> str:
    # Medications and Documents have no free-text field of their own.
    return getattr(texts, key.value, "")


def build_section(
    definition: SectionDefinition,
    *,
    text: str,
    linked_ids: Sequence[str],
    language: str,
) -> CompositionSection:
    """Build one section in either structured or narrative form, never both.

    Links are only honoured for sections that declare a ``link_type``.
    """

    code = CodeableConcept(coding=[definition.coding], text=definition.coding.display)
    if definition.link_type is not None and linked_ids:
        entries: List[Reference] = [reference_to(i, type=definition.link_type) for i in linked_ids]
        return CompositionSection(title=definition.title, code=code, entry=entries)
    narrative_text = text if text and text.strip() else definition.fallback_text
    return CompositionSection(
        title=definition.title,
        code=code,
        text=section_narrative(narrative_text, language=language),
    )


def compose_sections(
    texts: SectionTexts,
    links: Mapping[SectionKey, Sequence[str]],
    *,
    language: str,
) -> List[CompositionSection]:
    """Build the ten Composition sections in their fixed order.

    ``links`` maps a section to the ids of the resources it should reference.
    """

    return [
        build_section(
            definition,
            text=_section_text(texts, definition.key),
            linked_ids=links.get(definition.key, ()),
            language=language,
        )
        for definition in SECTIONS
    ]


def section_links(
    *,
    medication_request_ids: Sequence[str],
    care_plan_id: Optional[str],
    document_reference_id: Optional[str],
) -> Dict[SectionKey, List[str]]:
    links: Dict[SectionKey, List[str]] = {SectionKey.MEDICATIONS: list(medication_request_ids)}
    if care_plan_id is not None:
        links[SectionKey.CARE_PLAN] = [care_plan_id]
    if document_reference_id is not None:
        links[SectionKey.DOCUMENTS] = [document_reference_id]
    return links


def build_composition(
    *,
    composition_id: str,
    status: str,
    title: str,
    patient_id: str,
    encounter_id: str,
    practitioner_id: str,
    timestamp: str,
    sections: List[CompositionSection],
    language: str,
) -> Composition:
    return Composition(
        id=composition_id,
        language=language,
        meta=meta_for("Composition"),
        text=build_narrative("Composition", paragraph(title), language=language),
        status=status,
        type=CodeableConcept(coding=[DISCHARGE_SUMMARY], text=DISCHARGE_SUMMARY.display),
        subject=reference_to(patient_id),
        encounter=reference_to(encounter_id),
        date=timestamp,
        author=[reference_to(practitioner_id)],
        title=title,
        section=sections,
    )
