from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Optional, Tuple

from src.discharge.config import settings
from src.discharge.domain.models.practitioner import PractitionerProfile, Registration
from src.discharge.services.documents.errors import UnknownPractitionerError

logger = logging.getLogger(__name__)


DEFAULT_ROSTER: Tuple[PractitionerProfile, ...] = (
    PractitionerProfile(
        id="prac-1",
        name="Dr. A. Verma",
        qualification="MBBS, MD (Medicine)",
        phone="+91-90000-11111",
        email="dr.verma@example.org",
        registration=Registration(system="https://nmc.org.in", value="NMC-123456"),
    ),
    PractitionerProfile(
        id="prac-2",
        name="Dr. B. Rao",
        qualification="MBBS, MS (Surgery)",
        phone="+91-90000-22222",
        email="dr.rao@example.org",
        registration=Registration(system="https://nmc.org.in", value="NMC-654321"),
    ),
)


class PractitionerRoster:
    """Read-only list of practitioners who may author a discharge summary."""

    def __init__(self, practitioners: Iterable[PractitionerProfile]) -> None:
        self._practitioners: Tuple[PractitionerProfile, ...] = tuple(practitioners)
        if not self._practitioners:
            raise RuntimeError("Practitioner roster is empty; at least one author is required.")

    def list(self) -> Tuple[PractitionerProfile, ...]:
        return self._practitioners

    def resolve(self, practitioner_id: Optional[str]) -> PractitionerProfile:
        """Return the requested practitioner, or the first one when no id is given."""

        if practitioner_id is None:
            return self._practitioners[0]
        for practitioner in self._practitioners:
            if practitioner.id == practitioner_id:
                return practitioner
        raise UnknownPractitionerError(practitioner_id)


def load_roster(path: Optional[Path]) -> PractitionerRoster:
    if path is None:
        return PractitionerRoster(DEFAULT_ROSTER)
    if not path.exists():
        raise RuntimeError(f"PRACTITIONER_ROSTER_PATH '{path}' does not exist.")
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise RuntimeError(f"Practitioner roster '{path}' must contain a JSON list.")
    roster = PractitionerRoster(PractitionerProfile.model_validate(item) for item in raw)
    logger.info("Loaded %d practitioners from %s", len(roster.list()), path)
    return roster


practitioner_roster = load_roster(settings.practitioner_roster_path)
