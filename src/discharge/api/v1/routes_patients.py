from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from src.discharge.domain.models.patient import AbhaOption, PatientCandidate
from src.discharge.security import get_api_key
from src.discharge.services.patients.abha import normalize_abha_addresses


router = APIRouter(
    prefix="/patients",
    tags=["patients"],
    dependencies=[Depends(get_api_key)],
)


@router.post("/abha-addresses", response_model=List[AbhaOption])
async def list_abha_addresses(patient: PatientCandidate) -> List[AbhaOption]:
    """Selectable ABHA addresses for a candidate; the first one is the default."""

    return normalize_abha_addresses(patient)
