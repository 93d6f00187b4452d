from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from src.discharge.domain.models.practitioner import PractitionerProfile
from src.discharge.security import get_api_key
from src.discharge.services.practitioners.roster import practitioner_roster

router = APIRouter(
    prefix="/practitioners",
    tags=["practitioners"],
    dependencies=[Depends(get_api_key)],
)


@router.get("/", response_model=List[PractitionerProfile])
async def list_practitioners() -> List[PractitionerProfile]:
    """The fixed author roster; entries are not editable through the API."""

    return list(practitioner_roster.list())
