from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class Registration(BaseModel):
    model_config = ConfigDict(frozen=True)

    system: str
    value: str


class PractitionerProfile(BaseModel):
    """One entry of the fixed author roster. Roster entries are read-only."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    qualification: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    registration: Optional[Registration] = None
