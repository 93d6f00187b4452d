from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict


class PatientCandidate(BaseModel):
    """A patient record as supplied by the external candidate list.

    The shape follows the static ``patients.json`` feed: free-form strings
    (numbers are kept as text), ``dob`` in ``DD-MM-YYYY`` and ABHA addresses
    that may live either at the top level or under ``additional_attributes``.
    Keys we do not use are tolerated and ignored.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: Optional[str] = None
    name: Optional[str] = None
    gender: Optional[str] = None
    dob: Optional[str] = None
    mobile: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    abha_ref: Optional[str] = None
    # Left untyped: a wrong shape here means "no addresses", not a bad request.
    abha_addresses: Optional[Any] = None
    additional_attributes: Optional[Any] = None


class PlainAbhaEntry(BaseModel):
    text: str


class TaggedAbhaEntry(BaseModel):
    address: str
    is_primary: bool = False


class OpaqueAbhaEntry(BaseModel):
    # Any object without an address, carried as its compact JSON text.
    text: str
    is_primary: bool = False


AbhaEntry = Union[PlainAbhaEntry, TaggedAbhaEntry, OpaqueAbhaEntry]


class AbhaOption(BaseModel):
    value: str
    label: str
    primary: bool = False
